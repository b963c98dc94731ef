"""Attribute inheritance helpers shared by the inheritance and `use` passes."""

from __future__ import annotations

from svgnorm.svg.document import Document
from svgnorm.svg.properties import INHERITABLE


def parent_element(doc: Document, handle: int) -> int | None:
    parent = doc.parent(handle)
    while parent is not None and not doc.node(parent).is_element:
        parent = doc.parent(parent)
    return parent


def resolve_node(doc: Document, handle: int, with_font_size: bool = False) -> None:
    """Resolve `inherit` keywords on one element and copy unset inheritable values
    from its (already resolved) parent.

    ``font-size`` is copied only when ``with_font_size`` is set, that is once
    every font size has been computed to an absolute number.
    """
    node = doc.node(handle)
    parent_h = parent_element(doc, handle)
    parent = doc.node(parent_h) if parent_h is not None else None

    for aid, value in list(node.attributes.items()):
        if value != "inherit" or aid == "font-size":
            continue
        if parent is not None and aid in parent.attributes:
            node.attributes[aid] = parent.attributes[aid]
            node.inherited.add(aid)
        else:
            node.remove_attr(aid)

    if parent is None:
        return
    names = INHERITABLE | {"font-size"} if with_font_size else INHERITABLE
    for aid in names:
        if aid not in node.attributes and aid in parent.attributes:
            node.attributes[aid] = parent.attributes[aid]
            node.inherited.add(aid)


def resolve_subtree(
    doc: Document,
    handle: int,
    include_self: bool = True,
    with_font_size: bool = False,
) -> None:
    for h in doc.descendants(handle, include_self=include_self):
        if doc.node(h).is_element:
            resolve_node(doc, h, with_font_size)


def forget_inherited(doc: Document, handle: int) -> None:
    """Drop every inherited value in a subtree, leaving locally-set ones."""
    for h in doc.descendants(handle):
        node = doc.node(h)
        for aid in list(node.inherited):
            node.attributes.pop(aid, None)
        node.inherited.clear()
