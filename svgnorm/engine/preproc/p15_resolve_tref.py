"""P15 — Resolve `tref`.

A `tref` renders the character data of the element it points at. Turn it into
a plain `tspan` holding that text so later text passes see one element kind.
"""

from __future__ import annotations

import logging

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.registry import Stage, transform
from svgnorm.svg.document import Document, ElementId
from svgnorm.svg.values import Link

logger = logging.getLogger(__name__)


@transform(
    id="P15",
    stage=Stage.SIMPLIFY,
    dependencies=["P14"],
    description="Replace tref elements with tspans holding the referenced text",
)
def resolve_tref(ctx: PreprocessContext) -> None:
    doc = ctx.document
    for h in doc.elements(ElementId.TREF):
        if h not in doc:
            continue
        node = doc.node(h)
        text = _referenced_text(ctx, h, frozenset())
        for child in doc.children(h):
            doc.remove(child)
        node.remove_attr("href")
        node.tag = ElementId.TSPAN
        if text:
            doc.append(h, doc.create_text(text))

    doc.prune_unused_references()


def _referenced_text(ctx: PreprocessContext, tref: int, visiting: frozenset[int]) -> str:
    doc = ctx.document
    node = doc.node(tref)
    link = node.get("href")
    if not isinstance(link, Link) or link.target not in doc:
        ctx.diagnostics.warn(logger, node.label(), "'tref' references nothing")
        return ""
    if link.target in visiting or doc.is_descendant(tref, link.target):
        ctx.diagnostics.warn(logger, node.label(), "recursive 'tref' ignored")
        return ""
    if len(visiting) >= ctx.options.max_reference_depth:
        ctx.diagnostics.warn(logger, node.label(), "'tref' nesting is too deep")
        return ""
    return _text_of(ctx, doc, link.target, visiting | {link.target})


def _text_of(ctx: PreprocessContext, doc: Document, handle: int, visiting: frozenset[int]) -> str:
    node = doc.node(handle)
    if node.is_text:
        return node.text or ""
    if node.tag == ElementId.TREF and node.has("href"):
        return _referenced_text(ctx, handle, visiting)
    return "".join(_text_of(ctx, doc, child, visiting) for child in node.children)
