"""Converter — builds the immutable render tree from a preprocessed document.

Runs in two passes: referenced nodes first, so paints can point at the
converted defs by id, then the rendered tree in document order.
"""

from __future__ import annotations

import logging

from svgnorm.convert.context import ConvertContext, local_transform, number
from svgnorm.convert.gradient import convert_gradient
from svgnorm.convert.image import convert_image
from svgnorm.convert.path import convert_path
from svgnorm.convert.shapes import shape_to_path
from svgnorm.convert.text import convert_text
from svgnorm.engine.config import Options
from svgnorm.engine.context import Diagnostics
from svgnorm.errors import InvalidSizeError, MissingRootError
from svgnorm.models.render_tree import Element, Group, RefElement, RenderTree, Size
from svgnorm.svg.document import GRADIENTS, SHAPES, Document, ElementId
from svgnorm.svg.values import ViewBox

logger = logging.getLogger(__name__)

# Elements without rendering of their own.
_SILENT = {
    ElementId.TITLE,
    ElementId.DESC,
    ElementId.METADATA,
    ElementId.DEFS,
    ElementId.STYLE,
}


def convert_doc(
    doc: Document,
    options: Options | None = None,
    diagnostics: Diagnostics | None = None,
) -> RenderTree:
    """Convert a preprocessed document. Raises ``InvalidSizeError`` when the
    root has no resolved size."""
    svg = doc.svg_element()
    if svg is None:
        raise MissingRootError()
    root = doc.node(svg)
    width, height, view_box = root.get("width"), root.get("height"), root.get("viewBox")
    if not isinstance(width, float) or not isinstance(height, float) or not isinstance(view_box, ViewBox):
        raise InvalidSizeError()

    cctx = ConvertContext(
        document=doc,
        options=options or Options(),
        diagnostics=diagnostics if diagnostics is not None else Diagnostics(),
    )
    defs = convert_ref_nodes(cctx)
    elements = convert_nodes(cctx, svg)
    tree = RenderTree(
        size=Size(width=float(round(width)), height=float(round(height))),
        view_box=view_box,
        dpi=cctx.options.dpi,
        elements=tuple(elements),
        defs=tuple(defs),
    )
    logger.info("Converted document: %d elements, %d defs", len(elements), len(defs))
    return tree


def convert_ref_nodes(cctx: ConvertContext) -> list[RefElement]:
    """Convert every used referenced node; record their ids in ``cctx.ref_ids``."""
    doc = cctx.document
    live = doc.live_references()
    result = []
    for h in doc.elements():
        if h not in live or not doc.is_referenced(h):
            continue
        node = doc.node(h)
        if node.tag not in GRADIENTS:
            cctx.diagnostics.warn(logger, node.label(), "referenced element is not supported, skipped")
            continue
        gradient = convert_gradient(cctx, h)
        if gradient is not None:
            cctx.ref_ids[h] = gradient.id
            result.append(gradient)
    return result


def convert_nodes(cctx: ConvertContext, parent: int) -> list[Element]:
    """Convert the rendered children of ``parent``, in order."""
    doc = cctx.document
    result: list[Element] = []
    for h in doc.element_children(parent):
        if doc.is_referenced(h):
            continue
        node = doc.node(h)
        tag = node.tag
        element: Element | None = None

        if tag in _SILENT:
            continue
        if tag == ElementId.G:
            for aid in ("clip-path", "mask", "filter"):
                if node.has(aid):
                    cctx.diagnostics.warn(logger, node.label(), "'%s' is not supported, ignored", aid)
            element = Group(
                id=node.id,
                transform=local_transform(node),
                opacity=min(max(number(node, "opacity", 1.0), 0.0), 1.0),
                children=tuple(convert_nodes(cctx, h)),
            )
        elif tag in SHAPES:
            element = convert_path(cctx, h, shape_to_path(node))
        elif tag == ElementId.PATH:
            element = convert_path(cctx, h, node.get("d"))
        elif tag == ElementId.TEXT:
            element = convert_text(cctx, h)
        elif tag == ElementId.IMAGE:
            element = convert_image(cctx, h)
        else:
            cctx.diagnostics.warn(logger, node.label(), "unsupported element, skipped")
            continue

        if element is not None:
            result.append(element)
    return result
