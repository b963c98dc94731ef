"""P18 — Remove Invisible Elements.

Drop everything that cannot produce a single pixel:

- hidden elements and elements with zero opacity;
- shapes with zero area or length, and paths without drawing segments;
- shapes and paths painted with neither fill nor stroke;
- text without characters.

Groups emptied by the removal are removed too. Referenced subtrees are left
alone: a `clipPath` child, for example, is never painted itself.
"""

from __future__ import annotations

import logging

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.registry import Stage, transform
from svgnorm.svg.document import SHAPES, Document, ElementId, Node
from svgnorm.svg.values import NONE
from svgnorm.utils.geometry import path_is_empty

logger = logging.getLogger(__name__)

_PAINTED = SHAPES | {ElementId.PATH}
# Elements that draw something by themselves. Visibility is inherited, so on
# containers it only says something about the children.
_LEAVES = _PAINTED | {ElementId.IMAGE, ElementId.TSPAN}


@transform(
    id="P18",
    stage=Stage.SIMPLIFY,
    dependencies=["P17"],
    description="Remove elements that render nothing",
)
def rm_invisible_elements(ctx: PreprocessContext) -> None:
    doc = ctx.document
    removed = 0
    for h in doc.elements():
        if h not in doc or h == ctx.svg or doc.in_referenced_subtree(h):
            continue
        node = doc.node(h)
        if _is_invisible(doc, h, node):
            logger.debug("Removing invisible %s", node.label())
            doc.remove(h)
            removed += 1

    removed += _remove_empty_groups(ctx)
    if removed:
        logger.info("Removed %d invisible elements", removed)
        doc.prune_unused_references()


def _is_invisible(doc: Document, h: int, node: Node) -> bool:
    if node.get("opacity", 1.0) <= 0:
        return True
    if node.tag in _LEAVES and node.get("visibility", "visible") != "visible":
        return True
    if node.tag == ElementId.TEXT:
        return not doc.text_content(h).strip()
    if node.tag in _PAINTED and not _has_paint(node):
        return True
    return _has_no_geometry(node)


def _has_paint(node: Node) -> bool:
    fill = node.get("fill", NONE) != NONE and node.get("fill-opacity", 1.0) > 0
    stroke = (
        node.get("stroke", NONE) != NONE
        and node.get("stroke-opacity", 1.0) > 0
        and node.get("stroke-width", 1.0) > 0
    )
    return fill or stroke


def _has_no_geometry(node: Node) -> bool:
    tag = node.tag
    if tag in (ElementId.RECT, ElementId.IMAGE):
        # An image without a size is reported by the converter.
        default = 0.0 if tag == ElementId.RECT else 1.0
        return node.get("width", default) <= 0 or node.get("height", default) <= 0
    if tag == ElementId.CIRCLE:
        return node.get("r", 0.0) <= 0
    if tag == ElementId.ELLIPSE:
        return node.get("rx", 0.0) <= 0 or node.get("ry", 0.0) <= 0
    if tag == ElementId.LINE:
        return (node.get("x1", 0.0), node.get("y1", 0.0)) == (node.get("x2", 0.0), node.get("y2", 0.0))
    if tag in (ElementId.POLYLINE, ElementId.POLYGON):
        return len(node.get("points", [])) < 2
    if tag == ElementId.PATH:
        d = node.get("d")
        return d is None or path_is_empty(d)
    return False


def _remove_empty_groups(ctx: PreprocessContext) -> int:
    doc = ctx.document
    removed = 0
    # Reverse document order visits children before their parents.
    for h in reversed(doc.elements(ElementId.G)):
        if h not in doc or doc.in_referenced_subtree(h):
            continue
        if not doc.element_children(h):
            doc.remove(h)
            removed += 1
    return removed
