"""P08 — Remove Invalid Gradients.

Normalize stop lists (offsets clamped to [0, 1] and non-decreasing) and drop
gradients that cannot be drawn as gradients:

- no stops: paints referring to them use their fallback, or none;
- a single stop or degenerate geometry: paints become the (last) stop color,
  with the stop opacity folded into fill-opacity / stroke-opacity.
"""

from __future__ import annotations

import logging

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.gradients import stops
from svgnorm.engine.registry import Stage, transform
from svgnorm.svg.document import GRADIENTS, ElementId
from svgnorm.svg.values import BLACK, NONE, Color, FuncIRI

logger = logging.getLogger(__name__)


@transform(
    id="P08",
    stage=Stage.REFERENCES,
    dependencies=["P07"],
    description="Drop gradients with fewer than two stops or degenerate geometry",
)
def remove_invalid_gradients(ctx: PreprocessContext) -> None:
    doc = ctx.document
    for h in doc.elements():
        if h not in doc or doc.node(h).tag not in GRADIENTS:
            continue
        stop_list = stops(doc, h)
        normalize_stops(ctx, stop_list)

        if not stop_list:
            ctx.diagnostics.warn(logger, doc.node(h).label(), "gradient has no stops, removed")
            _replace_paint(ctx, h, None)
        elif len(stop_list) == 1 or _is_degenerate(doc.node(h)):
            last = doc.node(stop_list[-1])
            ctx.diagnostics.warn(
                logger, doc.node(h).label(),
                "gradient has a single stop or zero size, replaced by a solid color",
            )
            _replace_paint(ctx, h, (last.get("stop-color"), last.get("stop-opacity")))
        else:
            continue
        doc.remove(h)


def normalize_stops(ctx: PreprocessContext, stop_list: list[int]) -> None:
    prev = 0.0
    for h in stop_list:
        node = ctx.document.node(h)
        offset = node.get("offset", 0.0)
        offset = min(max(offset if isinstance(offset, float) else 0.0, 0.0), 1.0)
        offset = max(offset, prev)
        prev = offset
        node.attributes["offset"] = offset

        if not isinstance(node.get("stop-color"), Color):
            node.attributes["stop-color"] = BLACK
        opacity = node.get("stop-opacity", 1.0)
        node.attributes["stop-opacity"] = min(max(opacity if isinstance(opacity, float) else 1.0, 0.0), 1.0)


def _is_degenerate(node) -> bool:
    if node.tag == ElementId.LINEAR_GRADIENT:
        return node.get("x1") == node.get("x2") and node.get("y1") == node.get("y2")
    return node.get("r", 0.0) <= 0.0


def _replace_paint(ctx: PreprocessContext, gradient: int, solid: tuple[Color, float] | None) -> None:
    doc = ctx.document
    for h in doc.elements():
        node = doc.node(h)
        for aid in ("fill", "stroke"):
            paint = node.get(aid)
            if not isinstance(paint, FuncIRI) or paint.target != gradient:
                continue
            if solid is None:
                node.attributes[aid] = paint.fallback if paint.fallback is not None else NONE
            else:
                color, opacity = solid
                node.attributes[aid] = color
                opacity_aid = f"{aid}-opacity"
                node.set(opacity_aid, node.get(opacity_aid, 1.0) * opacity)
