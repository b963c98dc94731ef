"""P01 — Resolve Document Size.

Derive a concrete width/height for the root `svg` element from its
width/height/viewBox attributes. Without a size nothing can be rendered, so
failure here is fatal.
"""

from __future__ import annotations

import logging

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.registry import Stage, transform
from svgnorm.engine.units import absolute_length
from svgnorm.errors import SizeDeterminationError
from svgnorm.svg.values import Length, Unit, ViewBox

logger = logging.getLogger(__name__)

_FULL = Length(100.0, Unit.PERCENT)


@transform(
    id="P01",
    stage=Stage.SIZE,
    description="Resolve the document width, height and viewBox",
)
def resolve_svg_size(ctx: PreprocessContext) -> None:
    svg = ctx.document.node(ctx.svg)
    view_box = svg.get("viewBox")
    if view_box is not None and (view_box.width <= 0 or view_box.height <= 0):
        ctx.diagnostics.warn(logger, svg.label(), "invalid viewBox %s ignored", tuple(view_box))
        svg.remove_attr("viewBox")
        view_box = None

    width = _resolve(ctx, svg.get("width", _FULL), view_box.width if view_box else None)
    height = _resolve(ctx, svg.get("height", _FULL), view_box.height if view_box else None)
    if width is None or height is None:
        raise SizeDeterminationError(
            "the document size cannot be determined: relative width/height without a viewBox"
        )
    if width <= 0 or height <= 0:
        raise SizeDeterminationError(f"the document size {width}x{height} is not positive")

    svg.set("width", width)
    svg.set("height", height)
    if view_box is None:
        svg.set("viewBox", ViewBox(0.0, 0.0, width, height))


def _resolve(ctx: PreprocessContext, value, basis: float | None) -> float | None:
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, Length):
        return None
    if value.unit is Unit.PERCENT:
        return None if basis is None else basis * value.number / 100.0
    # em/ex on the root use the default font size.
    return absolute_length(value, ctx.options.dpi)
