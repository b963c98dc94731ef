"""P04 — Resolve Font Size.

Compute an absolute font size for every element, top-down. Relative sizes
(em, ex, %, larger, smaller) refer to the parent's computed size, so they are
resolved here rather than copied by the inheritance pass.
"""

from __future__ import annotations

import logging

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.registry import Stage, transform
from svgnorm.engine.style import parent_element
from svgnorm.engine.units import absolute_length
from svgnorm.svg.properties import DEFAULT_FONT_SIZE, FONT_SCALE, FONT_SIZE_KEYWORDS
from svgnorm.svg.values import Length, Unit

logger = logging.getLogger(__name__)


@transform(
    id="P04",
    stage=Stage.STYLE,
    dependencies=["P03"],
    description="Compute absolute font sizes",
)
def resolve_font_size(ctx: PreprocessContext) -> None:
    doc = ctx.document
    for h in doc.elements():
        node = doc.node(h)
        parent = parent_element(doc, h)
        parent_size = doc.node(parent).get("font-size", DEFAULT_FONT_SIZE) if parent is not None \
            else DEFAULT_FONT_SIZE

        value = node.get("font-size")
        if value is None or value == "inherit":
            node.attributes["font-size"] = parent_size
            node.inherited.add("font-size")
            continue
        if isinstance(value, (int, float)):
            continue

        size = _compute(value, parent_size, ctx.options.dpi)
        if size is None:
            ctx.diagnostics.warn(logger, node.label(), "invalid font-size %r, inherited instead", value)
            size = parent_size
        node.set("font-size", size)


def _compute(value, parent_size: float, dpi: float) -> float | None:
    if isinstance(value, Length):
        if value.unit is Unit.PERCENT:
            return parent_size * value.number / 100.0
        return absolute_length(value, dpi, font_size=parent_size)
    if value in FONT_SIZE_KEYWORDS:
        return DEFAULT_FONT_SIZE * FONT_SCALE ** FONT_SIZE_KEYWORDS[value]
    if value == "larger":
        return parent_size * FONT_SCALE
    if value == "smaller":
        return parent_size / FONT_SCALE
    return None
