"""P03 — Resolve `currentColor`.

Replace the `currentColor` keyword in paints and stop colors with the value of
the element's own (already inherited) `color` property.
"""

from __future__ import annotations

from dataclasses import replace

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.registry import Stage, transform
from svgnorm.svg.values import BLACK, CURRENT_COLOR, Color, FuncIRI


@transform(
    id="P03",
    stage=Stage.STYLE,
    dependencies=["P02"],
    description="Replace currentColor with the inherited color",
)
def resolve_current_color(ctx: PreprocessContext) -> None:
    doc = ctx.document
    for h in doc.elements():
        node = doc.node(h)
        color = node.get("color")
        if not isinstance(color, Color):
            color = BLACK
        for aid in ("fill", "stroke", "stop-color"):
            value = node.get(aid)
            if value == CURRENT_COLOR:
                node.attributes[aid] = color
            elif isinstance(value, FuncIRI) and value.fallback == CURRENT_COLOR:
                node.attributes[aid] = replace(value, fallback=color)
