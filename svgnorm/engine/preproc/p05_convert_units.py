"""P05 — Convert Units.

Normalize every length to user units. Percentages refer to the root viewBox
(width, height or normalized diagonal depending on the attribute), or are
fractions inside `objectBoundingBox` gradients and for stop offsets.
"""

from __future__ import annotations

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.gradients import OBJECT_BOUNDING_BOX, effective_units
from svgnorm.engine.registry import Stage, transform
from svgnorm.engine.units import convert_value
from svgnorm.svg.document import GRADIENTS


@transform(
    id="P05",
    stage=Stage.STYLE,
    dependencies=["P04"],
    description="Convert all lengths to user units",
)
def convert_units(ctx: PreprocessContext) -> None:
    doc = ctx.document
    for h in doc.elements():
        node = doc.node(h)
        view_box = ctx.view_box
        if node.tag in GRADIENTS and \
                effective_units(doc, h, ctx.options.max_reference_depth) == OBJECT_BOUNDING_BOX:
            view_box = None

        font_size = node.get("font-size")
        for aid, value in list(node.attributes.items()):
            node.attributes[aid] = convert_value(aid, value, ctx.options.dpi, font_size, view_box)
