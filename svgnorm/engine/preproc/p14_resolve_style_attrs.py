"""P14 — Resolve Style Attributes.

Merge any raw `style` declaration list left on an element into its
attributes (style wins over presentation attributes), then give drawable
elements an explicit value for every fill, stroke and font property.
"""

from __future__ import annotations

import logging

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.registry import Stage, transform
from svgnorm.engine.units import convert_value
from svgnorm.svg.document import SHAPES, ElementId
from svgnorm.svg.parser import parse_attribute, parse_style
from svgnorm.svg.properties import FILL_STROKE_DEFAULTS, FONT_DEFAULTS, PRESENTATION

logger = logging.getLogger(__name__)

_DRAWABLE = SHAPES | {ElementId.PATH, ElementId.TEXT, ElementId.TSPAN, ElementId.TREF}
_TEXT = (ElementId.TEXT, ElementId.TSPAN, ElementId.TREF)


@transform(
    id="P14",
    stage=Stage.SIMPLIFY,
    dependencies=["P13"],
    description="Merge style declarations and make paint properties explicit",
)
def resolve_style_attributes(ctx: PreprocessContext) -> None:
    doc = ctx.document
    for h in doc.elements():
        node = doc.node(h)
        style = node.get("style")
        if isinstance(style, str):
            node.remove_attr("style")
            for aid, text in parse_style(style).items():
                if aid not in PRESENTATION:
                    continue
                value = parse_attribute(node.tag, aid, text, doc.find_by_id)
                if value is None or value == "inherit":
                    ctx.diagnostics.warn(logger, node.label(), "unsupported style value %s: %s", aid, text)
                    continue
                font_size = node.get("font-size")
                if not isinstance(font_size, float):
                    font_size = None
                node.set(aid, convert_value(aid, value, ctx.options.dpi, font_size, ctx.view_box))

        if node.tag not in _DRAWABLE:
            continue
        for aid, default in FILL_STROKE_DEFAULTS.items():
            if aid not in node.attributes:
                node.attributes[aid] = default
        if node.tag in _TEXT:
            for aid, default in FONT_DEFAULTS.items():
                if aid not in node.attributes:
                    node.attributes[aid] = default
