"""P12 — Prepare Text Decoration.

A decoration declared on a `text` or `tspan` applies to every descendant span,
but is painted with the fill and stroke of the element that declared it.
Capture that paint on each span now, before spans get flattened.
"""

from __future__ import annotations

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.registry import Stage, transform
from svgnorm.svg.document import ElementId
from svgnorm.svg.properties import TEXT_DECORATIONS
from svgnorm.svg.values import BLACK, NONE, DecorationPaint

_TEXT_ELEMENTS = (ElementId.TEXT, ElementId.TSPAN, ElementId.TREF)


@transform(
    id="P12",
    stage=Stage.SIMPLIFY,
    dependencies=["P11"],
    description="Capture the paint of text decorations",
)
def prepare_text_decoration(ctx: PreprocessContext) -> None:
    doc = ctx.document
    for text in doc.elements(ElementId.TEXT):
        declared: list[int] = []
        for h in doc.descendants(text):
            node = doc.node(h)
            if node.tag not in _TEXT_ELEMENTS:
                continue
            for kind in TEXT_DECORATIONS:
                source = _declaring_element(doc, h, text, kind)
                if source is not None:
                    src = doc.node(source)
                    node.set(kind, DecorationPaint(src.get("fill", BLACK), src.get("stroke", NONE)))
            if node.has("text-decoration"):
                declared.append(h)
        for h in declared:
            doc.node(h).remove_attr("text-decoration")


def _declaring_element(doc, handle: int, text: int, kind: str) -> int | None:
    for h in (handle, *doc.ancestors(handle)):
        value = doc.node(h).get("text-decoration", "")
        if isinstance(value, str) and kind in value.split():
            return h
        if h == text:
            break
    return None
