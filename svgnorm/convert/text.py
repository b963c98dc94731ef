"""Text elements -> Text chunks and spans.

The text passes left every `text` as a flat list of `tspan` children, each
holding one text node and a full copy of its style; a span with `x`/`y`
starts a new chunk.
"""

from __future__ import annotations

import logging

from svgnorm.convert.context import ConvertContext, choice, local_transform, number
from svgnorm.convert.path import convert_fill, convert_stroke
from svgnorm.models.render_tree import (
    Font,
    Text,
    TextChunk,
    TextDecoration,
    TextDecorationStyle,
    TextSpan,
)
from svgnorm.svg.document import ElementId, Node
from svgnorm.svg.properties import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE
from svgnorm.svg.values import DecorationPaint

logger = logging.getLogger(__name__)


def convert_text(cctx: ConvertContext, handle: int) -> Text | None:
    doc = cctx.document
    text = doc.node(handle)
    chunks: list[TextChunk] = []
    position: tuple[float, float, str] | None = None
    spans: list[TextSpan] = []

    def flush() -> None:
        if position is not None and spans:
            x, y, anchor = position
            chunks.append(TextChunk(x=x, y=y, anchor=anchor, spans=tuple(spans)))

    for h in doc.element_children(handle):
        node = doc.node(h)
        if node.tag != ElementId.TSPAN:
            cctx.diagnostics.warn(logger, node.label(), "unexpected element inside text, skipped")
            continue
        if position is None or node.has("x") or node.has("y"):
            flush()
            spans = []
            position = (
                number(node, "x"),
                number(node, "y"),
                choice(node.get("text-anchor"), ("start", "middle", "end"), "start"),
            )
        span = _convert_span(cctx, node, doc.text_content(h))
        if span is not None:
            spans.append(span)
    flush()

    if not chunks:
        return None
    return Text(id=text.id, transform=local_transform(text), chunks=tuple(chunks))


def _convert_span(cctx: ConvertContext, node: Node, text: str) -> TextSpan | None:
    if not text:
        return None
    return TextSpan(
        text=text,
        font=_font(node),
        fill=convert_fill(cctx, node),
        stroke=convert_stroke(cctx, node),
        decoration=TextDecoration(
            underline=_decoration(cctx, node, "underline"),
            overline=_decoration(cctx, node, "overline"),
            line_through=_decoration(cctx, node, "line-through"),
        ),
    )


def _font(node: Node) -> Font:
    family = node.get("font-family", DEFAULT_FONT_FAMILY)
    return Font(
        family=family if isinstance(family, str) and family else DEFAULT_FONT_FAMILY,
        size=number(node, "font-size", DEFAULT_FONT_SIZE),
        style=str(node.get("font-style", "normal")),
        variant=str(node.get("font-variant", "normal")),
        weight=str(node.get("font-weight", "normal")),
        stretch=str(node.get("font-stretch", "normal")),
    )


def _decoration(cctx: ConvertContext, node: Node, kind: str) -> TextDecorationStyle | None:
    paint = node.get(kind)
    if not isinstance(paint, DecorationPaint):
        return None
    return TextDecorationStyle(
        fill=convert_fill(cctx, node, paint.fill),
        stroke=convert_stroke(cctx, node, paint.stroke),
    )
