"""Paths and their paint: fill, stroke and the paint server lookup."""

from __future__ import annotations

import logging

from svgpathtools import Path as SvgPath

from svgnorm.convert.context import ConvertContext, choice, local_transform, number
from svgnorm.models.render_tree import Fill, Paint, PaintLink, Path, Stroke
from svgnorm.svg.document import Node
from svgnorm.svg.values import Color, FuncIRI
from svgnorm.utils.geometry import flatten_path

logger = logging.getLogger(__name__)


def convert_paint(cctx: ConvertContext, node: Node, value) -> Paint | None:
    if isinstance(value, Color):
        return value
    if isinstance(value, FuncIRI):
        ref_id = cctx.ref_ids.get(value.target)
        if ref_id is None:
            cctx.diagnostics.warn(logger, node.label(), "paint server is not available, paint dropped")
            return None
        return PaintLink(id=ref_id)
    return None


def convert_fill(cctx: ConvertContext, node: Node, paint_value=None) -> Fill | None:
    paint = convert_paint(cctx, node, node.get("fill") if paint_value is None else paint_value)
    if paint is None:
        return None
    return Fill(
        paint=paint,
        opacity=min(max(number(node, "fill-opacity", 1.0), 0.0), 1.0),
        rule=choice(node.get("fill-rule"), ("nonzero", "evenodd"), "nonzero"),
    )


def convert_stroke(cctx: ConvertContext, node: Node, paint_value=None) -> Stroke | None:
    paint = convert_paint(cctx, node, node.get("stroke") if paint_value is None else paint_value)
    width = number(node, "stroke-width", 1.0)
    if paint is None or width <= 0:
        return None
    return Stroke(
        paint=paint,
        width=width,
        opacity=min(max(number(node, "stroke-opacity", 1.0), 0.0), 1.0),
        linecap=choice(node.get("stroke-linecap"), ("butt", "round", "square"), "butt"),
        linejoin=choice(node.get("stroke-linejoin"), ("miter", "round", "bevel"), "miter"),
        miterlimit=max(number(node, "stroke-miterlimit", 4.0), 1.0),
        dasharray=_dasharray(node.get("stroke-dasharray")),
        dashoffset=number(node, "stroke-dashoffset"),
    )


def _dasharray(value) -> tuple[float, ...] | None:
    if not isinstance(value, list) or not value:
        return None
    dashes = [float(v) for v in value]
    # A negative value disables dashing, and so does an all-zero list.
    if any(v < 0 for v in dashes) or sum(dashes) == 0:
        return None
    if len(dashes) % 2:
        dashes = dashes * 2
    return tuple(dashes)


def convert_path(cctx: ConvertContext, handle: int, svg_path: SvgPath | None) -> Path | None:
    node = cctx.document.node(handle)
    if svg_path is None or len(svg_path) == 0:
        return None
    geometry = flatten_path(svg_path)
    if len(geometry) < 2:
        return None

    fill = convert_fill(cctx, node)
    stroke = convert_stroke(cctx, node)
    if fill is None and stroke is None:
        return None
    return Path(
        id=node.id,
        transform=local_transform(node),
        geometry=geometry,
        fill=fill,
        stroke=stroke,
    )
