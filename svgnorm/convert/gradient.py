"""Gradient defs -> LinearGradient / RadialGradient."""

from __future__ import annotations

import logging

from svgnorm.convert.context import ConvertContext, choice, number
from svgnorm.engine.gradients import OBJECT_BOUNDING_BOX, USER_SPACE_ON_USE, stops
from svgnorm.models.render_tree import LinearGradient, RadialGradient, Stop
from svgnorm.svg.document import ElementId
from svgnorm.svg.values import BLACK, IDENTITY, Color, Transform

logger = logging.getLogger(__name__)


def convert_gradient(cctx: ConvertContext, handle: int) -> LinearGradient | RadialGradient | None:
    doc = cctx.document
    node = doc.node(handle)
    stop_list = convert_stops(cctx, handle)
    if len(stop_list) < 2:
        cctx.diagnostics.warn(logger, node.label(), "gradient has fewer than two stops, skipped")
        return None

    ts = node.get("gradientTransform", IDENTITY)
    common = dict(
        id=node.id or f"gradient{handle}",
        units=choice(node.get("gradientUnits"), (OBJECT_BOUNDING_BOX, USER_SPACE_ON_USE), OBJECT_BOUNDING_BOX),
        spread=choice(node.get("spreadMethod"), ("pad", "reflect", "repeat"), "pad"),
        transform=ts if isinstance(ts, Transform) else IDENTITY,
        stops=tuple(stop_list),
    )

    if node.tag == ElementId.LINEAR_GRADIENT:
        return LinearGradient(
            x1=number(node, "x1"),
            y1=number(node, "y1"),
            x2=number(node, "x2", 1.0),
            y2=number(node, "y2"),
            **common,
        )
    cx = number(node, "cx", 0.5)
    cy = number(node, "cy", 0.5)
    return RadialGradient(
        cx=cx,
        cy=cy,
        r=number(node, "r", 0.5),
        fx=number(node, "fx", cx),
        fy=number(node, "fy", cy),
        **common,
    )


def convert_stops(cctx: ConvertContext, handle: int) -> list[Stop]:
    """Stops with offsets clamped to [0, 1] and made non-decreasing."""
    result = []
    prev = 0.0
    for h in stops(cctx.document, handle):
        node = cctx.document.node(h)
        offset = max(min(max(number(node, "offset"), 0.0), 1.0), prev)
        prev = offset
        color = node.get("stop-color")
        result.append(Stop(
            offset=offset,
            color=color if isinstance(color, Color) else BLACK,
            opacity=min(max(number(node, "stop-opacity", 1.0), 0.0), 1.0),
        ))
    return result
