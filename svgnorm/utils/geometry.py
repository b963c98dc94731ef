"""Leaf-node geometry helpers: transform composition and path flattening."""

from __future__ import annotations

import logging
import math

import numpy as np
from svgpathtools import Arc, CubicBezier, Line, QuadraticBezier
from svgpathtools import Path as SvgPath

from svgnorm.engine.context import Diagnostics
from svgnorm.models.path_data import ClosePath, CurveTo, LineTo, MoveTo, PathData
from svgnorm.svg.document import Document, Node
from svgnorm.svg.values import IDENTITY, Transform

logger = logging.getLogger(__name__)

# Points closer than this are the same point.
_EPSILON = 1e-9


def push_transform(doc: Document, handle: int, diagnostics: Diagnostics) -> None:
    """Premultiply the transform of ``handle`` into its element children and clear it.

    A transform that failed to parse counts as identity and is reported.
    """
    node = doc.node(handle)
    ts = _parsed_transform(node, diagnostics)
    node.remove_attr("transform")
    if ts.is_identity():
        return
    for child in doc.element_children(handle):
        child_node = doc.node(child)
        child_node.set("transform", ts.multiply(_parsed_transform(child_node, diagnostics)))


def _parsed_transform(node: Node, diagnostics: Diagnostics) -> Transform:
    ts = node.get("transform", IDENTITY)
    if isinstance(ts, Transform):
        return ts
    diagnostics.warn(logger, node.label(), "invalid transform %r removed", ts)
    node.remove_attr("transform")
    return IDENTITY


def _pt(z: complex) -> tuple[float, float]:
    return (float(z.real), float(z.imag))


def _same(a: complex, b: complex) -> bool:
    return abs(a - b) < _EPSILON


def arc_to_cubics(arc: Arc) -> list[CurveTo]:
    """Approximate an elliptical arc with cubic curves of at most 90 degrees each."""
    segments = max(1, int(math.ceil(abs(arc.delta) / 90.0 - 1e-9)))
    step = math.radians(arc.delta) / segments
    theta = math.radians(arc.theta)
    rx, ry = arc.radius.real, arc.radius.imag
    rot = np.exp(1j * math.radians(arc.rotation))
    # Tangent length for a unit circle arc of angle `step`.
    k = 4.0 / 3.0 * math.tan(step / 4.0)

    def point(t: float) -> complex:
        return arc.center + rot * complex(rx * math.cos(t), ry * math.sin(t))

    def derivative(t: float) -> complex:
        return rot * complex(-rx * math.sin(t), ry * math.cos(t))

    curves = []
    for i in range(segments):
        t0 = theta + i * step
        t1 = t0 + step
        p0, p3 = point(t0), point(t1)
        c1 = p0 + k * derivative(t0)
        c2 = p3 - k * derivative(t1)
        if i == segments - 1:
            p3 = arc.end
        curves.append(CurveTo(*_pt(c1), *_pt(c2), *_pt(p3)))
    return curves


def flatten_path(path: SvgPath) -> PathData:
    """Convert an svgpathtools path into absolute M/L/C/Z segments.

    Quadratic curves and arcs become cubic curves. A subpath ending on its
    start point is closed.
    """
    result: list = []
    subpath_start: complex | None = None
    pen: complex | None = None

    for seg in path:
        if pen is None or not _same(seg.start, pen):
            _close_if_returned(result, subpath_start, pen)
            result.append(MoveTo(*_pt(seg.start)))
            subpath_start = seg.start

        if isinstance(seg, Line):
            result.append(LineTo(*_pt(seg.end)))
        elif isinstance(seg, CubicBezier):
            result.append(CurveTo(*_pt(seg.control1), *_pt(seg.control2), *_pt(seg.end)))
        elif isinstance(seg, QuadraticBezier):
            c1 = seg.start + 2.0 / 3.0 * (seg.control - seg.start)
            c2 = seg.end + 2.0 / 3.0 * (seg.control - seg.end)
            result.append(CurveTo(*_pt(c1), *_pt(c2), *_pt(seg.end)))
        elif isinstance(seg, Arc):
            if seg.radius.real == 0 or seg.radius.imag == 0 or _same(seg.start, seg.end):
                result.append(LineTo(*_pt(seg.end)))
            else:
                result.extend(arc_to_cubics(seg))
        pen = seg.end

    _close_if_returned(result, subpath_start, pen)
    return PathData(result)


def _close_if_returned(result: list, start: complex | None, pen: complex | None) -> None:
    if start is None or pen is None or not result:
        return
    if isinstance(result[-1], MoveTo):
        return
    if _same(start, pen):
        result.append(ClosePath())


def path_is_empty(path: SvgPath) -> bool:
    """True when the path has no segment that moves the pen."""
    return all(_same(seg.start, seg.end) and isinstance(seg, Line) for seg in path)
