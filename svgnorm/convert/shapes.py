"""Basic shapes -> svgpathtools paths.

Each converter returns an svgpathtools ``Path`` in the element's own user
space, or None when the shape has nothing to draw.
"""

from __future__ import annotations

from svgpathtools import Arc, Line
from svgpathtools import Path as SvgPath

from svgnorm.convert.context import number
from svgnorm.svg.document import ElementId, Node


def rect_to_path(node: Node) -> SvgPath | None:
    x, y = number(node, "x"), number(node, "y")
    w, h = number(node, "width"), number(node, "height")
    if w <= 0 or h <= 0:
        return None

    rx = node.get("rx")
    ry = node.get("ry")
    # A missing radius takes the value of the other one.
    if not isinstance(rx, float) or rx < 0:
        rx = ry if isinstance(ry, float) and ry > 0 else 0.0
    if not isinstance(ry, float) or ry < 0:
        ry = rx
    rx = min(rx, w / 2.0)
    ry = min(ry, h / 2.0)

    if rx <= 0 or ry <= 0:
        return _polyline([complex(x, y), complex(x + w, y), complex(x + w, y + h), complex(x, y + h)], True)

    radius = complex(rx, ry)
    left, right, top, bottom = x, x + w, y, y + h
    corners = [
        (complex(left + rx, top), complex(right - rx, top), complex(right, top + ry)),
        (complex(right, top + ry), complex(right, bottom - ry), complex(right - rx, bottom)),
        (complex(right - rx, bottom), complex(left + rx, bottom), complex(left, bottom - ry)),
        (complex(left, bottom - ry), complex(left, top + ry), complex(left + rx, top)),
    ]
    segments = []
    for start, end, arc_end in corners:
        if start != end:
            segments.append(Line(start, end))
        segments.append(Arc(end, radius, 0.0, False, True, arc_end))
    return SvgPath(*segments)


def ellipse_to_path(cx: float, cy: float, rx: float, ry: float) -> SvgPath | None:
    if rx <= 0 or ry <= 0:
        return None
    radius = complex(rx, ry)
    points = [
        complex(cx + rx, cy),
        complex(cx, cy + ry),
        complex(cx - rx, cy),
        complex(cx, cy - ry),
    ]
    return SvgPath(*(
        Arc(points[i], radius, 0.0, False, True, points[(i + 1) % 4])
        for i in range(4)
    ))


def line_to_path(node: Node) -> SvgPath | None:
    start = complex(number(node, "x1"), number(node, "y1"))
    end = complex(number(node, "x2"), number(node, "y2"))
    if start == end:
        return None
    return SvgPath(Line(start, end))


def points_to_path(node: Node) -> SvgPath | None:
    points = [complex(x, y) for x, y in node.get("points", [])]
    if len(points) < 2:
        return None
    return _polyline(points, node.tag == ElementId.POLYGON)


def _polyline(points: list[complex], closed: bool) -> SvgPath:
    if closed:
        points = points + [points[0]]
    return SvgPath(*(Line(a, b) for a, b in zip(points, points[1:]) if a != b))


def shape_to_path(node: Node) -> SvgPath | None:
    tag = node.tag
    if tag == ElementId.RECT:
        return rect_to_path(node)
    if tag == ElementId.CIRCLE:
        r = number(node, "r")
        return ellipse_to_path(number(node, "cx"), number(node, "cy"), r, r)
    if tag == ElementId.ELLIPSE:
        return ellipse_to_path(
            number(node, "cx"), number(node, "cy"), number(node, "rx"), number(node, "ry")
        )
    if tag == ElementId.LINE:
        return line_to_path(node)
    if tag in (ElementId.POLYLINE, ElementId.POLYGON):
        return points_to_path(node)
    return None
