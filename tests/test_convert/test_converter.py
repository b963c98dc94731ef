"""Tests for the render tree produced by convert_doc."""

import pytest
from pydantic import ValidationError

from svgnorm.convert import convert_doc
from svgnorm.engine.pipeline import preprocess
from svgnorm.errors import InvalidSizeError, MissingRootError
from svgnorm.models.path_data import ClosePath, CurveTo, LineTo, MoveTo
from svgnorm.models.render_tree import (
    Group,
    LinearGradient,
    PaintLink,
    Path,
    RenderTree,
    Size,
    Text,
)
from svgnorm.svg.document import Document
from svgnorm.svg.parser import parse_svg
from svgnorm.svg.values import Color, Transform, ViewBox
from tests.conftest import GRADIENT_SVG, SIMPLE_SVG, TEXT_SVG, USE_SVG

XLINK = 'xmlns:xlink="http://www.w3.org/1999/xlink"'


def _svg(body: str) -> str:
    return f'<svg xmlns="http://www.w3.org/2000/svg" {XLINK} width="100" height="100">{body}</svg>'


def _convert(svg_text: str):
    doc = parse_svg(svg_text)
    diagnostics = preprocess(doc)
    return convert_doc(doc, diagnostics=diagnostics), diagnostics


def _types(path: Path) -> list[type]:
    return [type(seg) for seg in path.geometry]


class TestDocument:
    def test_size_and_view_box(self):
        tree, _ = _convert(SIMPLE_SVG)
        assert tree.size == Size(width=200.0, height=100.0)
        assert tree.view_box == ViewBox(0.0, 0.0, 200.0, 100.0)
        assert tree.dpi == 96.0

    def test_size_is_rounded(self):
        tree, _ = _convert('<svg xmlns="http://www.w3.org/2000/svg" width="10.6" height="20.2"/>')
        assert tree.size == Size(width=11.0, height=20.0)
        assert tree.view_box == ViewBox(0.0, 0.0, 10.6, 20.2)

    def test_unprocessed_document_rejected(self):
        with pytest.raises(InvalidSizeError):
            convert_doc(parse_svg(_svg("")))

    def test_empty_document_rejected(self):
        with pytest.raises(MissingRootError):
            convert_doc(Document())

    def test_tree_is_immutable(self):
        tree, _ = _convert(SIMPLE_SVG)
        with pytest.raises(ValidationError):
            tree.dpi = 72.0

    def test_iter_elements_descends_into_groups(self):
        tree, _ = _convert(_svg(
            '<g opacity="0.5"><rect width="5" height="5"/><circle r="2"/></g><rect width="1" height="1"/>'
        ))
        kinds = [e.kind for e in tree.iter_elements()]
        assert kinds == ["group", "path", "path", "path"]


class TestPaths:
    def test_rect(self):
        tree, diagnostics = _convert(SIMPLE_SVG)
        (path,) = tree.elements
        assert isinstance(path, Path)
        assert list(path.geometry) == [
            MoveTo(10.0, 10.0),
            LineTo(110.0, 10.0),
            LineTo(110.0, 60.0),
            LineTo(10.0, 60.0),
            LineTo(10.0, 10.0),
            ClosePath(),
        ]
        assert path.fill.paint == Color(255, 0, 0)
        assert path.fill.rule == "nonzero"
        assert path.stroke is None
        assert not diagnostics

    def test_rounded_rect(self):
        tree, _ = _convert(_svg('<rect width="20" height="10" rx="4"/>'))
        (path,) = tree.elements
        assert path.geometry[0] == MoveTo(4.0, 0.0)
        assert _types(path).count(CurveTo) == 4
        assert isinstance(path.geometry[-1], ClosePath)

    def test_circle(self):
        tree, _ = _convert(_svg('<circle cx="50" cy="50" r="10"/>'))
        (path,) = tree.elements
        assert _types(path) == [MoveTo, CurveTo, CurveTo, CurveTo, CurveTo, ClosePath]
        assert path.geometry[0] == MoveTo(60.0, 50.0)
        end = path.geometry[-2]
        assert (end.x, end.y) == pytest.approx((60.0, 50.0))

    def test_polygon_closed_polyline_open(self):
        tree, _ = _convert(_svg(
            '<polygon points="0,0 10,0 10,10"/>'
            '<polyline points="0,0 10,0 10,10" fill="none" stroke="black"/>'
        ))
        polygon, polyline = tree.elements
        assert _types(polygon) == [MoveTo, LineTo, LineTo, LineTo, ClosePath]
        assert _types(polyline) == [MoveTo, LineTo, LineTo]

    def test_quadratic_curve_becomes_cubic(self):
        tree, _ = _convert(_svg('<path d="M0 0 Q 10 10 20 0"/>'))
        (path,) = tree.elements
        assert isinstance(path.geometry[1], CurveTo)
        assert tuple(path.geometry[1]) == pytest.approx((20 / 3, 20 / 3, 40 / 3, 20 / 3, 20.0, 0.0))

    def test_stroke(self):
        tree, _ = _convert(_svg(
            '<line x2="10" fill="none" stroke="blue" stroke-width="2" stroke-linecap="round" stroke-dasharray="5 10 5"/>'
        ))
        (path,) = tree.elements
        assert path.fill is None
        stroke = path.stroke
        assert stroke.paint == Color(0, 0, 255)
        assert stroke.width == 2.0
        assert stroke.linecap == "round"
        assert stroke.dasharray == (5.0, 10.0, 5.0, 5.0, 10.0, 5.0)

    def test_zero_dash_array_disables_dashing(self):
        tree, _ = _convert(_svg('<line x2="10" stroke="blue" stroke-dasharray="0 0"/>'))
        assert tree.elements[0].stroke.dasharray is None

    def test_transform_kept_on_leaf(self):
        tree, _ = _convert(_svg('<g transform="translate(5 5)"><rect width="5" height="5" transform="scale(2)"/></g>'))
        (path,) = tree.elements
        assert path.transform == Transform(2.0, 0.0, 0.0, 2.0, 5.0, 5.0)

    def test_use_instances(self):
        tree, _ = _convert(USE_SVG)
        first, second = tree.elements
        assert first.fill.paint == Color(255, 0, 0)
        assert second.fill.paint == Color(0, 0, 255)
        assert second.transform == Transform.translate(20.0, 0.0)


class TestGroups:
    def test_opacity_becomes_group(self):
        tree, _ = _convert(_svg('<rect width="5" height="5" opacity="0.5"/>'))
        (group,) = tree.elements
        assert isinstance(group, Group)
        assert group.opacity == 0.5
        (path,) = group.children
        assert isinstance(path, Path)

    def test_unsupported_group_effect_reported(self):
        tree, diagnostics = _convert(_svg(
            '<clipPath id="c"><rect width="5" height="5"/></clipPath>'
            '<g clip-path="url(#c)"><rect width="5" height="5"/></g>'
        ))
        (group,) = tree.elements
        assert len(group.children) == 1
        messages = diagnostics.messages()
        assert any("'clip-path' is not supported" in m for m in messages)
        assert any("referenced element is not supported" in m for m in messages)


class TestGradients:
    def test_gradient_def_and_link(self):
        tree, _ = _convert(GRADIENT_SVG)
        (gradient,) = tree.defs
        assert isinstance(gradient, LinearGradient)
        assert gradient.id == "derived"
        assert (gradient.x1, gradient.y1, gradient.x2, gradient.y2) == (0.0, 0.0, 0.5, 0.0)
        assert [s.offset for s in gradient.stops] == [0.0, 0.5, 1.0]
        assert gradient.stops[0].color == Color(255, 0, 0)
        (path,) = tree.elements
        assert path.fill.paint == PaintLink(id="derived")
        assert tree.find_def("derived") is gradient
        assert tree.find_def("base") is None

    def test_radial_gradient(self):
        tree, _ = _convert(_svg(
            '<radialGradient id="r" spreadMethod="repeat"><stop offset="0"/><stop offset="1" stop-color="red"/></radialGradient>'
            '<circle r="5" fill="url(#r)"/>'
        ))
        (gradient,) = tree.defs
        assert gradient.kind == "radialGradient"
        assert gradient.spread == "repeat"
        assert (gradient.cx, gradient.cy, gradient.r, gradient.fx, gradient.fy) == (0.5, 0.5, 0.5, 0.5, 0.5)

    def test_pattern_paint_dropped(self):
        tree, diagnostics = _convert(_svg(
            '<pattern id="p" width="4" height="4"><rect width="2" height="2"/></pattern>'
            '<rect width="10" height="10" fill="url(#p)" stroke="black"/>'
        ))
        (path,) = tree.elements
        assert path.fill is None
        assert path.stroke is not None
        assert any("paint server is not available" in m for m in diagnostics.messages())
        assert tree.defs == ()


class TestText:
    def test_chunks_and_spans(self):
        tree, _ = _convert(TEXT_SVG)
        (text,) = tree.elements
        assert isinstance(text, Text)
        first, second = text.chunks
        assert (first.x, first.y, first.anchor) == (10.0, 20.0, "start")
        assert [s.text for s in first.spans] == ["Hello ", "big", " world "]
        assert (second.x, second.y) == (10.0, 40.0)
        assert [s.text for s in second.spans] == ["second line"]

    def test_span_style(self):
        tree, _ = _convert(TEXT_SVG)
        big = tree.elements[0].chunks[0].spans[1]
        assert big.fill.paint == Color(255, 0, 0)
        assert big.stroke is None
        assert big.font.size == 10.0
        assert big.font.family == "Times New Roman"

    def test_anchor_and_decoration(self):
        tree, _ = _convert(_svg('<text x="50" y="50" text-anchor="middle" fill="green" text-decoration="underline">a</text>'))
        (chunk,) = tree.elements[0].chunks
        assert chunk.anchor == "middle"
        (span,) = chunk.spans
        assert span.decoration.underline.fill.paint == Color(0, 128, 0)
        assert span.decoration.overline is None


def test_model_validation():
    with pytest.raises(ValidationError):
        RenderTree(size=Size(width=1.0, height=1.0), view_box=ViewBox(0.0, 0.0, 1.0, 1.0), dpi=0.0)
