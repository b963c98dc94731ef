"""Tests for the REFERENCES passes: gradients, unused defs and `use` (P06-P10)."""

from svgnorm.engine.gradients import stops
from svgnorm.svg.document import ElementId
from svgnorm.svg.values import NONE, Color, FuncIRI, Transform
from tests.conftest import GRADIENT_SVG, USE_CYCLE_SVG, USE_SVG, only, preprocessed

XLINK = 'xmlns:xlink="http://www.w3.org/1999/xlink"'


def _svg(body: str) -> str:
    return f'<svg xmlns="http://www.w3.org/2000/svg" {XLINK} width="100" height="100">{body}</svg>'


# ---------------------------------------------------------------------------
# Gradients (P06-P08)
# ---------------------------------------------------------------------------

class TestGradients:
    def test_stopless_gradient_takes_linked_stops(self):
        doc, _ = preprocessed(GRADIENT_SVG)
        derived = doc.find_by_id("derived")
        offsets = [doc.node(s).get("offset") for s in stops(doc, derived)]
        assert offsets == [0.0, 0.5, 1.0]
        assert not doc.node(derived).has("href")

    def test_linked_and_unused_gradients_pruned(self):
        doc, _ = preprocessed(GRADIENT_SVG)
        assert doc.find_by_id("base") is None
        assert doc.find_by_id("unused") is None

    def test_attributes_and_defaults(self):
        doc, _ = preprocessed(GRADIENT_SVG)
        node = doc.node(doc.find_by_id("derived"))
        assert node.get("x2") == 0.5
        assert (node.get("x1"), node.get("y1"), node.get("y2")) == (0.0, 0.0, 0.0)
        assert node.get("gradientUnits") == "objectBoundingBox"
        assert node.get("spreadMethod") == "pad"

    def test_attributes_inherited_through_chain(self):
        doc, _ = preprocessed(_svg(
            '<radialGradient id="a" gradientUnits="userSpaceOnUse" r="30" spreadMethod="reflect">'
            '<stop offset="0"/><stop offset="1" stop-color="red"/></radialGradient>'
            '<radialGradient id="b" xlink:href="#a" cx="40"/>'
            '<rect width="10" height="10" fill="url(#b)"/>'
        ))
        b = doc.node(doc.find_by_id("b"))
        assert b.get("gradientUnits") == "userSpaceOnUse"
        assert b.get("spreadMethod") == "reflect"
        assert b.get("r") == 30.0
        assert b.get("cx") == 40.0
        # fx/fy default to the center
        assert b.get("fx") == 40.0
        assert b.get("fy") == 50.0

    def test_stop_offsets_made_monotonic(self):
        doc, _ = preprocessed(_svg(
            '<linearGradient id="g"><stop offset="0.8"/><stop offset="0.2"/><stop offset="150%"/></linearGradient>'
            '<rect width="10" height="10" fill="url(#g)"/>'
        ))
        offsets = [doc.node(s).get("offset") for s in stops(doc, doc.find_by_id("g"))]
        assert offsets == [0.8, 0.8, 1.0]

    def test_single_stop_becomes_solid_color(self):
        doc, diagnostics = preprocessed(_svg(
            '<linearGradient id="g"><stop offset="0" stop-color="green" stop-opacity="0.5"/></linearGradient>'
            '<rect width="10" height="10" fill="url(#g)" fill-opacity="0.5"/>'
        ))
        rect = doc.node(only(doc, ElementId.RECT))
        assert rect.get("fill") == Color(0, 128, 0)
        assert rect.get("fill-opacity") == 0.25
        assert doc.find_by_id("g") is None
        assert diagnostics

    def test_degenerate_gradient_becomes_solid_color(self):
        doc, _ = preprocessed(_svg(
            '<linearGradient id="g" x1="0" x2="0"><stop offset="0" stop-color="red"/>'
            '<stop offset="1" stop-color="blue"/></linearGradient>'
            '<rect width="10" height="10" stroke="url(#g)" fill="none"/>'
        ))
        rect = doc.node(only(doc, ElementId.RECT))
        assert rect.get("stroke") == Color(0, 0, 255)

    def test_stopless_gradient_uses_fallback(self):
        doc, _ = preprocessed(_svg(
            '<linearGradient id="g"/>'
            '<rect width="10" height="10" fill="url(#g) red"/>'
        ))
        assert doc.node(only(doc, ElementId.RECT)).get("fill") == Color(255, 0, 0)

    def test_recursive_gradient_chain(self):
        doc, diagnostics = preprocessed(_svg(
            '<linearGradient id="g1" xlink:href="#g2"/>'
            '<linearGradient id="g2" xlink:href="#g1"/>'
            '<rect width="10" height="10" fill="url(#g1)" stroke="black"/>'
        ))
        rect = doc.node(only(doc, ElementId.RECT))
        assert rect.get("fill") == NONE
        assert not doc.elements(ElementId.LINEAR_GRADIENT)
        assert any("recursive" in m for m in diagnostics.messages())


# ---------------------------------------------------------------------------
# use (P10)
# ---------------------------------------------------------------------------

class TestUse:
    def test_instances_get_their_own_fill(self):
        doc, _ = preprocessed(USE_SVG)
        paths = [doc.node(h) for h in doc.elements(ElementId.PATH)]
        assert [p.get("fill") for p in paths] == [Color(255, 0, 0), Color(0, 0, 255)]

    def test_offset_becomes_translation(self):
        doc, _ = preprocessed(USE_SVG)
        first, second = (doc.node(h) for h in doc.elements(ElementId.PATH))
        assert first.get("transform") is None
        assert second.get("transform") == Transform.translate(20.0, 0.0)

    def test_definition_removed_once_instantiated(self):
        doc, _ = preprocessed(USE_SVG)
        assert doc.find_by_id("shape") is None
        assert not doc.elements(ElementId.USE)

    def test_rendered_target_is_untouched(self):
        doc, _ = preprocessed(_svg(
            '<path id="p" d="M0 0 L10 0 L10 10 Z" fill="green"/>'
            '<use xlink:href="#p" fill="red" x="50"/>'
        ))
        original = doc.node(doc.find_by_id("p"))
        assert original.get("fill") == Color(0, 128, 0)
        fills = [doc.node(h).get("fill") for h in doc.elements(ElementId.PATH)]
        assert fills == [Color(0, 128, 0), Color(255, 0, 0)]

    def test_clone_ids_cleared(self):
        doc, _ = preprocessed(_svg(
            '<defs><g id="sym"><rect id="inner" width="5" height="5"/></g></defs>'
            '<use xlink:href="#sym"/><use xlink:href="#sym"/>'
        ))
        rects = doc.elements(ElementId.RECT)
        assert len(rects) == 2
        assert all(doc.node(h).id == "" for h in rects)

    def test_symbol_instantiated_as_group(self):
        doc, _ = preprocessed(_svg(
            '<symbol id="s" viewBox="0 0 10 10"><rect width="5" height="5" fill="red"/></symbol>'
            '<use xlink:href="#s" opacity="0.5"/>'
        ))
        assert not doc.elements(ElementId.SYMBOL)
        groups = doc.elements(ElementId.G)
        assert len(groups) == 1
        assert doc.node(groups[0]).get("opacity") == 0.5
        assert len(doc.elements(ElementId.RECT)) == 1

    def test_cycles_are_broken(self):
        doc, diagnostics = preprocessed(USE_CYCLE_SVG)
        assert not doc.elements(ElementId.USE)
        assert len(doc.elements(ElementId.RECT)) == 1
        assert sum("recursive" in m for m in diagnostics.messages()) == 2

    def test_missing_target_dropped(self):
        doc, diagnostics = preprocessed(_svg(
            '<use xlink:href="#nothing"/><rect width="5" height="5"/>'
        ))
        assert not doc.elements(ElementId.USE)
        assert any("references nothing" in m for m in diagnostics.messages())

    def test_paint_links_survive_instantiation(self):
        doc, _ = preprocessed(_svg(
            '<defs><linearGradient id="g"><stop offset="0"/><stop offset="1" stop-color="red"/></linearGradient>'
            '<rect id="r" width="5" height="5" fill="url(#g)"/></defs>'
            '<use xlink:href="#r"/>'
        ))
        rect = doc.node(only(doc, ElementId.RECT))
        gradient = doc.find_by_id("g")
        assert rect.get("fill") == FuncIRI(gradient)
