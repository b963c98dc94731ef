"""Tests for the generic document arena."""

from svgnorm.svg.document import Document, ElementId
from svgnorm.svg.parser import parse_svg
from svgnorm.svg.values import FuncIRI, Link
from tests.conftest import GRADIENT_SVG


def _tree():
    doc = Document()
    svg = doc.create_element(ElementId.SVG)
    doc.root = svg
    g = doc.create_element(ElementId.G, id="g")
    a = doc.create_element(ElementId.RECT, id="a")
    b = doc.create_element(ElementId.CIRCLE, id="b")
    doc.append(svg, g)
    doc.append(g, a)
    doc.append(g, b)
    return doc, svg, g, a, b


def test_descendants_preorder():
    doc, svg, g, a, b = _tree()
    assert list(doc.descendants(svg)) == [svg, g, a, b]
    assert list(doc.descendants(g, include_self=False)) == [a, b]


def test_insert_before_and_detach():
    doc, svg, g, a, b = _tree()
    doc.insert_before(a, b)
    assert doc.children(g) == [b, a]
    doc.detach(a)
    assert doc.children(g) == [b]
    assert doc.parent(a) is None


def test_replace_with_children():
    doc, svg, g, a, b = _tree()
    doc.replace_with_children(g)
    assert doc.children(svg) == [a, b]
    assert g not in doc


def test_wrap():
    doc, svg, g, a, b = _tree()
    wrapper = doc.wrap(b, ElementId.G, {"opacity": 0.5})
    assert doc.children(g) == [a, wrapper]
    assert doc.children(wrapper) == [b]
    assert doc.node(wrapper).get("opacity") == 0.5


def test_remove_drops_subtree():
    doc, svg, g, a, b = _tree()
    size = len(doc)
    doc.remove(g)
    assert len(doc) == size - 3
    assert doc.find_by_id("a") is None


def test_deep_copy_keeps_links_shared():
    doc, svg, g, a, b = _tree()
    target = doc.create_element(ElementId.LINEAR_GRADIENT, id="grad")
    doc.append(svg, target)
    doc.node(a).attributes["fill"] = FuncIRI(target)

    clone = doc.deep_copy(g)
    assert clone != g
    cloned_rect = doc.element_children(clone)[0]
    assert cloned_rect != a
    assert doc.node(cloned_rect).get("fill") == FuncIRI(target)
    assert doc.parent(clone) is None


def test_is_referenced():
    doc = parse_svg(GRADIENT_SVG)
    assert doc.is_referenced(doc.find_by_id("base"))
    rect = doc.elements(ElementId.RECT)[0]
    assert not doc.is_referenced(rect)


def test_live_references_follow_chains():
    doc = parse_svg(GRADIENT_SVG)
    live = doc.live_references()
    assert doc.find_by_id("derived") in live
    # Reached through the href of "derived".
    assert doc.find_by_id("base") in live
    assert doc.find_by_id("unused") not in live


def test_prune_unused_references():
    doc = parse_svg(GRADIENT_SVG)
    unused = doc.find_by_id("unused")
    removed = doc.prune_unused_references()
    assert removed == [unused]
    assert unused not in doc


def test_links_from():
    doc, svg, g, a, b = _tree()
    doc.node(a).attributes["clip-path"] = Link(b)
    doc.node(a).attributes["mask"] = Link(12345)
    assert doc.links_from(a) == [b]


def test_dump_is_deterministic():
    first = parse_svg(GRADIENT_SVG).dump()
    second = parse_svg(GRADIENT_SVG).dump()
    assert first == second
    assert first[0] == "svg"
