"""Properties every preprocessed document has, whatever the input."""

import pytest

from svgnorm.engine.pipeline import preprocess
from svgnorm.svg.document import ElementId
from svgnorm.svg.values import DecorationPaint, Link
from tests.conftest import (
    GRADIENT_SVG,
    INVISIBLE_SVG,
    SIMPLE_SVG,
    TEXT_SVG,
    USE_CYCLE_SVG,
    USE_SVG,
    preprocessed,
)

SAMPLES = {
    "simple": SIMPLE_SVG,
    "gradient": GRADIENT_SVG,
    "use": USE_SVG,
    "use-cycle": USE_CYCLE_SVG,
    "text": TEXT_SVG,
    "invisible": INVISIBLE_SVG,
}

# Element kinds that never survive preprocessing.
RESOLVED_KINDS = (
    ElementId.A,
    ElementId.USE,
    ElementId.SWITCH,
    ElementId.TREF,
    ElementId.SYMBOL,
)


@pytest.mark.parametrize("name", SAMPLES)
def test_preprocessing_is_idempotent(name):
    doc, _ = preprocessed(SAMPLES[name])
    first = doc.dump()
    preprocess(doc)
    assert doc.dump() == first


@pytest.mark.parametrize("name", SAMPLES)
def test_no_dangling_links(name):
    doc, _ = preprocessed(SAMPLES[name])
    for h in doc.elements():
        for value in doc.node(h).attributes.values():
            links = (value.fill, value.stroke) if isinstance(value, DecorationPaint) else (value,)
            for link in links:
                if isinstance(link, Link):
                    assert link.target in doc


@pytest.mark.parametrize("name", SAMPLES)
def test_resolved_kinds_are_gone(name):
    doc, _ = preprocessed(SAMPLES[name])
    for kind in RESOLVED_KINDS:
        assert not doc.elements(kind)


@pytest.mark.parametrize("name", SAMPLES)
def test_no_unused_references(name):
    doc, _ = preprocessed(SAMPLES[name])
    assert doc.prune_unused_references() == []
