"""Tests for the pipeline orchestrator."""

import pytest

from svgnorm.engine.context import PreprocessContext, Severity
from svgnorm.engine.pipeline import Pipeline
from svgnorm.engine.registry import Stage, TransformRegistry, TransformSpec
from svgnorm.errors import MissingRootError, SizeDeterminationError
from svgnorm.svg.document import Document, ElementId
from svgnorm.svg.parser import parse_svg
from tests.conftest import SIMPLE_SVG


def _ctx() -> PreprocessContext:
    return PreprocessContext(document=parse_svg(SIMPLE_SVG))


def test_pipeline_runs_transforms():
    reg = TransformRegistry()
    results = []

    def p1(ctx: PreprocessContext) -> None:
        results.append("p1")

    def p2(ctx: PreprocessContext) -> None:
        results.append("p2")

    reg.register(TransformSpec(id="P02", stage=Stage.STYLE, fn=p2, dependencies=["P01"]))
    reg.register(TransformSpec(id="P01", stage=Stage.SIZE, fn=p1))

    ctx = Pipeline(registry=reg).run(_ctx())

    assert results == ["p1", "p2"]
    assert ctx.completed_transforms == {"P01", "P02"}


def test_pipeline_handles_errors():
    reg = TransformRegistry()
    after = []

    def fail(ctx: PreprocessContext) -> None:
        raise ValueError("test error")

    reg.register(TransformSpec(id="P01", stage=Stage.SIZE, fn=fail))
    reg.register(TransformSpec(id="P02", stage=Stage.STYLE, fn=lambda ctx: after.append(1), dependencies=["P01"]))

    ctx = Pipeline(registry=reg).run(_ctx())

    assert "test error" in ctx.errors["P01"]
    assert after == [1]
    assert ctx.diagnostics[-1].severity is Severity.ERROR


def test_pipeline_propagates_fatal_errors():
    reg = TransformRegistry()

    def fatal(ctx: PreprocessContext) -> None:
        raise SizeDeterminationError()

    reg.register(TransformSpec(id="P01", stage=Stage.SIZE, fn=fatal))
    with pytest.raises(SizeDeterminationError):
        Pipeline(registry=reg).run(_ctx())


def test_pipeline_requires_svg_root():
    doc = Document()
    doc.root = doc.create_element(ElementId.G)
    with pytest.raises(MissingRootError):
        Pipeline(registry=TransformRegistry()).run(PreprocessContext(document=doc))


def test_run_stage_only_runs_that_stage():
    reg = TransformRegistry()
    seen = []
    reg.register(TransformSpec(id="P01", stage=Stage.SIZE, fn=lambda ctx: seen.append("size")))
    reg.register(TransformSpec(id="P02", stage=Stage.STYLE, fn=lambda ctx: seen.append("style"), dependencies=["P01"]))

    Pipeline(registry=reg).run_stage(_ctx(), Stage.STYLE)
    assert seen == ["style"]


def test_default_pipeline_completes_all_passes():
    ctx = Pipeline().run(_ctx())
    assert len(ctx.completed_transforms) == 21
    assert ctx.errors == {}


def test_context_root_requires_svg_element():
    ctx = PreprocessContext(document=Document())
    with pytest.raises(MissingRootError):
        ctx.svg
