"""Pipeline orchestrator — runs preprocessing passes in dependency order."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from svgnorm.engine.config import Options
from svgnorm.engine.context import Diagnostics, PreprocessContext
from svgnorm.engine.registry import Stage, TransformRegistry, get_registry
from svgnorm.errors import FatalError, MissingRootError
from svgnorm.svg.document import Document

logger = logging.getLogger(__name__)


class Pipeline:
    """Orchestrates the preprocessing passes."""

    def __init__(self, registry: TransformRegistry | None = None) -> None:
        if registry is None:
            register_passes()
            registry = get_registry()
        self.registry = registry

    def run(self, ctx: PreprocessContext) -> PreprocessContext:
        """Run every pass on ``ctx.document``, in order."""
        if ctx.document.svg_element() is None:
            raise MissingRootError()

        start = time.perf_counter()
        ordered = self.registry.resolve_order()
        logger.debug("Pipeline: %d passes queued", len(ordered))

        for spec in ordered:
            self._run_one(ctx, spec)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Preprocessing complete: %d/%d passes in %.0fms, %d diagnostics",
            len(ctx.completed_transforms),
            len(ordered),
            total,
            len(ctx.diagnostics),
        )
        return ctx

    def run_stage(self, ctx: PreprocessContext, stage: Stage) -> PreprocessContext:
        """Run only the passes of one stage (used by tests and debugging)."""
        for spec in self.registry.get_stage(stage):
            self._run_one(ctx, spec)
        return ctx

    def _run_one(self, ctx: PreprocessContext, spec) -> None:
        t0 = time.perf_counter()
        try:
            spec.fn(ctx)
        except FatalError:
            raise
        except Exception as e:
            ctx.errors[spec.id] = str(e)
            ctx.diagnostics.error(logger, "", "pass %s failed: %s", spec.id, e)
            return
        ctx.completed_transforms.add(spec.id)
        elapsed = (time.perf_counter() - t0) * 1000
        logger.debug("  %s completed in %.1fms", spec.id, elapsed)


def register_passes() -> None:
    """Import all pass modules so @transform decorators fire."""
    package = importlib.import_module("svgnorm.engine.preproc")
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{package.__name__}.{module_name}")


def preprocess(
    doc: Document, options: Options | None = None, diagnostics: Diagnostics | None = None
) -> Diagnostics:
    """Normalize ``doc`` in place. Returns the collected diagnostics.

    New diagnostics are appended to ``diagnostics`` when one is given.
    """
    ctx = PreprocessContext(
        document=doc,
        options=options or Options(),
        diagnostics=diagnostics if diagnostics is not None else Diagnostics(),
    )
    Pipeline().run(ctx)
    return ctx.diagnostics
