"""Pass registry — every preprocessing pass is a standalone function registered via decorator.

Usage:
    @transform(id="P03", stage=Stage.STYLE, dependencies=["P02"])
    def resolve_current_color(ctx: PreprocessContext) -> None:
        for h in ctx.document.elements():
            ...

Each pass depends on the one before it, so resolving dependencies yields the
canonical pass order. Later passes rely on invariants established by earlier
ones; the order is never changed or parallelized.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from svgnorm.engine.context import PreprocessContext

logger = logging.getLogger(__name__)


class Stage(enum.IntEnum):
    SIZE = 0
    STYLE = 1
    REFERENCES = 2
    SIMPLIFY = 3
    TEXT = 4


@dataclass
class TransformSpec:
    id: str
    stage: Stage
    fn: Callable[["PreprocessContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class TransformRegistry:
    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered pass %s (%s)", spec.id, spec.stage.name)

    def get_stage(self, stage: Stage) -> list[TransformSpec]:
        return [s for s in self.resolve_order() if s.stage == stage]

    def resolve_order(self) -> list[TransformSpec]:
        """Follow the dependency chain from the first pass to the last.

        Passes must form a single chain: one pass without dependencies, every
        other pass depending on exactly one predecessor that nothing else
        follows, and stages never going backwards.
        """
        successors: dict[str, TransformSpec] = {}
        first: list[TransformSpec] = []
        for spec in self._transforms.values():
            if not spec.dependencies:
                first.append(spec)
                continue
            if len(spec.dependencies) > 1:
                raise ValueError(f"{spec.id} depends on more than one pass: {spec.dependencies}")
            dep = spec.dependencies[0]
            if dep not in self._transforms:
                raise ValueError(f"{spec.id} depends on unknown pass {dep}")
            if dep in successors:
                raise ValueError(f"{dep} is followed by both {successors[dep].id} and {spec.id}")
            successors[dep] = spec

        if len(first) > 1:
            raise ValueError(f"More than one first pass: {sorted(s.id for s in first)}")

        ordered: list[TransformSpec] = []
        spec = first[0] if first else None
        while spec is not None:
            if ordered and spec.stage < ordered[-1].stage:
                raise ValueError(
                    f"{spec.id} ({spec.stage.name}) runs after {ordered[-1].id} ({ordered[-1].stage.name})"
                )
            ordered.append(spec)
            spec = successors.get(spec.id)

        if len(ordered) != len(self._transforms):
            missing = sorted(set(self._transforms) - {s.id for s in ordered})
            raise ValueError(f"Circular dependency detected among: {missing}")
        return ordered


# Module-level singleton
_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    stage: Stage,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a preprocessing pass."""

    def decorator(fn: Callable[["PreprocessContext"], None]):
        _registry.register(TransformSpec(
            id=id,
            stage=stage,
            fn=fn,
            dependencies=dependencies or [],
            description=description,
        ))
        return fn

    return decorator
