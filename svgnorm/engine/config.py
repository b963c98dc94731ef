"""Conversion options consumed by the preprocessor and the converter."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from svgnorm.svg.document import Document


def accept_first_child(doc: Document, handle: int) -> bool:
    """Default ``switch`` policy: every branch is considered supported."""
    return True


@dataclass
class Options:
    """Controls unit conversion and reference resolution."""

    # Resolution used for absolute units (in, cm, mm, pt, pc)
    dpi: float = 96.0
    # Path of the source document; relative image hrefs resolve against it
    source_path: Path | None = None
    # Decides whether a `switch` child is selectable
    switch_policy: Callable[[Document, int], bool] = accept_first_child
    # Upper bound on href chains (gradients, use, tref)
    max_reference_depth: int = 32

    def __post_init__(self) -> None:
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive, got {self.dpi}")
        if self.source_path is not None:
            self.source_path = Path(self.source_path)

    @classmethod
    def from_settings(cls, **overrides) -> Options:
        from svgnorm.config import settings

        return cls(**{"dpi": settings.dpi, **overrides})
