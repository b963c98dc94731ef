"""PreprocessContext — the single mutable state object flowing through all passes.

The document is rewritten in place. Local problems are appended to
``diagnostics`` (and logged) instead of being raised.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

from svgnorm.engine.config import Options
from svgnorm.errors import MissingRootError
from svgnorm.svg.document import Document
from svgnorm.svg.values import ViewBox


class Severity(enum.Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    # Element label (tag#id) the message is about; empty for document-level messages
    node: str
    message: str


class Diagnostics(list):
    """Collected diagnostics. Each one is also logged on the emitting module's logger."""

    def warn(self, logger: logging.Logger, node: str, message: str, *args) -> None:
        self._emit(logger, Severity.WARNING, node, message, args)

    def error(self, logger: logging.Logger, node: str, message: str, *args) -> None:
        self._emit(logger, Severity.ERROR, node, message, args)

    def _emit(self, logger: logging.Logger, severity: Severity, node: str, message: str, args) -> None:
        text = message % args if args else message
        self.append(Diagnostic(severity, node, text))
        level = logging.WARNING if severity is Severity.WARNING else logging.ERROR
        if node:
            logger.log(level, "%s: %s", node, text)
        else:
            logger.log(level, "%s", text)

    def messages(self) -> list[str]:
        return [d.message for d in self]


@dataclass
class PreprocessContext:
    """Shared state for one preprocessing run."""

    document: Document
    options: Options = field(default_factory=Options)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def svg(self) -> int:
        """Root handle. The pipeline checks for it before any pass runs."""
        root = self.document.svg_element()
        if root is None:
            raise MissingRootError()
        return root

    @property
    def view_box(self) -> ViewBox:
        """Percentage basis, set on the root by the size pass."""
        return self.document.node(self.svg).get("viewBox")
