"""svgnorm — turns loosely valid SVG into a fully resolved render tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from svgnorm.config import settings
from svgnorm.convert import convert_doc
from svgnorm.engine.config import Options
from svgnorm.engine.context import Diagnostic, Diagnostics, Severity
from svgnorm.engine.pipeline import preprocess
from svgnorm.errors import (
    FatalError,
    InvalidSizeError,
    MissingRootError,
    ParseError,
    SizeDeterminationError,
    SvgNormError,
)
from svgnorm.models.render_tree import RenderTree
from svgnorm.svg.document import Document
from svgnorm.svg.parser import parse_svg, parse_svg_file

__version__ = "0.1.0"

__all__ = [
    "ConversionResult",
    "Diagnostic",
    "Diagnostics",
    "FatalError",
    "InvalidSizeError",
    "MissingRootError",
    "Options",
    "ParseError",
    "RenderTree",
    "Severity",
    "SizeDeterminationError",
    "SvgNormError",
    "configure_logging",
    "parse_doc",
    "parse_doc_from_file",
]


@dataclass
class ConversionResult:
    tree: RenderTree
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def parse_doc(text: str, options: Options | None = None) -> ConversionResult:
    """Load, normalize and convert SVG text.

    Raises ``ParseError`` for malformed XML and a ``FatalError`` when the
    document has no `svg` root or no determinable size. Everything else ends
    up in ``ConversionResult.diagnostics``.
    """
    diagnostics = Diagnostics()
    doc = parse_svg(text, diagnostics)
    return _convert(doc, options or Options.from_settings(), diagnostics)


def parse_doc_from_file(path: str | Path, options: Options | None = None) -> ConversionResult:
    """Like ``parse_doc``; relative image paths resolve against the file's directory."""
    path = Path(path)
    options = options or Options.from_settings()
    if options.source_path is None:
        options = replace(options, source_path=path)
    diagnostics = Diagnostics()
    doc = parse_svg_file(path, diagnostics)
    return _convert(doc, options, diagnostics)


def _convert(doc: Document, options: Options, diagnostics: Diagnostics) -> ConversionResult:
    preprocess(doc, options, diagnostics)
    tree = convert_doc(doc, options, diagnostics)
    return ConversionResult(tree=tree, diagnostics=diagnostics)


def configure_logging(level: str | None = None) -> None:
    """Set up root logging for applications embedding svgnorm."""
    level = level or settings.log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
