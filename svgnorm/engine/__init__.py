"""svgnorm preprocessing engine."""

from svgnorm.engine.config import Options
from svgnorm.engine.context import Diagnostic, Diagnostics, PreprocessContext, Severity
from svgnorm.engine.pipeline import Pipeline, preprocess
from svgnorm.engine.registry import Stage, get_registry, transform

__all__ = [
    "transform",
    "Stage",
    "get_registry",
    "Options",
    "PreprocessContext",
    "Diagnostic",
    "Diagnostics",
    "Severity",
    "Pipeline",
    "preprocess",
]
