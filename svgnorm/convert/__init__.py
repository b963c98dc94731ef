"""Normalized document -> render tree."""

from svgnorm.convert.context import ConvertContext
from svgnorm.convert.converter import convert_doc, convert_nodes, convert_ref_nodes

__all__ = [
    "ConvertContext",
    "convert_doc",
    "convert_nodes",
    "convert_ref_nodes",
]
