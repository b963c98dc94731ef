"""State shared by the converter functions for one document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from svgnorm.engine.config import Options
from svgnorm.engine.context import Diagnostics
from svgnorm.svg.document import Document, Node
from svgnorm.svg.values import IDENTITY, Transform


@dataclass
class ConvertContext:
    document: Document
    options: Options = field(default_factory=Options)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    # Handle of every converted def -> its id in RenderTree.defs
    ref_ids: dict[int, str] = field(default_factory=dict)


def number(node: Node, aid: str, default: float = 0.0) -> float:
    value = node.get(aid, default)
    return float(value) if isinstance(value, (int, float)) else default


def choice(value: Any, allowed: tuple[str, ...], default: str) -> str:
    return value if value in allowed else default


def local_transform(node: Node) -> Transform:
    ts = node.get("transform", IDENTITY)
    return ts if isinstance(ts, Transform) else IDENTITY
