"""Absolute path segments used by output `Path` elements."""

from __future__ import annotations

from typing import NamedTuple, Union


class MoveTo(NamedTuple):
    x: float
    y: float


class LineTo(NamedTuple):
    x: float
    y: float


class CurveTo(NamedTuple):
    x1: float
    y1: float
    x2: float
    y2: float
    x: float
    y: float


class ClosePath(NamedTuple):
    pass


Segment = Union[MoveTo, LineTo, CurveTo, ClosePath]

_COMMANDS = {MoveTo: "M", LineTo: "L", CurveTo: "C", ClosePath: "Z"}


class PathData(tuple):
    """Immutable sequence of absolute segments."""

    def d(self) -> str:
        parts = []
        for seg in self:
            cmd = _COMMANDS[type(seg)]
            parts.append(" ".join([cmd, *(f"{v:g}" for v in seg)]))
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"PathData({self.d()!r})"
