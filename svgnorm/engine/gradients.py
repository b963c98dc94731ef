"""Gradient href-chain helpers shared by the unit and gradient passes."""

from __future__ import annotations

from collections.abc import Iterator

from svgnorm.svg.document import GRADIENTS, Document, ElementId
from svgnorm.svg.values import Link

OBJECT_BOUNDING_BOX = "objectBoundingBox"
USER_SPACE_ON_USE = "userSpaceOnUse"

LINEAR_COORDS = ("x1", "y1", "x2", "y2")
RADIAL_COORDS = ("cx", "cy", "r", "fx", "fy")
COMMON_ATTRIBUTES = ("gradientUnits", "spreadMethod", "gradientTransform")


class ChainCycle(Exception):
    """Raised by ``href_chain`` when a gradient links back into its own chain."""


def href_chain(doc: Document, handle: int, max_depth: int) -> Iterator[int]:
    """Yield ``handle`` and the gradients it links to, nearest first.

    Stops at a non-gradient target, a dangling link or ``max_depth``. A cycle
    raises ``ChainCycle`` after every gradient of the chain has been yielded.
    """
    visited: set[int] = set()
    current: int | None = handle
    depth = 0
    while current is not None and current in doc and doc.node(current).tag in GRADIENTS:
        if current in visited:
            raise ChainCycle(doc.node(handle).label())
        if depth > max_depth:
            return
        visited.add(current)
        yield current
        link = doc.node(current).get("href")
        current = link.target if isinstance(link, Link) else None
        depth += 1


def effective_units(doc: Document, handle: int, max_depth: int) -> str:
    try:
        for h in href_chain(doc, handle, max_depth):
            units = doc.node(h).get("gradientUnits")
            if units in (OBJECT_BOUNDING_BOX, USER_SPACE_ON_USE):
                return units
    except ChainCycle:
        pass
    return OBJECT_BOUNDING_BOX


def has_stops(doc: Document, handle: int) -> bool:
    return any(doc.node(c).tag == ElementId.STOP for c in doc.children(handle))


def stops(doc: Document, handle: int) -> list[int]:
    return [c for c in doc.children(handle) if doc.node(c).tag == ElementId.STOP]
