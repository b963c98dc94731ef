"""Length conversion to user units. No document access."""

from __future__ import annotations

import math
from typing import Any

from svgnorm.svg.properties import DEFAULT_FONT_SIZE, HORIZONTAL_LENGTHS, VERTICAL_LENGTHS
from svgnorm.svg.values import Length, Unit, ViewBox

# Multipliers of dpi for absolute units.
_PER_INCH = {
    Unit.IN: 1.0,
    Unit.CM: 1.0 / 2.54,
    Unit.MM: 1.0 / 25.4,
    Unit.PT: 1.0 / 72.0,
    Unit.PC: 1.0 / 6.0,
}


def absolute_length(
    length: Length,
    dpi: float,
    font_size: float | None = None,
    percent_basis: float | None = None,
) -> float:
    """Convert ``length`` to user units.

    ``percent_basis`` is the value 100% refers to; when it is None a
    percentage is returned as a fraction (``50%`` -> ``0.5``).
    """
    n, unit = length.number, length.unit
    if unit in (Unit.NONE, Unit.PX):
        return n
    if unit in _PER_INCH:
        return n * dpi * _PER_INCH[unit]
    if unit is Unit.EM:
        return n * (font_size if font_size is not None else DEFAULT_FONT_SIZE)
    if unit is Unit.EX:
        return n * (font_size if font_size is not None else DEFAULT_FONT_SIZE) / 2.0
    if unit is Unit.PERCENT:
        if percent_basis is None:
            return n / 100.0
        return percent_basis * n / 100.0
    raise ValueError(f"unsupported unit {unit}")


def diagonal_basis(width: float, height: float) -> float:
    """Percentage basis for lengths that are neither horizontal nor vertical."""
    return math.sqrt((width * width + height * height) / 2.0)


def percent_basis(aid: str, view_box: ViewBox) -> float:
    if aid in HORIZONTAL_LENGTHS:
        return view_box.width
    if aid in VERTICAL_LENGTHS:
        return view_box.height
    return diagonal_basis(view_box.width, view_box.height)


def convert_value(
    aid: str,
    value: Any,
    dpi: float,
    font_size: float | None,
    view_box: ViewBox | None,
) -> Any:
    """Convert a Length (or a dash-array list) attribute value to user units.

    A ``view_box`` of None makes percentages fractions. Other values are
    returned unchanged.
    """
    basis = percent_basis(aid, view_box) if view_box is not None and aid != "offset" else None
    if isinstance(value, Length):
        return absolute_length(value, dpi, font_size, basis)
    if aid == "stroke-dasharray" and isinstance(value, list):
        return [
            absolute_length(v, dpi, font_size, basis) if isinstance(v, Length) else float(v)
            for v in value
        ]
    return value
