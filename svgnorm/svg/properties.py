"""Presentation property tables shared by the loader and the passes."""

from __future__ import annotations

from svgnorm.svg.values import BLACK, NONE

# Default font is user-agent dependent.
DEFAULT_FONT_FAMILY = "Times New Roman"
DEFAULT_FONT_SIZE = 12.0

# CSS-inheritable properties. font-size is inherited too, but is computed
# separately because relative values compound along the ancestor chain.
INHERITABLE = frozenset({
    "clip-rule",
    "color",
    "fill",
    "fill-opacity",
    "fill-rule",
    "font-family",
    "font-stretch",
    "font-style",
    "font-variant",
    "font-weight",
    "letter-spacing",
    "stroke",
    "stroke-dasharray",
    "stroke-dashoffset",
    "stroke-linecap",
    "stroke-linejoin",
    "stroke-miterlimit",
    "stroke-opacity",
    "stroke-width",
    "text-anchor",
    "visibility",
    "word-spacing",
    "xml:space",
})

# Non-inheritable presentation attributes that may still appear in `style`.
NON_INHERITABLE = frozenset({
    "clip-path",
    "display",
    "filter",
    "mask",
    "opacity",
    "stop-color",
    "stop-opacity",
    "text-decoration",
})

PRESENTATION = INHERITABLE | NON_INHERITABLE | {"font-size"}

PAINT_ATTRIBUTES = ("fill", "stroke")
COLOR_ATTRIBUTES = ("color", "stop-color")
NUMBER_ATTRIBUTES = frozenset({
    "fill-opacity",
    "stroke-opacity",
    "stop-opacity",
    "opacity",
    "stroke-miterlimit",
})

# Percentages of these resolve against the viewport width.
HORIZONTAL_LENGTHS = frozenset({"x", "cx", "dx", "x1", "x2", "fx", "width", "rx"})
# ... and these against its height.
VERTICAL_LENGTHS = frozenset({"y", "cy", "dy", "y1", "y2", "fy", "height", "ry"})
# Everything else uses the normalized diagonal.
OTHER_LENGTHS = frozenset({
    "r",
    "stroke-width",
    "stroke-dashoffset",
    "letter-spacing",
    "word-spacing",
})
LENGTH_ATTRIBUTES = HORIZONTAL_LENGTHS | VERTICAL_LENGTHS | OTHER_LENGTHS | {"offset"}

# Explicit values given to drawable elements once styles are resolved.
FILL_STROKE_DEFAULTS = {
    "fill": BLACK,
    "fill-opacity": 1.0,
    "fill-rule": "nonzero",
    "stroke": NONE,
    "stroke-width": 1.0,
    "stroke-opacity": 1.0,
    "stroke-linecap": "butt",
    "stroke-linejoin": "miter",
    "stroke-miterlimit": 4.0,
    "stroke-dasharray": NONE,
    "stroke-dashoffset": 0.0,
}

FONT_DEFAULTS = {
    "font-family": DEFAULT_FONT_FAMILY,
    "font-style": "normal",
    "font-variant": "normal",
    "font-weight": "normal",
    "font-stretch": "normal",
    "text-anchor": "start",
}

FONT_SIZE_KEYWORDS = {
    "xx-small": -3,
    "x-small": -2,
    "small": -1,
    "medium": 0,
    "large": 1,
    "x-large": 2,
    "xx-large": 3,
}
FONT_SCALE = 1.2

TEXT_DECORATIONS = ("underline", "overline", "line-through")
