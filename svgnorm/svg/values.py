"""Typed attribute values and their string parsers.

Everything the loader stores in ``Node.attributes`` is one of:
float, str, Length, Color, ViewBox, Transform, Link, FuncIRI,
DecorationPaint, svgpathtools.Path or a list of (x, y) points.
"""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass
from typing import Any, NamedTuple

import numpy as np
from numpy.typing import NDArray


class Unit(enum.Enum):
    NONE = ""
    PX = "px"
    EM = "em"
    EX = "ex"
    IN = "in"
    CM = "cm"
    MM = "mm"
    PT = "pt"
    PC = "pc"
    PERCENT = "%"


@dataclass(frozen=True)
class Length:
    number: float
    unit: Unit = Unit.NONE

    def __str__(self) -> str:
        return f"{self.number:g}{self.unit.value}"


class Color(NamedTuple):
    red: int
    green: int
    blue: int

    def to_hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"


BLACK = Color(0, 0, 0)

# Paint keywords. Any other paint is a Color or a FuncIRI.
NONE = "none"
CURRENT_COLOR = "currentColor"


class ViewBox(NamedTuple):
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Link:
    """Reference to another node of the same document, by handle."""

    target: int


@dataclass(frozen=True)
class FuncIRI(Link):
    """``url(#id)`` paint with an optional fallback (Color, "none" or "currentColor")."""

    fallback: Any = None


@dataclass(frozen=True)
class DecorationPaint:
    """Fill and stroke captured from the element that declared a text decoration."""

    fill: Any
    stroke: Any


@dataclass(frozen=True)
class Transform:
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def translate(cls, tx: float, ty: float = 0.0) -> Transform:
        return cls(e=tx, f=ty)

    @classmethod
    def scale(cls, sx: float, sy: float | None = None) -> Transform:
        return cls(a=sx, d=sx if sy is None else sy)

    @classmethod
    def rotate(cls, degrees: float, cx: float = 0.0, cy: float = 0.0) -> Transform:
        rad = math.radians(degrees)
        cos, sin = math.cos(rad), math.sin(rad)
        ts = cls(a=cos, b=sin, c=-sin, d=cos)
        if cx or cy:
            ts = cls.translate(cx, cy).multiply(ts).multiply(cls.translate(-cx, -cy))
        return ts

    @classmethod
    def skew_x(cls, degrees: float) -> Transform:
        return cls(c=math.tan(math.radians(degrees)))

    @classmethod
    def skew_y(cls, degrees: float) -> Transform:
        return cls(b=math.tan(math.radians(degrees)))

    @classmethod
    def from_matrix(cls, m: NDArray[np.float64]) -> Transform:
        return cls(
            float(m[0, 0]), float(m[1, 0]),
            float(m[0, 1]), float(m[1, 1]),
            float(m[0, 2]), float(m[1, 2]),
        )

    @property
    def matrix(self) -> NDArray[np.float64]:
        return np.array([
            [self.a, self.c, self.e],
            [self.b, self.d, self.f],
            [0.0, 0.0, 1.0],
        ])

    def multiply(self, other: Transform) -> Transform:
        """Return ``self * other``: ``other`` is applied first."""
        return Transform.from_matrix(self.matrix @ other.matrix)

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def is_identity(self) -> bool:
        return self == Transform()

    def is_invertible(self) -> bool:
        return all(math.isfinite(v) for v in (self.a, self.b, self.c, self.d, self.e, self.f)) \
            and abs(self.determinant) > 1e-12

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f)


IDENTITY = Transform()


# ── Parsers ──────────────────────────────────────────────────────────────

_NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_NUMBER_RE = re.compile(_NUMBER)
_LENGTH_RE = re.compile(rf"^\s*({_NUMBER})\s*(px|em|ex|in|cm|mm|pt|pc|%)?\s*$")
_TRANSFORM_ITEM_RE = re.compile(r"\s*(matrix|translate|scale|rotate|skewX|skewY)\s*\(([^)]*)\)\s*,?")
_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_RE = re.compile(r"^rgb\(\s*([^,\s]+)\s*,?\s*([^,\s]+)\s*,?\s*([^,\s)]+)\s*\)$")
_FUNC_IRI_RE = re.compile(r"^url\(\s*['\"]?#([^)'\"]+)['\"]?\s*\)\s*(.*)$")


def parse_number(text: str) -> float | None:
    try:
        return float(text.strip())
    except ValueError:
        return None


def parse_numbers(text: str) -> list[float]:
    return [float(m) for m in _NUMBER_RE.findall(text)]


def parse_length(text: str) -> Length | None:
    m = _LENGTH_RE.match(text)
    if m is None:
        return None
    return Length(float(m.group(1)), Unit(m.group(2) or ""))


def parse_length_list(text: str) -> list[Length] | None:
    lengths = []
    for part in re.split(r"[\s,]+", text.strip()):
        if not part:
            continue
        length = parse_length(part)
        if length is None:
            return None
        lengths.append(length)
    return lengths


def parse_view_box(text: str) -> ViewBox | None:
    nums = parse_numbers(text)
    if len(nums) != 4:
        return None
    return ViewBox(*nums)


def parse_points(text: str) -> list[tuple[float, float]]:
    nums = parse_numbers(text)
    # An odd trailing coordinate is ignored.
    return [(nums[i], nums[i + 1]) for i in range(0, len(nums) - 1, 2)]


def parse_transform(text: str) -> Transform | None:
    """Parse an SVG transform list. Returns None when the list is malformed."""
    ts = IDENTITY
    pos = 0
    text = text.strip()
    while pos < len(text):
        m = _TRANSFORM_ITEM_RE.match(text, pos)
        if m is None:
            return None
        pos = m.end()
        name, args = m.group(1), parse_numbers(m.group(2))
        item = _transform_item(name, args)
        if item is None:
            return None
        ts = ts.multiply(item)
    return ts


def _transform_item(name: str, args: list[float]) -> Transform | None:
    n = len(args)
    if name == "matrix" and n == 6:
        return Transform(*args)
    if name == "translate" and n in (1, 2):
        return Transform.translate(*args)
    if name == "scale" and n in (1, 2):
        return Transform.scale(*args)
    if name == "rotate" and n in (1, 3):
        return Transform.rotate(*args)
    if name == "skewX" and n == 1:
        return Transform.skew_x(args[0])
    if name == "skewY" and n == 1:
        return Transform.skew_y(args[0])
    return None


def parse_color(text: str) -> Color | None:
    text = text.strip()
    m = _HEX_RE.match(text)
    if m:
        digits = m.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return Color(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
    m = _RGB_RE.match(text)
    if m:
        channels = []
        for part in m.groups():
            if part.endswith("%"):
                value = parse_number(part[:-1])
                value = None if value is None else value * 255 / 100
            else:
                value = parse_number(part)
            if value is None:
                return None
            channels.append(int(round(min(max(value, 0.0), 255.0))))
        return Color(*channels)
    return NAMED_COLORS.get(text.lower())


def parse_paint(text: str, resolve_id) -> Any:
    """Parse a fill/stroke value.

    ``resolve_id`` maps an element id to a node handle (or None).
    A reference to an unknown id falls back to the fallback paint or "none".
    """
    text = text.strip()
    if text == NONE:
        return NONE
    if text == CURRENT_COLOR:
        return CURRENT_COLOR
    if text == "inherit":
        return "inherit"
    m = _FUNC_IRI_RE.match(text)
    if m:
        fallback = _parse_fallback(m.group(2))
        target = resolve_id(m.group(1))
        if target is None:
            return fallback if fallback is not None else NONE
        return FuncIRI(target, fallback)
    return parse_color(text)


def _parse_fallback(text: str) -> Any:
    text = text.strip()
    if not text:
        return None
    if text in (NONE, CURRENT_COLOR):
        return text
    return parse_color(text)


def parse_iri(text: str) -> str | None:
    """Return the id part of ``#id`` or ``url(#id)``."""
    text = text.strip()
    if text.startswith("#"):
        return text[1:]
    m = _FUNC_IRI_RE.match(text)
    if m:
        return m.group(1)
    return None


NAMED_COLORS: dict[str, Color] = {
    name: Color(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))
    for name, value in (
        ("aliceblue", "f0f8ff"), ("antiquewhite", "faebd7"), ("aqua", "00ffff"), ("aquamarine", "7fffd4"),
        ("azure", "f0ffff"), ("beige", "f5f5dc"), ("bisque", "ffe4c4"), ("black", "000000"),
        ("blanchedalmond", "ffebcd"), ("blue", "0000ff"), ("blueviolet", "8a2be2"), ("brown", "a52a2a"),
        ("burlywood", "deb887"), ("cadetblue", "5f9ea0"), ("chartreuse", "7fff00"), ("chocolate", "d2691e"),
        ("coral", "ff7f50"), ("cornflowerblue", "6495ed"), ("cornsilk", "fff8dc"), ("crimson", "dc143c"),
        ("cyan", "00ffff"), ("darkblue", "00008b"), ("darkcyan", "008b8b"), ("darkgoldenrod", "b8860b"),
        ("darkgray", "a9a9a9"), ("darkgreen", "006400"), ("darkgrey", "a9a9a9"), ("darkkhaki", "bdb76b"),
        ("darkmagenta", "8b008b"), ("darkolivegreen", "556b2f"), ("darkorange", "ff8c00"), ("darkorchid", "9932cc"),
        ("darkred", "8b0000"), ("darksalmon", "e9967a"), ("darkseagreen", "8fbc8f"), ("darkslateblue", "483d8b"),
        ("darkslategray", "2f4f4f"), ("darkslategrey", "2f4f4f"), ("darkturquoise", "00ced1"), ("darkviolet", "9400d3"),
        ("deeppink", "ff1493"), ("deepskyblue", "00bfff"), ("dimgray", "696969"), ("dimgrey", "696969"),
        ("dodgerblue", "1e90ff"), ("firebrick", "b22222"), ("floralwhite", "fffaf0"), ("forestgreen", "228b22"),
        ("fuchsia", "ff00ff"), ("gainsboro", "dcdcdc"), ("ghostwhite", "f8f8ff"), ("gold", "ffd700"),
        ("goldenrod", "daa520"), ("gray", "808080"), ("grey", "808080"), ("green", "008000"),
        ("greenyellow", "adff2f"), ("honeydew", "f0fff0"), ("hotpink", "ff69b4"), ("indianred", "cd5c5c"),
        ("indigo", "4b0082"), ("ivory", "fffff0"), ("khaki", "f0e68c"), ("lavender", "e6e6fa"),
        ("lavenderblush", "fff0f5"), ("lawngreen", "7cfc00"), ("lemonchiffon", "fffacd"), ("lightblue", "add8e6"),
        ("lightcoral", "f08080"), ("lightcyan", "e0ffff"), ("lightgoldenrodyellow", "fafad2"), ("lightgray", "d3d3d3"),
        ("lightgreen", "90ee90"), ("lightgrey", "d3d3d3"), ("lightpink", "ffb6c1"), ("lightsalmon", "ffa07a"),
        ("lightseagreen", "20b2aa"), ("lightskyblue", "87cefa"), ("lightslategray", "778899"), ("lightslategrey", "778899"),
        ("lightsteelblue", "b0c4de"), ("lightyellow", "ffffe0"), ("lime", "00ff00"), ("limegreen", "32cd32"),
        ("linen", "faf0e6"), ("magenta", "ff00ff"), ("maroon", "800000"), ("mediumaquamarine", "66cdaa"),
        ("mediumblue", "0000cd"), ("mediumorchid", "ba55d3"), ("mediumpurple", "9370db"), ("mediumseagreen", "3cb371"),
        ("mediumslateblue", "7b68ee"), ("mediumspringgreen", "00fa9a"), ("mediumturquoise", "48d1cc"),
        ("mediumvioletred", "c71585"), ("midnightblue", "191970"), ("mintcream", "f5fffa"), ("mistyrose", "ffe4e1"),
        ("moccasin", "ffe4b5"), ("navajowhite", "ffdead"), ("navy", "000080"), ("oldlace", "fdf5e6"),
        ("olive", "808000"), ("olivedrab", "6b8e23"), ("orange", "ffa500"), ("orangered", "ff4500"),
        ("orchid", "da70d6"), ("palegoldenrod", "eee8aa"), ("palegreen", "98fb98"), ("paleturquoise", "afeeee"),
        ("palevioletred", "db7093"), ("papayawhip", "ffefd5"), ("peachpuff", "ffdab9"), ("peru", "cd853f"),
        ("pink", "ffc0cb"), ("plum", "dda0dd"), ("powderblue", "b0e0e6"), ("purple", "800080"),
        ("red", "ff0000"), ("rosybrown", "bc8f8f"), ("royalblue", "4169e1"), ("saddlebrown", "8b4513"),
        ("salmon", "fa8072"), ("sandybrown", "f4a460"), ("seagreen", "2e8b57"), ("seashell", "fff5ee"),
        ("sienna", "a0522d"), ("silver", "c0c0c0"), ("skyblue", "87ceeb"), ("slateblue", "6a5acd"),
        ("slategray", "708090"), ("slategrey", "708090"), ("snow", "fffafa"), ("springgreen", "00ff7f"),
        ("steelblue", "4682b4"), ("tan", "d2b48c"), ("teal", "008080"), ("thistle", "d8bfd8"),
        ("tomato", "ff6347"), ("turquoise", "40e0d0"), ("violet", "ee82ee"), ("wheat", "f5deb3"),
        ("white", "ffffff"), ("whitesmoke", "f5f5f5"), ("yellow", "ffff00"), ("yellowgreen", "9acd32"),
    )
}
