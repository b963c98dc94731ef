"""Render tree: the immutable output of the converter.

Every element carries its own local transform and fully resolved style.
Nothing in here needs an ancestor lookup or a reference resolution other than
a paint pointing at a gradient in ``RenderTree.defs``.
"""

from __future__ import annotations

import enum
from pathlib import Path as FsPath
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from svgnorm.models.path_data import PathData
from svgnorm.svg.values import IDENTITY, Color, Transform, ViewBox


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class Size(_Model):
    width: float
    height: float


class Rect(_Model):
    x: float
    y: float
    width: float
    height: float


# ── paint ────────────────────────────────────────────────────────────────


class PaintLink(_Model):
    """Reference to a gradient in ``RenderTree.defs``."""

    id: str


Paint = Union[Color, PaintLink]


class Fill(_Model):
    paint: Paint
    opacity: float = 1.0
    rule: Literal["nonzero", "evenodd"] = "nonzero"


class Stroke(_Model):
    paint: Paint
    width: float = 1.0
    opacity: float = 1.0
    linecap: Literal["butt", "round", "square"] = "butt"
    linejoin: Literal["miter", "round", "bevel"] = "miter"
    miterlimit: float = 4.0
    dasharray: tuple[float, ...] | None = None
    dashoffset: float = 0.0


# ── defs ─────────────────────────────────────────────────────────────────


class Stop(_Model):
    offset: float
    color: Color
    opacity: float = 1.0


class _Gradient(_Model):
    id: str
    units: Literal["objectBoundingBox", "userSpaceOnUse"] = "objectBoundingBox"
    spread: Literal["pad", "reflect", "repeat"] = "pad"
    transform: Transform = IDENTITY
    stops: tuple[Stop, ...]


class LinearGradient(_Gradient):
    kind: Literal["linearGradient"] = "linearGradient"
    x1: float
    y1: float
    x2: float
    y2: float


class RadialGradient(_Gradient):
    kind: Literal["radialGradient"] = "radialGradient"
    cx: float
    cy: float
    r: float
    fx: float
    fy: float


RefElement = Annotated[Union[LinearGradient, RadialGradient], Field(discriminator="kind")]


# ── elements ─────────────────────────────────────────────────────────────


class Group(_Model):
    kind: Literal["group"] = "group"
    id: str = ""
    transform: Transform = IDENTITY
    opacity: float = 1.0
    children: tuple[Element, ...] = ()


class Path(_Model):
    kind: Literal["path"] = "path"
    id: str = ""
    transform: Transform = IDENTITY
    geometry: PathData
    fill: Fill | None = None
    stroke: Stroke | None = None


class Font(_Model):
    family: str
    size: float
    style: str = "normal"
    variant: str = "normal"
    weight: str = "normal"
    stretch: str = "normal"


class TextDecorationStyle(_Model):
    fill: Fill | None = None
    stroke: Stroke | None = None


class TextDecoration(_Model):
    underline: TextDecorationStyle | None = None
    overline: TextDecorationStyle | None = None
    line_through: TextDecorationStyle | None = None


class TextSpan(_Model):
    text: str
    font: Font
    fill: Fill | None = None
    stroke: Stroke | None = None
    decoration: TextDecoration = TextDecoration()


class TextChunk(_Model):
    x: float
    y: float
    anchor: Literal["start", "middle", "end"] = "start"
    spans: tuple[TextSpan, ...]


class Text(_Model):
    kind: Literal["text"] = "text"
    id: str = ""
    transform: Transform = IDENTITY
    chunks: tuple[TextChunk, ...]


class ImageKind(enum.Enum):
    JPEG = "jpeg"
    PNG = "png"


class RawImage(_Model):
    data: bytes
    kind: ImageKind


class PathImage(_Model):
    path: FsPath


ImageData = Union[RawImage, PathImage]


class Image(_Model):
    kind: Literal["image"] = "image"
    id: str = ""
    transform: Transform = IDENTITY
    rect: Rect
    data: ImageData


Element = Annotated[Union[Group, Path, Text, Image], Field(discriminator="kind")]

Group.model_rebuild()


class RenderTree(_Model):
    """Output of ``convert_doc``."""

    size: Size
    view_box: ViewBox
    dpi: float = Field(gt=0)
    elements: tuple[Element, ...] = ()
    defs: tuple[RefElement, ...] = ()

    def find_def(self, def_id: str) -> LinearGradient | RadialGradient | None:
        return next((d for d in self.defs if d.id == def_id), None)

    def iter_elements(self):
        """Preorder walk over every element, descending into groups."""
        stack = list(reversed(self.elements))
        while stack:
            element = stack.pop()
            yield element
            if isinstance(element, Group):
                stack.extend(reversed(element.children))
