"""Shared test fixtures."""

from __future__ import annotations

import pytest

from svgnorm.engine.config import Options
from svgnorm.engine.context import Diagnostics
from svgnorm.engine.pipeline import preprocess
from svgnorm.svg.document import Document
from svgnorm.svg.parser import parse_svg

# Sample SVGs

SIMPLE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100" viewBox="0 0 200 100">
  <rect x="10" y="10" width="50%" height="50" fill="#ff0000"/>
</svg>'''

GRADIENT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" width="100" height="100">
  <defs>
    <linearGradient id="base">
      <stop offset="0" stop-color="red"/>
      <stop offset="0.5" stop-color="green"/>
      <stop offset="1" stop-color="blue"/>
    </linearGradient>
    <linearGradient id="derived" xlink:href="#base" x2="0.5"/>
    <linearGradient id="unused">
      <stop offset="0" stop-color="red"/>
      <stop offset="1" stop-color="blue"/>
    </linearGradient>
  </defs>
  <rect width="100" height="100" fill="url(#derived)"/>
</svg>'''

USE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" width="100" height="100">
  <defs>
    <path id="shape" d="M0 0 L10 0 L10 10 Z"/>
  </defs>
  <use id="first" xlink:href="#shape" fill="red"/>
  <use id="second" xlink:href="#shape" x="20" fill="blue"/>
</svg>'''

USE_CYCLE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" width="100" height="100">
  <defs>
    <g id="a"><use xlink:href="#b"/><rect width="5" height="5"/></g>
    <g id="b"><use xlink:href="#a"/></g>
  </defs>
  <use xlink:href="#a"/>
  <g id="self"><use xlink:href="#self"/></g>
</svg>'''

TEXT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100">
  <text x="10" y="20" font-size="10" fill="black">
    Hello   <tspan fill="red">big</tspan>
    world
    <tspan x="10" y="40">second line</tspan>
  </text>
</svg>'''

INVISIBLE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100">
  <g id="wrapper">
    <rect width="10" height="10" visibility="hidden"/>
  </g>
  <rect id="visible" width="10" height="10"/>
</svg>'''

# 1x1 transparent PNG
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

IMAGE_SVG = f'''<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" width="100" height="100">
  <image x="5" y="5" width="20" height="20" xlink:href="data:image/png;base64,{PNG_BASE64}"/>
  <image x="0" y="0" width="20" height="20" xlink:href="missing-file.png"/>
</svg>'''


def preprocessed(svg_text: str, **options) -> tuple[Document, Diagnostics]:
    """Parse and run the whole preprocessing pipeline."""
    doc = parse_svg(svg_text)
    diagnostics = preprocess(doc, Options(**options))
    return doc, diagnostics


def only(doc: Document, tag) -> int:
    """Handle of the single element with ``tag``."""
    handles = doc.elements(tag)
    assert len(handles) == 1, handles
    return handles[0]


@pytest.fixture
def simple_svg() -> str:
    return SIMPLE_SVG


@pytest.fixture
def gradient_svg() -> str:
    return GRADIENT_SVG


@pytest.fixture
def use_svg() -> str:
    return USE_SVG
