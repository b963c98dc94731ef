"""SVG loader — facade over xml.etree + svgpathtools.

Builds a generic ``Document`` from SVG text with typed attribute values.
Loading happens in two steps: the element tree is copied into the arena with
raw strings, then every attribute is parsed once all ids are known, so links
can be stored as node handles.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

from svgpathtools import parse_path

from svgnorm.engine.context import Diagnostics
from svgnorm.errors import MissingRootError, ParseError
from svgnorm.svg.document import Document, ElementId
from svgnorm.svg.properties import (
    COLOR_ATTRIBUTES,
    LENGTH_ATTRIBUTES,
    NUMBER_ATTRIBUTES,
    PAINT_ATTRIBUTES,
    PRESENTATION,
)
from svgnorm.svg.values import (
    CURRENT_COLOR,
    Link,
    parse_color,
    parse_iri,
    parse_length,
    parse_length_list,
    parse_number,
    parse_paint,
    parse_points,
    parse_transform,
    parse_view_box,
)

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_NS = "http://www.w3.org/XML/1998/namespace"

_KNOWN_TAGS = {e.value: e for e in ElementId}
_TEXT_CONTAINERS = {ElementId.TEXT, ElementId.TSPAN}
_LINK_ELEMENTS = {
    ElementId.USE,
    ElementId.TREF,
    ElementId.LINEAR_GRADIENT,
    ElementId.RADIAL_GRADIENT,
}
_DECLARATION_RE = re.compile(r"\s*([\w-]+)\s*:\s*([^;]*)")


def parse_svg(svg_text: str, diagnostics: Diagnostics | None = None) -> Document:
    """Parse SVG text into a generic Document.

    Attribute values that fail to parse are skipped and recorded in ``diagnostics``.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()
    try:
        root = ET.fromstring(svg_text)
    except ET.ParseError as e:
        raise ParseError(str(e)) from e

    if _local_name(root.tag) != "svg" or _namespace(root.tag) not in ("", SVG_NS):
        raise MissingRootError("the document root is not an 'svg' element")

    doc = Document()
    raw: dict[int, dict[str, str]] = {}
    doc.root = _copy_element(doc, root, raw)

    ids: dict[str, int] = {}
    for h in doc.elements():
        node = doc.node(h)
        if node.id and node.id not in ids:
            ids[node.id] = h

    for h, attrs in raw.items():
        _parse_attributes(doc, h, attrs, ids, diagnostics)

    logger.info("Parsed SVG: %d nodes", len(doc))
    return doc


def parse_svg_file(path: str | Path, diagnostics: Diagnostics | None = None) -> Document:
    return parse_svg(Path(path).read_text(encoding="utf-8"), diagnostics)


def _namespace(tag: str) -> str:
    return tag[1:].split("}", 1)[0] if tag.startswith("{") else ""


def _local_name(tag: str) -> str:
    return tag.split("}", 1)[1] if tag.startswith("{") else tag


def _attr_name(name: str) -> str | None:
    ns = _namespace(name)
    local = _local_name(name)
    if ns == "":
        return local
    if ns == XLINK_NS and local == "href":
        return "href"
    if ns == XML_NS:
        return f"xml:{local}"
    # Editor-specific attributes (inkscape:, sodipodi:, ...)
    return None


def _copy_element(doc: Document, elem: ET.Element, raw: dict[int, dict[str, str]]) -> int:
    name = _local_name(elem.tag)
    tag = _KNOWN_TAGS.get(name, name)
    attrs = {}
    for key, value in elem.attrib.items():
        aid = _attr_name(key)
        if aid is not None:
            attrs[aid] = value

    h = doc.create_element(tag, id=attrs.pop("id", "").strip())
    raw[h] = attrs

    keep_text = tag in _TEXT_CONTAINERS
    if keep_text and elem.text:
        doc.append(h, doc.create_text(elem.text))

    for child in elem:
        if not isinstance(child.tag, str):
            # comments and processing instructions
            if keep_text and child.tail:
                doc.append(h, doc.create_text(child.tail))
            continue
        if _namespace(child.tag) not in ("", SVG_NS):
            continue
        doc.append(h, _copy_element(doc, child, raw))
        if keep_text and child.tail:
            doc.append(h, doc.create_text(child.tail))
    return h


def parse_style(style: str) -> dict[str, str]:
    """Split a ``style`` declaration list into property/value pairs."""
    decls = {}
    for part in style.split(";"):
        m = _DECLARATION_RE.match(part)
        if m and m.group(2).strip():
            decls[m.group(1)] = m.group(2).strip()
    return decls


def _parse_attributes(
    doc: Document, h: int, attrs: dict[str, str], ids: dict[str, int], diagnostics: Diagnostics
) -> None:
    node = doc.node(h)
    style = attrs.pop("style", "")
    attrs.pop("class", None)
    # Style declarations win over presentation attributes.
    merged = dict(attrs)
    for name, value in parse_style(style).items():
        if name in PRESENTATION:
            merged[name] = value

    for aid, text in merged.items():
        value = parse_attribute(node.tag, aid, text, ids.get)
        if value is None:
            diagnostics.warn(logger, node.label(), "invalid '%s' value %r skipped", aid, text)
            continue
        node.attributes[aid] = value


def parse_attribute(tag: Any, aid: str, text: str, resolve_id) -> Any:
    """Parse one attribute string into its typed value (None when invalid).

    ``resolve_id`` maps an element id to a node handle or None.
    """
    text = text.strip()
    if text == "inherit" and aid in PRESENTATION:
        return "inherit"

    if aid in PAINT_ATTRIBUTES:
        return parse_paint(text, resolve_id)
    if aid in COLOR_ATTRIBUTES:
        return CURRENT_COLOR if text == CURRENT_COLOR else parse_color(text)
    if aid in ("transform", "gradientTransform"):
        # Kept raw when malformed; removed later with a diagnostic.
        ts = parse_transform(text)
        return ts if ts is not None else text
    if aid == "d":
        try:
            return parse_path(text)
        except Exception:
            return None
    if aid == "points":
        return parse_points(text)
    if aid == "viewBox":
        return parse_view_box(text)
    if aid == "href":
        if tag in _LINK_ELEMENTS:
            target = resolve_id(parse_iri(text) or "")
            return Link(target) if target is not None else None
        return text
    if aid in ("clip-path", "mask", "filter"):
        if text == "none":
            return None
        target = resolve_id(parse_iri(text) or "")
        return Link(target) if target is not None else None
    if aid in NUMBER_ATTRIBUTES:
        return parse_number(text)
    if aid == "stroke-dasharray":
        return "none" if text == "none" else parse_length_list(text)
    if aid == "font-size":
        return parse_length(text) or (text if re.fullmatch(r"[a-z-]+", text) else None)
    if aid in LENGTH_ATTRIBUTES:
        if tag in _TEXT_CONTAINERS and aid in ("x", "y", "dx", "dy"):
            # Only the first coordinate of a list is supported.
            text = text.replace(",", " ").split()[0] if text.split() else text
        return parse_length(text)
    return text
