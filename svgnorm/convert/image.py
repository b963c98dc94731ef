"""Image elements -> Image with embedded bytes or a checked file path."""

from __future__ import annotations

import base64
import binascii
import logging
import re
from pathlib import Path

from svgnorm.convert.context import ConvertContext, local_transform, number
from svgnorm.models.render_tree import Image, ImageData, ImageKind, PathImage, RawImage, Rect

logger = logging.getLogger(__name__)

_DATA_URL_RE = re.compile(r"^data:([^;,]*)((?:;[^;,]*)*),(.*)$", re.DOTALL)
_MIME_KINDS = {
    "image/png": ImageKind.PNG,
    "image/jpeg": ImageKind.JPEG,
    "image/jpg": ImageKind.JPEG,
}


def convert_image(cctx: ConvertContext, handle: int) -> Image | None:
    node = cctx.document.node(handle)
    for aid in ("width", "height", "x", "y", "href"):
        if not node.has(aid):
            cctx.diagnostics.warn(logger, node.label(), "image without '%s', skipped", aid)
            return None

    href = node.get("href")
    data = _load_href(cctx, node.label(), href) if isinstance(href, str) else None
    if data is None:
        return None

    return Image(
        id=node.id,
        transform=local_transform(node),
        rect=Rect(
            x=number(node, "x"),
            y=number(node, "y"),
            width=number(node, "width"),
            height=number(node, "height"),
        ),
        data=data,
    )


def _load_href(cctx: ConvertContext, label: str, href: str) -> ImageData | None:
    href = href.strip()
    if href.startswith("data:"):
        return _decode_data_url(cctx, label, href)

    path = Path(href[len("file://"):] if href.startswith("file://") else href)
    if not path.is_absolute():
        source = cctx.options.source_path
        base = source.parent if source is not None else Path.cwd()
        path = base / path
    if not path.is_file():
        cctx.diagnostics.warn(logger, label, "image file %s does not exist, skipped", path)
        return None
    return PathImage(path=path)


def _decode_data_url(cctx: ConvertContext, label: str, href: str) -> RawImage | None:
    m = _DATA_URL_RE.match(href)
    if not m:
        cctx.diagnostics.warn(logger, label, "malformed data URL, image skipped")
        return None
    mime = m.group(1).strip().lower()
    kind = _MIME_KINDS.get(mime)
    if kind is None:
        cctx.diagnostics.warn(logger, label, "unsupported image type %r, skipped", mime)
        return None
    if "base64" not in m.group(2).lower():
        cctx.diagnostics.warn(logger, label, "image data is not base64 encoded, skipped")
        return None

    payload = re.sub(r"\s+", "", m.group(3)).rstrip("=")
    payload += "=" * (-len(payload) % 4)
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        cctx.diagnostics.warn(logger, label, "invalid base64 image data: %s", e)
        return None
    return RawImage(data=data, kind=kind)
