"""P21 — Prepare Text Nodes.

Rewrite every `text` element into the flat layout the converter reads:

    text
      tspan x= y=   "first chunk, first span"
      tspan         "first chunk, second span"
      tspan x= y=   "second chunk"

Each `tspan` holds exactly one text node and a complete copy of its style.
A `tspan` with a position starts a new chunk; adjacent spans of a chunk that
share style are merged. Whitespace is collapsed as for `xml:space="default"`
unless the span preserves it.
"""

from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass
from typing import Any

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.registry import Stage, transform
from svgnorm.svg.document import Document, ElementId

logger = logging.getLogger(__name__)

# Attributes describing where a span goes rather than how it looks.
_LAYOUT = frozenset({"x", "y", "dx", "dy", "rotate", "textLength", "lengthAdjust", "transform"})
_SPACES = re.compile(" {2,}")


@dataclass
class _Run:
    style: dict[str, Any]
    text: str
    chunk: int
    preserve: bool


@transform(
    id="P21",
    stage=Stage.TEXT,
    dependencies=["P20"],
    description="Split text content into positioned chunks of styled spans",
)
def prepare_text_nodes(ctx: PreprocessContext) -> None:
    doc = ctx.document
    removed = False
    for h in doc.elements(ElementId.TEXT):
        if h not in doc or doc.in_referenced_subtree(h):
            continue
        node = doc.node(h)
        chunks = [(node.get("x", 0.0), node.get("y", 0.0))]
        runs: list[_Run] = []
        _collect_runs(doc, h, runs, chunks)

        runs = [r for r in runs if r.style.get("visibility", "visible") == "visible"]
        _collapse_whitespace(runs)
        runs = _merge_runs([r for r in runs if r.text])

        for child in doc.children(h):
            doc.remove(child)
        for aid in ("x", "y", "dx", "dy"):
            node.remove_attr(aid)

        if not runs:
            logger.debug("Removing empty %s", node.label())
            doc.remove(h)
            removed = True
            continue

        previous_chunk = None
        for run in runs:
            attributes = dict(run.style)
            if run.chunk != previous_chunk:
                attributes["x"], attributes["y"] = chunks[run.chunk]
                previous_chunk = run.chunk
            span = doc.create_element(ElementId.TSPAN, attributes=attributes)
            doc.append(span, doc.create_text(run.text))
            doc.append(h, span)

    if removed:
        doc.prune_unused_references()


def _collect_runs(doc: Document, handle: int, runs: list[_Run], chunks: list[tuple]) -> None:
    source = doc.node(handle)
    for child in doc.children(handle):
        node = doc.node(child)
        if node.is_text:
            style = {
                aid: copy.copy(value)
                for aid, value in source.attributes.items()
                if aid not in _LAYOUT
            }
            preserve = source.get("xml:space") == "preserve"
            runs.append(_Run(style, node.text or "", len(chunks) - 1, preserve))
        elif node.tag == ElementId.TSPAN:
            if node.has("x") or node.has("y"):
                x, y = chunks[-1]
                chunks.append((node.get("x", x), node.get("y", y)))
            _collect_runs(doc, child, runs, chunks)
        else:
            logger.debug("Ignoring %s inside text", node.label())


def _collapse_whitespace(runs: list[_Run]) -> None:
    after_space = True
    chunk = None
    for run in runs:
        if run.chunk != chunk:
            # Leading spaces of a chunk are dropped.
            after_space = True
            chunk = run.chunk
        if run.preserve:
            run.text = run.text.replace("\r\n", " ").replace("\n", " ").replace("\t", " ")
            after_space = False
            continue
        text = run.text.replace("\r", "").replace("\n", "").replace("\t", " ")
        text = _SPACES.sub(" ", text)
        if after_space:
            text = text.lstrip(" ")
        if text:
            after_space = text.endswith(" ")
        run.text = text

    for run in reversed(runs):
        if run.preserve:
            break
        run.text = run.text.rstrip(" ")
        if run.text:
            break


def _merge_runs(runs: list[_Run]) -> list[_Run]:
    merged: list[_Run] = []
    for run in runs:
        last = merged[-1] if merged else None
        if last is not None and last.chunk == run.chunk and last.style == run.style:
            last.text += run.text
        else:
            merged.append(run)
    return merged
