"""P07 — Resolve Gradient Stops.

A gradient without stops of its own uses the stops of the nearest gradient in
its href chain that has any. The stops are copied, after which the `href` is
no longer needed and is removed.
"""

from __future__ import annotations

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.gradients import ChainCycle, has_stops, href_chain, stops
from svgnorm.engine.registry import Stage, transform
from svgnorm.svg.document import GRADIENTS


@transform(
    id="P07",
    stage=Stage.REFERENCES,
    dependencies=["P06"],
    description="Copy stops from linked gradients",
)
def resolve_gradient_stops(ctx: PreprocessContext) -> None:
    doc = ctx.document
    gradients = [h for h in doc.elements() if doc.node(h).tag in GRADIENTS]

    for h in gradients:
        if has_stops(doc, h):
            continue
        source = _find_stops_source(ctx, h)
        if source is not None:
            for stop in stops(doc, source):
                doc.append(h, doc.deep_copy(stop))

    for h in gradients:
        doc.node(h).remove_attr("href")


def _find_stops_source(ctx: PreprocessContext, handle: int) -> int | None:
    doc = ctx.document
    try:
        for h in href_chain(doc, handle, ctx.options.max_reference_depth):
            if h != handle and has_stops(doc, h):
                return h
    except ChainCycle:
        # Already reported and cut by P06.
        return None
    return None
