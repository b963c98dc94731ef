"""P06 — Resolve Gradient Attributes.

A gradient may inherit unset attributes from the gradient its `href` points
to, transitively. Coordinates are only taken from gradients of the same kind;
units, spread method and transform from any gradient. Unset values then get
their defaults, so the converter never looks at the chain again.
"""

from __future__ import annotations

import logging

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.gradients import (
    COMMON_ATTRIBUTES,
    LINEAR_COORDS,
    OBJECT_BOUNDING_BOX,
    RADIAL_COORDS,
    ChainCycle,
    href_chain,
)
from svgnorm.engine.registry import Stage, transform
from svgnorm.engine.units import diagonal_basis
from svgnorm.svg.document import ElementId

logger = logging.getLogger(__name__)


@transform(
    id="P06",
    stage=Stage.REFERENCES,
    dependencies=["P05"],
    description="Inherit gradient attributes through href links",
)
def resolve_gradient_attributes(ctx: PreprocessContext) -> None:
    doc = ctx.document
    resolved = []
    for kind, coords in (
        (ElementId.LINEAR_GRADIENT, LINEAR_COORDS),
        (ElementId.RADIAL_GRADIENT, RADIAL_COORDS),
    ):
        for h in doc.elements(kind):
            _inherit_from_chain(ctx, h, coords)
            resolved.append(h)
    # Defaults only once every chain has been read, so they never propagate.
    for h in resolved:
        _apply_defaults(ctx, h)


def _inherit_from_chain(ctx: PreprocessContext, handle: int, coords: tuple[str, ...]) -> None:
    doc = ctx.document
    node = doc.node(handle)
    chain: list[int] = []
    try:
        for h in href_chain(doc, handle, ctx.options.max_reference_depth):
            chain.append(h)
    except ChainCycle:
        ctx.diagnostics.warn(logger, node.label(), "gradient href chain is recursive, link ignored")
        node.remove_attr("href")

    for linked in chain[1:]:
        other = doc.node(linked)
        names = COMMON_ATTRIBUTES + (coords if other.tag == node.tag else ())
        for aid in names:
            if aid not in node.attributes and aid in other.attributes:
                node.attributes[aid] = other.attributes[aid]


def _apply_defaults(ctx: PreprocessContext, handle: int) -> None:
    node = ctx.document.node(handle)
    node.attributes.setdefault("gradientUnits", OBJECT_BOUNDING_BOX)
    node.attributes.setdefault("spreadMethod", "pad")
    if node.get("spreadMethod") not in ("pad", "reflect", "repeat"):
        node.attributes["spreadMethod"] = "pad"

    # Default coordinates are percentages: fractions of the bounding box, or
    # of the viewport for userSpaceOnUse.
    if node.get("gradientUnits") == OBJECT_BOUNDING_BOX:
        w = h = d = 1.0
    else:
        vb = ctx.view_box
        w, h, d = vb.width, vb.height, diagonal_basis(vb.width, vb.height)

    if node.tag == ElementId.LINEAR_GRADIENT:
        node.attributes.setdefault("x1", 0.0)
        node.attributes.setdefault("y1", 0.0)
        node.attributes.setdefault("x2", w)
        node.attributes.setdefault("y2", 0.0)
    else:
        node.attributes.setdefault("cx", 0.5 * w)
        node.attributes.setdefault("cy", 0.5 * h)
        node.attributes.setdefault("r", 0.5 * d)
        node.attributes.setdefault("fx", node.get("cx"))
        node.attributes.setdefault("fy", node.get("cy"))
