"""P17 — Remove Invalid Transforms.

A transform that could not be parsed or cannot be inverted is treated as the
identity. Identity transforms are dropped so the output only carries
meaningful ones.
"""

from __future__ import annotations

import logging

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.registry import Stage, transform
from svgnorm.svg.values import Transform

logger = logging.getLogger(__name__)

_TRANSFORM_ATTRIBUTES = ("transform", "gradientTransform")


@transform(
    id="P17",
    stage=Stage.SIMPLIFY,
    dependencies=["P16"],
    description="Drop malformed, singular and identity transforms",
)
def rm_invalid_transforms(ctx: PreprocessContext) -> None:
    doc = ctx.document
    for h in doc.elements():
        node = doc.node(h)
        for aid in _TRANSFORM_ATTRIBUTES:
            if not node.has(aid):
                continue
            ts = node.get(aid)
            if not isinstance(ts, Transform):
                ctx.diagnostics.warn(logger, node.label(), "invalid %s %r removed", aid, ts)
                node.remove_attr(aid)
            elif not ts.is_invertible():
                ctx.diagnostics.warn(logger, node.label(), "non-invertible %s removed", aid)
                node.remove_attr(aid)
            elif ts.is_identity():
                node.remove_attr(aid)
