"""P19 — Ungroup Groups.

A group only matters to the renderer when it applies a compound effect
(opacity, clip-path, mask or filter). Every other group is dissolved into its
children, whose transforms absorb the group's one.
"""

from __future__ import annotations

import logging

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.registry import Stage, transform
from svgnorm.svg.document import ElementId, Node
from svgnorm.utils.geometry import push_transform

logger = logging.getLogger(__name__)

COMPOUND_EFFECTS = ("clip-path", "mask", "filter")


def has_compound_effect(node: Node) -> bool:
    return node.get("opacity", 1.0) != 1.0 or any(node.has(aid) for aid in COMPOUND_EFFECTS)


@transform(
    id="P19",
    stage=Stage.SIMPLIFY,
    dependencies=["P18"],
    description="Dissolve groups without compound effects",
)
def ungroup_groups(ctx: PreprocessContext) -> None:
    doc = ctx.document
    ungrouped = 0
    for h in reversed(doc.elements(ElementId.G)):
        if h not in doc or doc.in_referenced_subtree(h):
            continue
        node = doc.node(h)
        if not doc.element_children(h):
            doc.remove(h)
            continue
        if has_compound_effect(node):
            continue
        push_transform(doc, h, ctx.diagnostics)
        doc.replace_with_children(h)
        ungrouped += 1
    logger.debug("Ungrouped %d groups", ungrouped)
