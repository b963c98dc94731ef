"""P16 — Ungroup `switch`.

Only one branch of a `switch` is rendered. The choice is delegated to
``Options.switch_policy``; the first accepted child element is kept and the
`switch` becomes a plain group around it.
"""

from __future__ import annotations

import logging

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.registry import Stage, transform
from svgnorm.svg.document import ElementId

logger = logging.getLogger(__name__)


@transform(
    id="P16",
    stage=Stage.SIMPLIFY,
    dependencies=["P15"],
    description="Keep the selected branch of switch elements",
)
def ungroup_switch(ctx: PreprocessContext) -> None:
    doc = ctx.document
    policy = ctx.options.switch_policy
    # Innermost first, so a nested switch is decided before its parent looks at it.
    for h in reversed(doc.elements(ElementId.SWITCH)):
        if h not in doc:
            continue
        chosen = next((c for c in doc.element_children(h) if policy(doc, c)), None)
        for child in doc.children(h):
            if child != chosen:
                doc.remove(child)
        if chosen is None:
            logger.debug("switch %s has no accepted branch", doc.node(h).label())
        node = doc.node(h)
        node.tag = ElementId.G
        for aid in ("requiredFeatures", "requiredExtensions", "systemLanguage"):
            node.remove_attr(aid)
