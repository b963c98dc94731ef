"""P13 — Resolve Visibility.

Fold `display` into the single effective `visibility` value. `display: none`
hides a whole subtree and cannot be overridden; `visibility` was inherited by
P02 and a descendant may set it back to `visible`.
"""

from __future__ import annotations

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.registry import Stage, transform

HIDDEN = "hidden"
VISIBLE = "visible"


@transform(
    id="P13",
    stage=Stage.SIMPLIFY,
    dependencies=["P12"],
    description="Fold display into visibility",
)
def resolve_visibility(ctx: PreprocessContext) -> None:
    doc = ctx.document
    for h in doc.elements():
        if h not in doc:
            continue
        node = doc.node(h)
        display = node.get("display")
        node.remove_attr("display")
        if display == "none" and not doc.is_referenced(h):
            for sub in doc.descendants(h):
                if doc.node(sub).is_element:
                    doc.node(sub).set("visibility", HIDDEN)
        elif node.get("visibility") == "collapse":
            node.attributes["visibility"] = HIDDEN
