"""P11 — Ungroup Anchors.

Links have no visual of their own. An `a` is replaced by its children; its
transform is pushed into theirs (inheritable style was already pushed down by
P02). An `a` with opacity is kept as a group.
"""

from __future__ import annotations

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.registry import Stage, transform
from svgnorm.svg.document import ElementId
from svgnorm.utils.geometry import push_transform


@transform(
    id="P11",
    stage=Stage.SIMPLIFY,
    dependencies=["P10"],
    description="Replace anchor elements with their children",
)
def ungroup_a(ctx: PreprocessContext) -> None:
    doc = ctx.document
    for h in reversed(doc.elements(ElementId.A)):
        node = doc.node(h)
        if node.get("opacity", 1.0) != 1.0:
            node.tag = ElementId.G
            node.remove_attr("href")
            continue
        push_transform(doc, h, ctx.diagnostics)
        doc.replace_with_children(h)
