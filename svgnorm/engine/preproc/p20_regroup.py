"""P20 — Regroup Elements.

Only groups carry opacity in the render tree. A graphic element with opacity
is wrapped into a new group holding it, and a group combining opacity with a
clip-path, mask or filter gets an outer group for the opacity so each group
applies one compound effect.
"""

from __future__ import annotations

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.preproc.p19_ungroup_groups import COMPOUND_EFFECTS
from svgnorm.engine.registry import Stage, transform
from svgnorm.engine.style import resolve_node
from svgnorm.svg.document import GRAPHICS, ElementId


@transform(
    id="P20",
    stage=Stage.SIMPLIFY,
    dependencies=["P19"],
    description="Move element opacity onto dedicated groups",
)
def regroup_elements(ctx: PreprocessContext) -> None:
    doc = ctx.document
    for h in doc.elements():
        if doc.in_referenced_subtree(h):
            continue
        node = doc.node(h)
        opacity = node.get("opacity", 1.0)
        if opacity >= 1.0:
            continue

        split = node.tag == ElementId.G and any(node.has(aid) for aid in COMPOUND_EFFECTS)
        if node.tag in GRAPHICS or split:
            node.remove_attr("opacity")
            wrapper = doc.wrap(h, ElementId.G, {"opacity": opacity})
            resolve_node(doc, wrapper, with_font_size=True)
