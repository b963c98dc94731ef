"""P10 — Resolve `use`.

Every `use` element turns into a group holding a deep clone of its target:

- the group keeps the `use` id and style, and its transform gains the
  translate(x, y) offset;
- values the clone had inherited in the defs context are dropped, the
  `use`'s own inheritable properties override the clone root's, and
  inheritance is re-run from the new group;
- nested `use` elements inside the clone are expanded recursively.

Referenced nodes are shared, so the clone is the only thing ever modified.
A `use` that reaches a node already being instantiated (or one of its own
ancestors) is dropped instead of recursing forever.
"""

from __future__ import annotations

import logging

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.registry import Stage, transform
from svgnorm.engine.style import forget_inherited, resolve_subtree
from svgnorm.svg.document import ElementId
from svgnorm.svg.properties import INHERITABLE
from svgnorm.svg.values import IDENTITY, Link, Transform

logger = logging.getLogger(__name__)

_GEOMETRY = ("x", "y", "width", "height", "href")


@transform(
    id="P10",
    stage=Stage.REFERENCES,
    dependencies=["P09"],
    description="Replace use elements with clones of their targets",
)
def resolve_use(ctx: PreprocessContext) -> None:
    doc = ctx.document
    for h in doc.elements(ElementId.USE):
        if h not in doc or doc.in_referenced_subtree(h):
            continue
        _instantiate(ctx, h, frozenset())

    # The instantiated defs are no longer linked from anywhere.
    doc.prune_unused_references()


def _instantiate(ctx: PreprocessContext, use_h: int, visiting: frozenset[int]) -> None:
    doc = ctx.document
    use = doc.node(use_h)
    link = use.get("href")
    target = link.target if isinstance(link, Link) and link.target in doc else None

    if target is None:
        ctx.diagnostics.warn(logger, use.label(), "'use' references nothing, removed")
        doc.remove(use_h)
        return
    if target in visiting or doc.is_descendant(use_h, target):
        ctx.diagnostics.warn(
            logger, use.label(), "recursive 'use' of %s, removed", doc.node(target).label()
        )
        doc.remove(use_h)
        return
    if len(visiting) >= ctx.options.max_reference_depth:
        ctx.diagnostics.warn(logger, use.label(), "'use' nesting is too deep, removed")
        doc.remove(use_h)
        return

    clone = doc.deep_copy(target)
    forget_inherited(doc, clone)
    for h in doc.descendants(clone):
        doc.node(h).id = ""

    root = doc.node(clone)
    if root.tag == ElementId.SYMBOL:
        root.tag = ElementId.G
        for aid in ("viewBox", "preserveAspectRatio"):
            root.remove_attr(aid)

    # Instance-local override.
    for aid, value in use.attributes.items():
        if aid in INHERITABLE and aid not in use.inherited:
            root.set(aid, value)

    _to_group(use_h, ctx)
    doc.append(use_h, clone)
    resolve_subtree(doc, clone, with_font_size=True)

    for h in list(doc.descendants(clone)):
        if h in doc and doc.node(h).tag == ElementId.USE:
            _instantiate(ctx, h, visiting | {target})


def _to_group(use_h: int, ctx: PreprocessContext) -> None:
    use = ctx.document.node(use_h)
    x = use.get("x", 0.0)
    y = use.get("y", 0.0)
    for aid in _GEOMETRY:
        use.remove_attr(aid)
    use.tag = ElementId.G

    if x or y:
        ts = use.get("transform", IDENTITY)
        if isinstance(ts, Transform):
            use.set("transform", ts.multiply(Transform.translate(x, y)))
        else:
            ctx.diagnostics.warn(logger, use.label(), "'use' offset dropped: invalid transform")
