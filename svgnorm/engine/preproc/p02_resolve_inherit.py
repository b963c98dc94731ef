"""P02 — Resolve Attribute Inheritance.

Push every inheritable presentation property down to the descendants that do
not set it, and replace explicit `inherit` keywords. Afterwards every pass
reads attributes locally. Copied values are recorded in ``Node.inherited`` so
that `use` instantiation can re-inherit from the instance context.
"""

from __future__ import annotations

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.registry import Stage, transform
from svgnorm.engine.style import resolve_subtree


@transform(
    id="P02",
    stage=Stage.STYLE,
    dependencies=["P01"],
    description="Propagate inheritable properties to descendants",
)
def resolve_inherit(ctx: PreprocessContext) -> None:
    # Preorder: a parent is always resolved before its children.
    resolve_subtree(ctx.document, ctx.svg)
