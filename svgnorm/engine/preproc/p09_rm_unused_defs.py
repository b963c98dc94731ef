"""P09 — Remove Unused Defs.

Prune referenced nodes that no rendered node reaches, directly or through
another live reference.
"""

from __future__ import annotations

import logging

from svgnorm.engine.context import PreprocessContext
from svgnorm.engine.registry import Stage, transform

logger = logging.getLogger(__name__)


@transform(
    id="P09",
    stage=Stage.REFERENCES,
    dependencies=["P08"],
    description="Remove unreachable referenced nodes",
)
def remove_unused_defs(ctx: PreprocessContext) -> None:
    removed = ctx.document.prune_unused_references()
    if removed:
        logger.debug("Removed %d unused referenced nodes", len(removed))
