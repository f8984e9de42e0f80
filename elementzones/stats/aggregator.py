"""StatsAggregator — snapshot and reset over the scope tree."""

from __future__ import annotations

from typing import Any

import structlog

from elementzones.core.types import ScopeStats
from elementzones.scopes.tree import ScopeTree

logger = structlog.get_logger(__name__)


class StatsAggregator:
    """Reads and resets statistics without pausing collection."""

    def __init__(self, tree: ScopeTree) -> None:
        self._tree = tree

    def snapshot(self) -> dict[str, ScopeStats]:
        """
        Return the live stats for every category, keyed by category.

        The values are the objects the engine mutates; callers must treat
        them as read-only. Time for the innermost active scope is not
        flushed until it exits or is paused.
        """
        return {scope.category: scope.stats for scope in self._tree}

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Serialized snapshot (plain dicts, camelCase keys) for the wire."""
        return {key: stats.to_dict() for key, stats in self.snapshot().items()}

    def reset(self) -> None:
        """Zero every category root and all of its sub-scopes in place."""
        for root in self._tree:
            pending = [root]
            while pending:
                scope = pending.pop()
                scope.stats.zero()
                pending.extend(scope.children.values())
        logger.debug("stats_cleared", categories=len(self._tree))
