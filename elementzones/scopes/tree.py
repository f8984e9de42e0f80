"""ScopeTree — get-or-create cache of category scopes and their named sub-scopes."""

from __future__ import annotations

from typing import Iterator

import structlog

from elementzones.core.types import Scope, ScopeStats
from elementzones.scopes.stack import ScopeStack

logger = structlog.get_logger(__name__)


class ScopeTree:
    """
    Memoizes one root scope per category and one child scope per (parent, name).

    Repeated lookups return the same Scope object; the stack engine compares
    scopes by identity.
    """

    def __init__(self, category_stack: ScopeStack, callback_stack: ScopeStack) -> None:
        self.category_stack = category_stack
        self.callback_stack = callback_stack
        self._categories: dict[str, Scope] = {}

    def category_scope(self, key: str) -> Scope:
        scope = self._categories.get(key)
        if scope is not None:
            return scope
        logger.debug("scope_created", category=key)
        scope = Scope(
            name=None,
            category=key,
            stats=ScopeStats(category=key),
            stack=self.category_stack,
        )
        self._categories[key] = scope
        return scope

    def child_scope(self, parent: Scope, name: str, stack: ScopeStack | None = None) -> Scope:
        """
        Return ``parent``'s sub-scope called ``name``, creating it on first use.

        Named sub-scope stats are aliased under ``parent.stats[name]``. New
        children default to the callback stack.
        """
        child = parent.children.get(name)
        if child is not None:
            return child
        logger.debug("scope_created", category=parent.category, name=name or None)
        child = Scope(
            name=name or None,
            category=parent.category,
            stats=ScopeStats(),
            stack=stack or self.callback_stack,
            parent=parent,
        )
        parent.children[name] = child
        if name:
            parent.stats.children[name] = child.stats
        return child

    def get(self, key: str) -> Scope | None:
        return self._categories.get(key)

    def categories(self) -> list[str]:
        return list(self._categories)

    def __iter__(self) -> Iterator[Scope]:
        return iter(list(self._categories.values()))

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, key: object) -> bool:
        return key in self._categories
