"""ScopeStack — pause/resume engine for exclusive time attribution."""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING, Callable

from elementzones.core.exceptions import StackMismatchError

if TYPE_CHECKING:
    from elementzones.core.types import Scope


def default_clock() -> float:
    """Monotonic clock in milliseconds."""
    return time.perf_counter() * 1000.0


class ScopeStack:
    """
    Stack of currently-active scopes for one nesting domain.

    Only the innermost scope's timer runs. Entering a nested scope pauses the
    scope below it; exiting resumes it, so every instant is charged to exactly
    one scope. The lock covers bookkeeping only, never the wrapped call.
    """

    def __init__(self, *, clock: Callable[[], float] | None = None, name: str = "") -> None:
        self.name = name
        self._clock = clock or default_clock
        self._active: list[Scope] = []
        self._lock = threading.Lock()

    @property
    def top(self) -> Scope | None:
        return self._active[-1] if self._active else None

    @property
    def depth(self) -> int:
        return len(self._active)

    def __len__(self) -> int:
        return len(self._active)

    def __contains__(self, scope: object) -> bool:
        return any(s is scope for s in self._active)

    def enter(self, scope: Scope) -> None:
        with self._lock:
            now = self._clock()
            if self._active:
                prev = self._active[-1].stats
                if prev.start_time > 0:
                    prev.total_time += now - prev.start_time
                    prev.start_time = 0.0
            # Category roots count created instances instead of entries
            if scope.name:
                scope.stats.count += 1
            scope.stats.start_time = now
            self._active.append(scope)

    def exit(self, scope: Scope) -> None:
        with self._lock:
            current = self._active[-1] if self._active else None
            if current is not scope:
                raise StackMismatchError(scope, current, self.name)
            self._active.pop()

            now = self._clock()
            stats = scope.stats
            # start_time is 0 if a reset landed while this scope was active
            if stats.start_time > 0:
                stats.total_time += now - stats.start_time
            stats.start_time = 0.0

            if self._active:
                self._active[-1].stats.start_time = now

    def add_count(self, scope: Scope, n: int = 1) -> None:
        """Bump ``scope``'s count under the bookkeeping lock."""
        with self._lock:
            scope.stats.count += n

    def clear(self) -> None:
        """Drop all active entries without charging time."""
        with self._lock:
            for scope in self._active:
                scope.stats.start_time = 0.0
            self._active.clear()
