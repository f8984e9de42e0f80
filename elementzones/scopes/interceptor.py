"""Interceptor — run a callback inside a measurement scope."""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any, Callable, TypeVar

if TYPE_CHECKING:
    from elementzones.core.types import Scope

F = TypeVar("F", bound=Callable[..., Any])


def bind(scope: Scope, fn: F) -> F:
    """
    Wrap ``fn`` so every call runs inside ``scope``.

    The wrapper enters the scope on its stack, calls ``fn`` with the original
    arguments (``self`` included when installed as a method), and exits the
    scope even when ``fn`` raises. Return values and exceptions pass through.
    """
    stack = scope.stack

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        stack.enter(scope)
        try:
            return fn(*args, **kwargs)
        finally:
            stack.exit(scope)

    wrapper.__elementzones_scope__ = scope  # type: ignore[attr-defined]
    return wrapper  # type: ignore[return-value]


def bound_scope(fn: Callable) -> Scope | None:
    """Return the scope a wrapper was bound to, or None for plain callables."""
    return getattr(fn, "__elementzones_scope__", None)
