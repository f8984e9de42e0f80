"""ElementInstrumenter — binds an element type's lifecycle callbacks to scopes."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

import structlog

from elementzones.core.types import CallbackKind, LifecycleCallbacks, Scope
from elementzones.scopes.interceptor import bind, bound_scope
from elementzones.scopes.tree import ScopeTree

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=type)

# Callback slot → named sub-scope
_SLOT_KINDS: dict[str, CallbackKind] = {
    "created": CallbackKind.CREATED,
    "attached": CallbackKind.ATTACHED,
    "detached": CallbackKind.DETACHED,
    "attribute_changed": CallbackKind.ATTRIBUTE_CHANGED,
    "property_setter": CallbackKind.DATA,
    "notify_path": CallbackKind.DATA,
}


class ElementInstrumenter:
    """
    Returns instrumented equivalents of an element type's callbacks.

    The host glue keeps dispatching the callbacks as usual; each call is
    charged to ``<category>.<kind>`` on the callback stack.
    """

    def __init__(self, tree: ScopeTree, *, enabled: bool = True) -> None:
        self._tree = tree
        self.enabled = enabled

    def scope_for(self, category: str, kind: CallbackKind | str) -> Scope:
        name = kind.value if isinstance(kind, CallbackKind) else kind
        return self._tree.child_scope(self._tree.category_scope(category), name)

    def instrument(self, category: str, callbacks: LifecycleCallbacks) -> LifecycleCallbacks:
        """Return a LifecycleCallbacks whose present callbacks are scope-bound."""
        if not self.enabled:
            return callbacks
        root = self._tree.category_scope(category)
        bound: dict[str, Callable] = {}
        for slot, fn in callbacks.present().items():
            scope = self.scope_for(category, _SLOT_KINDS[slot])
            if bound_scope(fn) is scope:
                bound[slot] = fn
                continue
            if slot == "created":
                fn = _counting(root, fn)
            bound[slot] = bind(scope, fn)
        return LifecycleCallbacks(**bound)

    def instrument_class(self, category: str, cls: T) -> T:
        """Replace ``cls``'s lifecycle methods with scope-bound wrappers, in place."""
        if not self.enabled:
            return cls
        bound = self.instrument(category, LifecycleCallbacks.from_object(cls))
        for slot, fn in bound.present().items():
            setattr(cls, LifecycleCallbacks.attribute_name(slot), fn)
        return cls

    def register(self, category: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """
        Run the host's registration call for ``category`` inside its register scope.

        Re-entrant registration from within the same register scope runs directly.
        """
        if not self.enabled:
            return fn(*args, **kwargs)
        scope = self.scope_for(category, CallbackKind.REGISTER)
        logger.debug("element_registered", category=category)
        if scope.stack.top is scope:
            return fn(*args, **kwargs)
        return scope.run(fn, *args, **kwargs)

    def defer(self, fn: Callable, wait_time: float | None = None) -> Callable:
        """
        Bind a continuation to the scope active when it is scheduled.

        Work queued from inside a callback is charged back to that callback
        when it later runs. Delayed work (``wait_time > 0``) and work queued
        outside any scope is returned unbound.
        """
        if not self.enabled or (wait_time is not None and wait_time > 0):
            return fn
        current = self._tree.callback_stack.top
        if current is None:
            return fn
        return bind(current, fn)

    def wrap(self, category: str, fn: Callable) -> Callable:
        """Bind a continuation to the category's root scope regardless of where it was queued."""
        if not self.enabled:
            return fn
        return bind(self._tree.category_scope(category), fn)


def _counting(root: Scope, fn: Callable) -> Callable:
    """Count created instances on the category root before calling ``fn``."""

    @functools.wraps(fn)
    def created(*args: Any, **kwargs: Any) -> Any:
        root.stack.add_count(root)
        return fn(*args, **kwargs)

    return created
