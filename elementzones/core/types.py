"""Shared types and dataclasses for element-zones."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from elementzones.scopes.stack import ScopeStack


class CallbackKind(str, Enum):
    REGISTER = "register"
    CREATED = "created"
    ATTACHED = "attached"
    DETACHED = "detached"
    ATTRIBUTE_CHANGED = "attributeChanged"
    DATA = "data"  # property setter + notify_path


@dataclass
class ScopeStats:
    """Counters for one scope. Named sub-scope stats are aliased in ``children``."""

    count: int = 0
    total_time: float = 0.0  # ms, exclusive of nested scopes
    start_time: float = 0.0  # 0 when not running
    category: str | None = None  # tag name, set on category roots only
    children: dict[str, ScopeStats] = field(default_factory=dict)

    def __getitem__(self, name: str) -> ScopeStats:
        return self.children[name]

    def __contains__(self, name: object) -> bool:
        return name in self.children

    def get(self, name: str) -> ScopeStats | None:
        return self.children.get(name)

    @property
    def running(self) -> bool:
        return self.start_time > 0

    def zero(self) -> None:
        self.count = 0
        self.total_time = 0.0
        self.start_time = 0.0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "count": self.count,
            "totalTime": self.total_time,
            "startTime": self.start_time,
        }
        if self.category is not None:
            data["tagName"] = self.category
        for name, child in self.children.items():
            data[name] = child.to_dict()
        return data


@dataclass(eq=False)
class Scope:
    """A node in the measurement tree. Compared by identity."""

    name: str | None
    category: str
    stats: ScopeStats
    stack: ScopeStack
    parent: Scope | None = None
    children: dict[str, Scope] = field(default_factory=dict)

    @property
    def path(self) -> str:
        return f"{self.category}.{self.name}" if self.name else self.category

    def bind(self, fn: Callable) -> Callable:
        from elementzones.scopes.interceptor import bind

        return bind(self, fn)

    def run(self, fn: Callable, *args: Any, **kwargs: Any) -> Any:
        """Call ``fn`` once inside this scope."""
        return self.bind(fn)(*args, **kwargs)

    def __repr__(self) -> str:
        return f"Scope({self.path!r})"


# Attribute names looked up on an element class, per callback slot
_CALLBACK_ATTRS: dict[str, str] = {
    "created": "created_callback",
    "attached": "attached_callback",
    "detached": "detached_callback",
    "attribute_changed": "attribute_changed_callback",
    "property_setter": "_property_setter",
    "notify_path": "notify_path",
}


@dataclass
class LifecycleCallbacks:
    """The capability set of an element type: whichever callbacks it defines."""

    created: Callable | None = None
    attached: Callable | None = None
    detached: Callable | None = None
    attribute_changed: Callable | None = None
    property_setter: Callable | None = None
    notify_path: Callable | None = None

    @classmethod
    def from_object(cls, obj: Any) -> LifecycleCallbacks:
        """Resolve the capability set from a class (or prototype-like object)."""
        found = {}
        for slot, attr in _CALLBACK_ATTRS.items():
            fn = getattr(obj, attr, None)
            if callable(fn):
                found[slot] = fn
        return cls(**found)

    @staticmethod
    def attribute_name(slot: str) -> str:
        return _CALLBACK_ATTRS[slot]

    @property
    def has_data_hooks(self) -> bool:
        return self.property_setter is not None or self.notify_path is not None

    def present(self) -> dict[str, Callable]:
        """Return the defined callbacks keyed by slot name."""
        return {
            slot: getattr(self, slot)
            for slot in _CALLBACK_ATTRS
            if getattr(self, slot) is not None
        }
