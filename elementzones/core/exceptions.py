"""Exceptions raised by element-zones."""

from __future__ import annotations

from typing import Any


class ElementZonesError(Exception):
    """Base class for element-zones errors."""


class StackMismatchError(ElementZonesError, AssertionError):
    """A scope exit did not match the innermost active scope (unbalanced enter/exit)."""

    def __init__(self, expected: Any, actual: Any, stack_name: str = "") -> None:
        self.expected = expected
        self.actual = actual
        self.stack_name = stack_name
        where = f" on {stack_name} stack" if stack_name else ""
        super().__init__(f"Scope stack out of sync{where}: exiting {expected!r} but top is {actual!r}")
