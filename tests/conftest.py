"""Shared fixtures: a deterministic millisecond clock."""

from __future__ import annotations

import pytest


class FakeClock:
    """Manually advanced clock. Starts above zero since start_time == 0 means idle."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
