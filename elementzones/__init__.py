from elementzones.core.exceptions import ElementZonesError, StackMismatchError
from elementzones.core.monitor import ElementMonitor
from elementzones.core.types import (
    CallbackKind,
    LifecycleCallbacks,
    Scope,
    ScopeStats,
)
from elementzones.instrument.instrumenter import ElementInstrumenter
from elementzones.query import (
    CLEAR_STATS,
    GET_STATS,
    STATS_RESULT,
    PlaywrightBridge,
    QueuePort,
    StatsEndpoint,
)
from elementzones.scopes import ScopeStack, ScopeTree, bind
from elementzones.stats import StatsAggregator, format_report

__all__ = [
    "ElementMonitor",
    "CallbackKind",
    "LifecycleCallbacks",
    "Scope",
    "ScopeStats",
    "ElementZonesError",
    "StackMismatchError",
    # Engine
    "ScopeStack",
    "ScopeTree",
    "bind",
    "ElementInstrumenter",
    # Stats + query
    "StatsAggregator",
    "format_report",
    "StatsEndpoint",
    "QueuePort",
    "PlaywrightBridge",
    "GET_STATS",
    "CLEAR_STATS",
    "STATS_RESULT",
]
