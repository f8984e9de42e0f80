from elementzones.query.bridge import PlaywrightBridge
from elementzones.query.endpoint import (
    CLEAR_STATS,
    GET_STATS,
    STATS_RESULT,
    StatsEndpoint,
    is_stats_request,
)
from elementzones.query.port import QueuePort

__all__ = [
    "CLEAR_STATS",
    "GET_STATS",
    "STATS_RESULT",
    "PlaywrightBridge",
    "QueuePort",
    "StatsEndpoint",
    "is_stats_request",
]
