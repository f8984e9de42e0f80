"""StatsEndpoint — answers get/clear requests with a stats snapshot."""

from __future__ import annotations

from typing import Any

from elementzones.stats.aggregator import StatsAggregator

GET_STATS = "get-element-stats"
CLEAR_STATS = "clear-element-stats"
STATS_RESULT = "element-stats"

REQUEST_TYPES = frozenset({GET_STATS, CLEAR_STATS})


def is_stats_request(message: Any) -> bool:
    return isinstance(message, dict) and message.get("messageType") in REQUEST_TYPES


class StatsEndpoint:
    """
    Transport-independent request handler.

    Exactly one response per recognised request; anything else is ignored
    and yields None.
    """

    def __init__(self, aggregator: StatsAggregator) -> None:
        self._aggregator = aggregator

    async def handle(self, message: Any) -> dict[str, Any] | None:
        if not is_stats_request(message):
            return None
        if message["messageType"] == CLEAR_STATS:
            self._aggregator.reset()
        return {
            "messageType": STATS_RESULT,
            "data": self._aggregator.to_dict(),
        }
