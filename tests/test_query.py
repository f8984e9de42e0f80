"""Tests for the query layer: StatsEndpoint, QueuePort, PlaywrightBridge (mock page)."""

from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from elementzones.core.types import LifecycleCallbacks
from elementzones.instrument.instrumenter import ElementInstrumenter
from elementzones.query.bridge import PlaywrightBridge
from elementzones.query.endpoint import (
    CLEAR_STATS,
    GET_STATS,
    STATS_RESULT,
    StatsEndpoint,
    is_stats_request,
)
from elementzones.query.port import QueuePort
from elementzones.scopes.stack import ScopeStack
from elementzones.scopes.tree import ScopeTree
from elementzones.stats.aggregator import StatsAggregator


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_endpoint(clock) -> tuple[StatsEndpoint, ElementInstrumenter]:
    tree = ScopeTree(ScopeStack(clock=clock), ScopeStack(clock=clock))
    inst = ElementInstrumenter(tree)

    def created():
        clock.advance(10)

    inst.instrument("x-foo", LifecycleCallbacks(created=created)).created()
    return StatsEndpoint(StatsAggregator(tree)), inst


def make_page(url="https://example.com") -> MagicMock:
    page = MagicMock()
    page.url = url
    page.expose_binding = AsyncMock()
    page.add_init_script = AsyncMock()
    page.evaluate = AsyncMock()
    return page


# ---------------------------------------------------------------------------
# StatsEndpoint
# ---------------------------------------------------------------------------

class TestStatsEndpoint:
    @pytest.mark.asyncio
    async def test_get_stats_returns_snapshot(self, clock):
        endpoint, _ = make_endpoint(clock)
        response = await endpoint.handle({"messageType": GET_STATS})
        assert response["messageType"] == STATS_RESULT
        assert response["data"]["x-foo"]["created"]["totalTime"] == pytest.approx(10)
        assert response["data"]["x-foo"]["count"] == 1

    @pytest.mark.asyncio
    async def test_clear_stats_resets_then_responds(self, clock):
        endpoint, _ = make_endpoint(clock)
        response = await endpoint.handle({"messageType": CLEAR_STATS})
        foo = response["data"]["x-foo"]
        assert foo["count"] == 0
        assert foo["created"]["totalTime"] == 0

    @pytest.mark.asyncio
    async def test_clear_then_get_returns_zeros(self, clock):
        endpoint, _ = make_endpoint(clock)
        await endpoint.handle({"messageType": CLEAR_STATS})
        response = await endpoint.handle({"messageType": GET_STATS})
        foo = response["data"]["x-foo"]
        assert (foo["count"], foo["totalTime"], foo["startTime"]) == (0, 0, 0)
        assert foo["created"]["count"] == 0

    @pytest.mark.asyncio
    async def test_response_is_json_serializable(self, clock):
        endpoint, _ = make_endpoint(clock)
        response = await endpoint.handle({"messageType": GET_STATS})
        assert json.loads(json.dumps(response)) == response

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", [
        {"messageType": "something-else"},
        {"data": 1},
        "get-element-stats",
        None,
    ])
    async def test_unrelated_messages_ignored(self, clock, message):
        endpoint, _ = make_endpoint(clock)
        assert await endpoint.handle(message) is None

    def test_is_stats_request(self):
        assert is_stats_request({"messageType": GET_STATS})
        assert is_stats_request({"messageType": CLEAR_STATS})
        assert not is_stats_request({"messageType": STATS_RESULT})


# ---------------------------------------------------------------------------
# QueuePort
# ---------------------------------------------------------------------------

class TestQueuePort:
    @pytest.mark.asyncio
    async def test_one_response_per_request(self, clock):
        endpoint, _ = make_endpoint(clock)
        port = QueuePort(endpoint)
        server = asyncio.create_task(port.serve())

        first = await port.request({"messageType": GET_STATS})
        cleared = await port.request({"messageType": CLEAR_STATS})
        ignored = await port.request({"messageType": "ping"})

        await port.close()
        await asyncio.wait_for(server, timeout=1)

        assert first["data"]["x-foo"]["created"]["totalTime"] == pytest.approx(10)
        assert cleared["data"]["x-foo"]["created"]["totalTime"] == 0
        assert ignored is None

    @pytest.mark.asyncio
    async def test_concurrent_requests_each_answered(self, clock):
        endpoint, _ = make_endpoint(clock)
        port = QueuePort(endpoint)
        server = asyncio.create_task(port.serve())

        responses = await asyncio.gather(
            *(port.request({"messageType": GET_STATS}) for _ in range(5))
        )
        await port.close()
        await server

        assert len(responses) == 5
        assert all(r["messageType"] == STATS_RESULT for r in responses)

    @pytest.mark.asyncio
    async def test_handler_error_reaches_requester(self, clock):
        endpoint = MagicMock()
        endpoint.handle = AsyncMock(side_effect=RuntimeError("boom"))
        port = QueuePort(endpoint)
        server = asyncio.create_task(port.serve())

        with pytest.raises(RuntimeError, match="boom"):
            await port.request({"messageType": GET_STATS})

        await port.close()
        await server

    @pytest.mark.asyncio
    async def test_request_after_close_raises(self, clock):
        endpoint, _ = make_endpoint(clock)
        port = QueuePort(endpoint)
        await port.close()
        with pytest.raises(RuntimeError):
            await port.request({"messageType": GET_STATS})


# ---------------------------------------------------------------------------
# PlaywrightBridge
# ---------------------------------------------------------------------------

class TestPlaywrightBridge:
    @pytest.mark.asyncio
    async def test_attach_exposes_binding_and_installs_listener(self, clock):
        endpoint, _ = make_endpoint(clock)
        bridge = PlaywrightBridge(endpoint)
        page = make_page()

        await bridge.attach(page)

        page.expose_binding.assert_awaited_once()
        name, handler = page.expose_binding.await_args.args
        assert name == "__elementZonesQuery"
        page.add_init_script.assert_awaited_once_with(bridge.listener_script)
        page.evaluate.assert_awaited_once_with(bridge.listener_script)
        assert bridge.pages == [page]

    @pytest.mark.asyncio
    async def test_binding_answers_requests(self, clock):
        endpoint, _ = make_endpoint(clock)
        bridge = PlaywrightBridge(endpoint)
        page = make_page()
        await bridge.attach(page)

        _, handler = page.expose_binding.await_args.args
        source = {"page": page, "frame": MagicMock()}
        response = await handler(source, {"messageType": GET_STATS})
        assert response["messageType"] == STATS_RESULT
        assert "x-foo" in response["data"]
        assert await handler(source, {"messageType": "noise"}) is None

    @pytest.mark.asyncio
    async def test_attach_twice_is_noop(self, clock):
        endpoint, _ = make_endpoint(clock)
        bridge = PlaywrightBridge(endpoint)
        page = make_page()
        await bridge.attach(page)
        await bridge.attach(page)
        page.expose_binding.assert_awaited_once()

    def test_listener_script_embeds_names(self, clock):
        endpoint, _ = make_endpoint(clock)
        script = PlaywrightBridge(endpoint, binding_name="__stats").listener_script
        assert '"__stats"' in script
        assert '"get-element-stats"' in script
        assert '"clear-element-stats"' in script
        assert "event.source.postMessage(response, '*')" in script
