"""QueuePort — in-process asyncio request/response channel for the endpoint."""

from __future__ import annotations

import asyncio
from typing import Any

from elementzones.query.endpoint import StatsEndpoint

_CLOSE = object()


class QueuePort:
    """
    Carries requests to a StatsEndpoint and routes each response back to its requester.

    Usage:
        port = QueuePort(endpoint)
        server = asyncio.create_task(port.serve())
        reply = await port.request({"messageType": "get-element-stats"})
        await port.close()
    """

    def __init__(self, endpoint: StatsEndpoint) -> None:
        self._endpoint = endpoint
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False

    async def request(self, message: Any) -> dict[str, Any] | None:
        """Send one request and wait for its response (None if the message was ignored)."""
        if self._closed:
            raise RuntimeError("QueuePort is closed")
        future: asyncio.Future = asyncio.get_running_loop().create_future()
        await self._queue.put((message, future))
        return await future

    async def serve(self) -> None:
        """Answer queued requests one at a time until close() is called."""
        while True:
            item = await self._queue.get()
            if item is _CLOSE:
                return
            message, future = item
            try:
                response = await self._endpoint.handle(message)
            except Exception as exc:
                if not future.done():
                    future.set_exception(exc)
                continue
            if not future.done():
                future.set_result(response)

    async def close(self) -> None:
        self._closed = True
        await self._queue.put(_CLOSE)
