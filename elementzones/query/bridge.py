"""PlaywrightBridge — serves the stats endpoint to a page over window messaging."""

from __future__ import annotations

import json
from typing import Any

import structlog
from playwright.async_api import Page

from elementzones.query.endpoint import CLEAR_STATS, GET_STATS, StatsEndpoint

logger = structlog.get_logger(__name__)

_DEFAULT_BINDING = "__elementZonesQuery"

# Installed in every frame: forwards stats requests to the Python binding and
# posts the response back to whichever window asked.
_LISTENER_JS = """(() => {
    const bindingName = %(binding)s;
    const requestTypes = [%(get)s, %(clear)s];
    if (window.__elementZonesListening) {
        return;
    }
    window.__elementZonesListening = true;
    window.addEventListener('message', async (event) => {
        const data = event.data;
        if (!data || !requestTypes.includes(data.messageType)) {
            return;
        }
        const response = await window[bindingName](data);
        if (response && event.source) {
            event.source.postMessage(response, '*');
        }
    });
})()"""


class PlaywrightBridge:
    """
    Cross-window transport for a StatsEndpoint.

    Usage:
        bridge = PlaywrightBridge(endpoint)
        await bridge.attach(page)
        # any window can now postMessage({messageType: 'get-element-stats'})
        # to the page and receive {messageType: 'element-stats', data: {...}}
    """

    def __init__(self, endpoint: StatsEndpoint, *, binding_name: str = _DEFAULT_BINDING) -> None:
        self._endpoint = endpoint
        self.binding_name = binding_name
        self._pages: list[Page] = []

    @property
    def listener_script(self) -> str:
        return _LISTENER_JS % {
            "binding": json.dumps(self.binding_name),
            "get": json.dumps(GET_STATS),
            "clear": json.dumps(CLEAR_STATS),
        }

    async def _on_request(self, source: Any, message: Any) -> dict[str, Any] | None:
        return await self._endpoint.handle(message)

    async def attach(self, page: Page) -> None:
        """Expose the endpoint to ``page`` and install the message listener."""
        if page in self._pages:
            return
        await page.expose_binding(self.binding_name, self._on_request)
        script = self.listener_script
        # Init script covers future navigations; evaluate covers the current document
        await page.add_init_script(script)
        await page.evaluate(script)
        self._pages.append(page)
        logger.debug("bridge_attached", url=page.url, binding=self.binding_name)

    @property
    def pages(self) -> list[Page]:
        return list(self._pages)
