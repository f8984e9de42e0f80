"""ElementMonitor — main orchestrator class."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

import structlog
from playwright.async_api import Page

from elementzones.core.types import LifecycleCallbacks, ScopeStats
from elementzones.instrument.instrumenter import ElementInstrumenter
from elementzones.query.bridge import PlaywrightBridge
from elementzones.query.endpoint import StatsEndpoint
from elementzones.query.port import QueuePort
from elementzones.scopes.stack import ScopeStack
from elementzones.scopes.tree import ScopeTree
from elementzones.stats.aggregator import StatsAggregator
from elementzones.stats.report import format_report

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=type)


class ElementMonitor:
    """
    Measures per-element-type lifecycle callback time.

    Usage:
        monitor = ElementMonitor()

        @monitor.element("x-foo")
        class XFoo:
            def created_callback(self): ...

        monitor.snapshot()["x-foo"]["created"].total_time

    Each monitor owns its own scope tree and stacks; nothing is shared
    between instances.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] | None = None,
        enabled: bool = True,
        shared_stack: bool = False,
    ) -> None:
        self.callback_stack = ScopeStack(clock=clock, name="callback")
        if shared_stack:
            self.category_stack = self.callback_stack
        else:
            self.category_stack = ScopeStack(clock=clock, name="category")

        self._tree = ScopeTree(self.category_stack, self.callback_stack)
        self._aggregator = StatsAggregator(self._tree)
        self._instrumenter = ElementInstrumenter(self._tree, enabled=enabled)
        self._endpoint = StatsEndpoint(self._aggregator)
        self._bridge: PlaywrightBridge | None = None

    @property
    def tree(self) -> ScopeTree:
        return self._tree

    @property
    def endpoint(self) -> StatsEndpoint:
        return self._endpoint

    @property
    def enabled(self) -> bool:
        return self._instrumenter.enabled

    # ------------------------------------------------------------------
    # Registration hook
    # ------------------------------------------------------------------

    def instrument(self, category: str, callbacks: LifecycleCallbacks) -> LifecycleCallbacks:
        return self._instrumenter.instrument(category, callbacks)

    def register(self, category: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        return self._instrumenter.register(category, fn, *args, **kwargs)

    def element(self, category: str) -> Callable[[T], T]:
        """Class decorator: instrument the class's lifecycle methods under ``category``."""

        def decorate(cls: T) -> T:
            return self._instrumenter.instrument_class(category, cls)

        return decorate

    def defer(self, fn: Callable, wait_time: float | None = None) -> Callable:
        """Charge ``fn`` to whichever callback is running when it is scheduled."""
        return self._instrumenter.defer(fn, wait_time)

    def wrap(self, category: str, fn: Callable) -> Callable:
        return self._instrumenter.wrap(category, fn)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def snapshot(self) -> dict[str, ScopeStats]:
        return self._aggregator.snapshot()

    def stats_dict(self) -> dict[str, dict[str, Any]]:
        return self._aggregator.to_dict()

    def reset(self) -> None:
        self._aggregator.reset()

    def report(self) -> dict[str, dict[str, str | None]]:
        return format_report(self._aggregator)

    def print_stats(self) -> None:
        """Log one diagnostic row per element type."""
        for category, row in self.report().items():
            logger.info("element_stats", category=category, **row)

    # ------------------------------------------------------------------
    # Query channel
    # ------------------------------------------------------------------

    async def handle(self, message: Any) -> dict[str, Any] | None:
        return await self._endpoint.handle(message)

    def port(self) -> QueuePort:
        """Create an in-process request/response port onto this monitor."""
        return QueuePort(self._endpoint)

    async def attach(self, page: Page, *, binding_name: str | None = None) -> PlaywrightBridge:
        """
        Serve stats requests posted to ``page``'s window.

        All pages share one bridge; a binding name that differs from the
        existing bridge's raises ValueError.
        """
        if self._bridge is not None:
            if binding_name is not None and binding_name != self._bridge.binding_name:
                raise ValueError(
                    f"Bridge already uses binding {self._bridge.binding_name!r}, not {binding_name!r}"
                )
        else:
            if binding_name is None:
                self._bridge = PlaywrightBridge(self._endpoint)
            else:
                self._bridge = PlaywrightBridge(self._endpoint, binding_name=binding_name)
        await self._bridge.attach(page)
        return self._bridge
