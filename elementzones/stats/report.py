"""Diagnostic dump — per-category timing rows rounded to 3 decimals."""

from __future__ import annotations

from elementzones.core.types import CallbackKind, ScopeStats
from elementzones.stats.aggregator import StatsAggregator

# Sub-scopes summed into calcedTotal as a cross-check against totalTime
_CALCED_KINDS = (
    CallbackKind.REGISTER,
    CallbackKind.CREATED,
    CallbackKind.ATTACHED,
    CallbackKind.DETACHED,
    CallbackKind.ATTRIBUTE_CHANGED,
)


def _fmt(value: float) -> str:
    return f"{value:.3f}"


def _sub_time(stats: ScopeStats, kind: CallbackKind) -> str | None:
    child = stats.get(kind.value)
    return _fmt(child.total_time) if child is not None else None


def report_row(stats: ScopeStats) -> dict[str, str | None]:
    """Build one report row. Missing sub-scopes are None and add 0 to calcedTotal."""
    calced_total = sum(
        stats[kind.value].total_time for kind in _CALCED_KINDS if kind.value in stats
    )
    row: dict[str, str | None] = {
        "totalTime": _fmt(stats.total_time),
        "calcedTotal": _fmt(calced_total),
    }
    for kind in CallbackKind:
        row[kind.value] = _sub_time(stats, kind)
    return row


def format_report(aggregator: StatsAggregator) -> dict[str, dict[str, str | None]]:
    return {key: report_row(stats) for key, stats in aggregator.snapshot().items()}


def render_report(aggregator: StatsAggregator) -> str:
    """Plain-text rendering, one line per category."""
    lines: list[str] = []
    for key, row in format_report(aggregator).items():
        fields = " ".join(f"{name}={value}" for name, value in row.items() if value is not None)
        lines.append(f"{key} {fields}")
    return "\n".join(lines)
