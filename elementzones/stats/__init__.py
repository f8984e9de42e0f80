from elementzones.stats.aggregator import StatsAggregator
from elementzones.stats.report import format_report, render_report, report_row

__all__ = ["StatsAggregator", "format_report", "render_report", "report_row"]
