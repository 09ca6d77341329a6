from gocyclo.reporting.formatters import (
    format_average,
    format_json,
    format_report,
    format_stats,
    format_text,
)

__all__ = [
    "format_average",
    "format_json",
    "format_report",
    "format_stats",
    "format_text",
]
