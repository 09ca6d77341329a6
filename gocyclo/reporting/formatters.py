from __future__ import annotations

import json
from typing import Iterable, List, Optional

from gocyclo.core.results import AnalysisResult
from gocyclo.core.stats import Bucket, Stats

REPORT_HEADER = "RANGE | COUNT | PERCENT"


def format_stats(stats: Iterable) -> str:
    """One ``<complexity> <package> <function> <file:line:column>`` line per entry."""
    return "".join(f"{stat}\n" for stat in stats)


def format_average(average: float, short: bool = False) -> str:
    value = f"{average:.3g}"
    if short:
        return value + "\n"
    return f"Average: {value}\n"


def format_report(buckets: Iterable[Bucket]) -> str:
    lines = [REPORT_HEADER]
    for bucket in buckets:
        lines.append(f"{bucket.label} | {bucket.count} | {bucket.percent:.1f}")
    return "\n".join(lines) + "\n"


def format_text(
    shown: Stats,
    average: Optional[float] = None,
    average_short: bool = False,
    buckets: Optional[List[Bucket]] = None,
) -> str:
    output = format_stats(shown)
    if average is not None:
        output += format_average(average, average_short)
    if buckets is not None:
        output += format_report(buckets)
    return output


def format_json(
    result: AnalysisResult,
    shown: Stats,
    buckets: Optional[List[Bucket]] = None,
) -> str:
    summary = result.to_dict()
    errors = summary.pop("errors")
    summary["shown"] = len(shown)
    summary["total_complexity_shown"] = shown.total_complexity()
    data = {
        "summary": summary,
        "stats": shown.to_list(),
        "report": [bucket.to_dict() for bucket in buckets] if buckets is not None else None,
        "errors": errors,
    }
    return json.dumps(data, indent=2) + "\n"
