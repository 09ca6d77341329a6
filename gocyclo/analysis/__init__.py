"""Complexity scoring and per-function collection."""

from gocyclo.analysis.complexity import complexity, decision_points
from gocyclo.analysis.collector import FunctionCollector, analyze, analyze_source, collect

__all__ = [
    "complexity",
    "decision_points",
    "FunctionCollector",
    "analyze",
    "analyze_source",
    "collect",
]
