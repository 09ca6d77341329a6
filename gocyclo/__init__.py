"""
gocyclo

Calculates the cyclomatic complexity of functions and methods in Go
source code, then ranks, filters and summarizes the results.
"""

__version__ = "1.0.0"

from gocyclo.analysis.collector import FunctionCollector, analyze, analyze_source, collect
from gocyclo.config import AnalysisConfig
from gocyclo.core.stats import Position, Stat, Stats, Bucket
from gocyclo.core.results import AnalysisResult, FileError

__all__ = [
    "FunctionCollector",
    "analyze",
    "analyze_source",
    "collect",
    "AnalysisConfig",
    "Position",
    "Stat",
    "Stats",
    "Bucket",
    "AnalysisResult",
    "FileError",
]
