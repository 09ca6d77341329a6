"""Measurement records, statistics and error types."""

from gocyclo.core.exceptions import GocycloError, ConfigError, ParseError
from gocyclo.core.stats import Position, Stat, Stats, Bucket
from gocyclo.core.results import AnalysisResult, FileError

__all__ = [
    "GocycloError",
    "ConfigError",
    "ParseError",
    "Position",
    "Stat",
    "Stats",
    "Bucket",
    "AnalysisResult",
    "FileError",
]
