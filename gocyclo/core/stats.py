"""
Measurement records and the statistics computed over them.

A ``Stat`` is one function's complexity together with where it was declared.
``Stats`` is an immutable, ordered collection of them; every operation on it
returns a new value rather than mutating the collection.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional


@dataclass(frozen=True)
class Position:
    """Location of a declaration's ``func`` keyword (1-based line and column)."""
    path: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Stat:
    """Cyclomatic complexity of a single function, method or function literal."""
    package: str
    function: str
    complexity: int
    position: Position

    def __post_init__(self):
        if self.complexity < 1:
            raise ValueError(f"complexity must be >= 1, got {self.complexity}")

    def __str__(self) -> str:
        return f"{self.complexity} {self.package} {self.function} {self.position}"

    def sort_key(self):
        # Highest complexity first; ties ordered by content, not arrival.
        return (
            -self.complexity,
            self.package,
            self.function,
            self.position.path,
            self.position.line,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "complexity": self.complexity,
            "package": self.package,
            "function": self.function,
            "path": self.position.path,
            "line": self.position.line,
            "column": self.position.column,
        }


@dataclass(frozen=True)
class Bucket:
    """A half-open complexity range ``[low, high)``; ``None`` means unbounded."""
    low: Optional[int]
    high: Optional[int]
    count: int
    percent: float

    @property
    def label(self) -> str:
        if self.low is None:
            return f"(-inf, {self.high if self.high is not None else '+inf'})"
        return f"[{self.low}, {self.high if self.high is not None else '+inf'})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "low": self.low,
            "high": self.high,
            "count": self.count,
            "percent": self.percent,
        }


class Stats(tuple):
    """Ordered, immutable sequence of ``Stat`` values."""

    def __new__(cls, stats: Iterable[Stat] = ()):
        return super().__new__(cls, stats)

    def __repr__(self) -> str:
        return f"Stats({list(self)!r})"

    def sort_and_filter(self, top: int = -1, over: int = 0, under: int = 0) -> "Stats":
        """
        Sort by complexity (descending) and narrow the result.

        Ties are broken by package, function name, file path and line.
        ``over``/``under`` are exclusive bounds applied only when positive;
        ``top`` truncates the filtered result when non-negative.
        """
        shown = sorted(self, key=Stat.sort_key)
        if over > 0:
            shown = [s for s in shown if s.complexity > over]
        if under > 0:
            shown = [s for s in shown if s.complexity < under]
        if top >= 0:
            shown = shown[:top]
        return Stats(shown)

    def average_complexity(self) -> float:
        if not self:
            return 0.0
        return self.total_complexity() / len(self)

    def total_complexity(self) -> int:
        return sum(s.complexity for s in self)

    def report(self, breakpoints: Iterable[int]) -> List[Bucket]:
        """
        Histogram of complexities over ranges split at ``breakpoints``.

        Breakpoints are sorted and de-duplicated first. The first bucket is
        everything below the lowest breakpoint, the last is everything at or
        above the highest; with no breakpoints there is a single bucket.
        Percentages are shares of ``len(self)`` and are all 0 for an empty set.
        """
        points = sorted(set(breakpoints))
        edges: List[Optional[int]] = [None, *points, None]
        total = len(self)

        buckets = []
        for low, high in zip(edges, edges[1:]):
            count = sum(1 for s in self if _in_range(s.complexity, low, high))
            percent = 100.0 * count / total if total else 0.0
            buckets.append(Bucket(low=low, high=high, count=count, percent=percent))
        return buckets

    def to_list(self) -> List[Dict[str, Any]]:
        return [s.to_dict() for s in self]


def _in_range(complexity: int, low: Optional[int], high: Optional[int]) -> bool:
    if low is not None and complexity < low:
        return False
    if high is not None and complexity >= high:
        return False
    return True
