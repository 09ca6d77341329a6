from dataclasses import dataclass, field
from typing import Any, Dict, List

from gocyclo.core.stats import Stats


@dataclass(frozen=True)
class FileError:
    """A file that was skipped because it could not be read or parsed."""
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class AnalysisResult:
    """Outcome of one analysis run: every measurement plus per-file failures."""
    stats: Stats = field(default_factory=Stats)
    errors: List[FileError] = field(default_factory=list)
    files_analyzed: int = 0
    files_excluded: int = 0

    @property
    def all_failed(self) -> bool:
        return bool(self.errors) and self.files_analyzed == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files_analyzed": self.files_analyzed,
            "files_excluded": self.files_excluded,
            "functions": len(self.stats),
            "average_complexity": self.stats.average_complexity(),
            "errors": [{"path": e.path, "message": e.message} for e in self.errors],
        }
