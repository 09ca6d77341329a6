"""
Configuration for gocyclo.

Settings come from three layers, later ones winning: built-in defaults,
an optional YAML/JSON config file, and command-line flags.

Example ``.gocyclo.yaml``:

```yaml
paths:
  - ./cmd
  - ./internal
ignore: "_test\\.go$|vendor/"
over: 15
top: 20
report: [5, 10, 20]
include_literals: false
jobs: 8
```
"""

import json
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from gocyclo.core.exceptions import ConfigError


# Config file names searched for, nearest directory first
CONFIG_FILE_NAMES = [
    ".gocyclo.yaml",
    ".gocyclo.yml",
    ".gocyclo.json",
]

OUTPUT_FORMATS = ("text", "json")


@dataclass
class AnalysisConfig:
    """Everything a single run needs; passed explicitly, never read from globals."""
    paths: List[str] = field(default_factory=list)
    ignore: Optional[str] = None
    over: int = 0
    under: int = 0
    top: int = -1
    breakpoints: Optional[List[int]] = None
    include_literals: bool = False
    max_workers: int = 4
    show_average: bool = False
    average_short: bool = False
    output_format: str = "text"

    def __post_init__(self):
        if not isinstance(self.paths, list) or not all(isinstance(p, str) for p in self.paths):
            raise ConfigError(f"paths must be a list of strings, got {self.paths!r}")
        if self.ignore is not None and not isinstance(self.ignore, str):
            raise ConfigError(f"ignore must be a regular expression string, got {self.ignore!r}")
        for name in ("include_literals", "show_average", "average_short"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be true or false, got {getattr(self, name)!r}")
        for name in ("over", "under", "top", "max_workers"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        if self.breakpoints is not None:
            if not isinstance(self.breakpoints, list):
                raise ConfigError(f"report breakpoints must be a list, got {self.breakpoints!r}")
            if not all(isinstance(p, int) and not isinstance(p, bool) for p in self.breakpoints):
                raise ConfigError(f"report breakpoints must be integers, got {self.breakpoints!r}")
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(f"unknown output format: {self.output_format}")

    @property
    def wants_report(self) -> bool:
        return self.breakpoints is not None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisConfig":
        """Create config from a dictionary, accepting the file/flag spellings."""
        data = dict(data)

        # Map the names used in config files and on the command line
        aliases = {
            "report": "breakpoints",
            "jobs": "max_workers",
            "avg": "show_average",
            "avg_short": "average_short",
            "format": "output_format",
        }
        for alias, name in aliases.items():
            if alias in data:
                data[name] = data.pop(alias)

        if isinstance(data.get("paths"), str):
            data["paths"] = [data["paths"]]
        if isinstance(data.get("breakpoints"), str):
            data["breakpoints"] = parse_breakpoints(data["breakpoints"])
        if data.get("average_short"):
            data["show_average"] = True

        # Filter to only known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}

        return cls(**filtered_data)

    def merged(self, overrides: Dict[str, Any]) -> "AnalysisConfig":
        """Return a copy with every non-None value in ``overrides`` applied."""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return AnalysisConfig.from_dict(data)


def parse_breakpoints(text: str) -> List[int]:
    """Parse ``"1,5,10"`` into ``[1, 5, 10]``."""
    try:
        return [int(part) for part in text.split(",") if part.strip()]
    except ValueError as exc:
        raise ConfigError(f"report breakpoints must be comma-separated integers: {text!r}") from exc


def load_config(path: str) -> Dict[str, Any]:
    """
    Load configuration from a file.

    Supports YAML and JSON formats.
    """
    path = Path(path)

    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read configuration file {path}: {exc}") from exc

    try:
        if path.suffix == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content) or {}
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot parse configuration file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping")
    return data


def find_config(start_path: str = ".") -> Optional[str]:
    """
    Find a configuration file by searching up the directory tree.

    Returns the path to the first config file found, or None.
    """
    current = Path(start_path).resolve()

    while True:
        for name in CONFIG_FILE_NAMES:
            config_path = current / name
            if config_path.is_file():
                return str(config_path)
        if current == current.parent:
            return None
        current = current.parent


def load_analysis_config(path: Optional[str] = None, start_dir: str = ".") -> AnalysisConfig:
    """
    Load an AnalysisConfig from a file or create a default one.

    If path is None, searches for a config file starting from start_dir.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return AnalysisConfig()

    return AnalysisConfig.from_dict(load_config(path))
