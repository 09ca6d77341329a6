from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Callable, Iterable, Optional

from gocyclo.core.exceptions import ConfigError
from gocyclo.parsing.treesitter import is_go_file

PathFilter = Callable[[str], bool]


def iter_go_files(paths: Iterable[str]) -> Iterable[str]:
    """
    Expand file and directory arguments into Go source paths.

    Arguments are visited in the order given. Directories are walked
    recursively in sorted order and only ``*.go`` files are yielded from
    them; a file argument is yielded as-is. Paths that do not exist are
    also yielded so the caller can report them.
    """
    for path in paths:
        if os.path.isdir(path):
            yield from _walk_dir(path)
        else:
            yield path


def _walk_dir(root: str) -> Iterable[str]:
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            file_path = os.path.join(dirpath, name)
            if is_go_file(name) and Path(file_path).is_file():
                yield file_path


def regex_filter(expr: Optional[str]) -> Optional[PathFilter]:
    """Compile ``expr`` into an exclusion predicate; ``None`` when empty."""
    if not expr:
        return None
    try:
        pattern = re.compile(expr)
    except re.error as exc:
        raise ConfigError(f"invalid ignore pattern {expr!r}: {exc}") from exc
    return lambda path: pattern.search(path) is not None
