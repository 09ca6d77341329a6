"""
File-system helpers: path expansion and path exclusion.
"""

from gocyclo.utils.files import PathFilter, iter_go_files, regex_filter

__all__ = [
    "PathFilter",
    "iter_go_files",
    "regex_filter",
]
