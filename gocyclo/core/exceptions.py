"""
Exception types raised by gocyclo.

Configuration problems are fatal and stop a run before any file is read.
Parse problems are local to one file and are turned into ``FileError``
records by the collector so the rest of the batch still runs.
"""


class GocycloError(Exception):
    """Base class for all gocyclo errors."""


class ConfigError(GocycloError):
    """Invalid configuration: bad pattern, bad numeric value, missing config file."""


class ParseError(GocycloError):
    """A single source file could not be read or parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
