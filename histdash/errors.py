"""Exception types raised by the history analytics core."""
from __future__ import annotations

from pathlib import Path


class HistdashError(Exception):
    """Base class for histdash failures."""


class HistoryReadError(HistdashError):
    """The history log could not be read. Nothing was parsed."""

    def __init__(self, path: Path | str, reason: str = "", missing: bool = False) -> None:
        self.path = Path(path)
        self.reason = reason
        self.missing = missing
        message = f"Cannot read history file {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ReportWriteError(HistdashError):
    def __init__(self, path: Path | str, reason: str = "") -> None:
        self.path = Path(path)
        super().__init__(f"Failed to write report {self.path}: {reason}" if reason else f"Failed to write report {self.path}")


class InvalidSearchPattern(ValueError):
    """A user-supplied search pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid search pattern {pattern!r}: {reason}")


class UnknownQueryError(ValueError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown query type: {name}")


class QueryArgumentError(ValueError):
    pass
