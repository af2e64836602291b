"""Error types and the exit code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    FAILURE = 1
    MISSING_CREDENTIALS = 3
    NO_REPOSITORY = 4


@dataclass
class StartupError(Exception):
    """Raised before the state actor exists; the process reports it and exits."""

    message: str
    code: ExitCode = ExitCode.FAILURE
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


class GitOperationError(RuntimeError):
    """Raised when a git command exits non-zero or git is not installed."""


class TrackerError(RuntimeError):
    """Raised when the issue tracker cannot be reached or answers with an error."""
