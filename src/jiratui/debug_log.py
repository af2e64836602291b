"""In-memory capture of Python logging output.

Log records are kept in a ring buffer so the TUI can show them (F12) while
the terminal is in application mode, and exported to a file on request.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from jiratui.limits import MAX_LOG_LINES, MAX_LOG_MESSAGE_LENGTH

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(slots=True)
class LogEntry:
    """A captured log record."""

    level: str
    message: str
    timestamp: float

    def format(self) -> str:
        ts = datetime.fromtimestamp(self.timestamp).strftime("%H:%M:%S.%f")[:-3]
        return f"{ts} [{self.level}] {self.message}"


log_buffer: deque[LogEntry] = deque(maxlen=MAX_LOG_LINES)


class DebugLogHandler(logging.Handler):
    """Logging handler that captures records into ``log_buffer``."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if len(message) > MAX_LOG_MESSAGE_LENGTH:
                message = message[:MAX_LOG_MESSAGE_LENGTH] + "... [truncated]"
            log_buffer.append(
                LogEntry(level=record.levelname, message=message, timestamp=record.created)
            )
        except Exception:
            self.handleError(record)


_handler: DebugLogHandler | None = None


def setup_debug_logging(level: int | str = logging.WARNING) -> None:
    """Route root logger output into the ring buffer.

    Idempotent: a second call only adjusts the level. Nothing is written to
    stderr, which belongs to the TUI while it runs.
    """
    global _handler

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if _handler is not None:
        return

    _handler = DebugLogHandler()
    _handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root_logger.addHandler(_handler)
    logging.getLogger(__name__).debug("Debug logging initialized")


def clear_log_buffer() -> None:
    log_buffer.clear()


def export_logs_to_file(path: Path) -> int:
    """Write every buffered entry to ``path``; returns the number of entries."""
    path.parent.mkdir(parents=True, exist_ok=True)
    entries = list(log_buffer)
    with path.open("w", encoding="utf-8") as f:
        f.write("# jira-tui debug log\n")
        f.write(f"# Total entries: {len(entries)}\n\n")
        for entry in entries:
            f.write(entry.format() + "\n")
    return len(entries)
