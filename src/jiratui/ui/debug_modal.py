"""Debug log viewer modal (F12)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, RichLog

from jiratui.debug_log import clear_log_buffer, export_logs_to_file, log_buffer
from jiratui.paths import get_debug_log_path

if TYPE_CHECKING:
    from textual.app import ComposeResult

    from jiratui.debug_log import LogEntry

_LEVEL_STYLES = {
    "DEBUG": "dim",
    "INFO": "blue",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold red",
}


class DebugLogModal(ModalScreen[None]):
    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("f12", "close", "Close", show=False),
        Binding("c", "clear_logs", "Clear"),
        Binding("s", "save_logs", "Save"),
    ]

    DEFAULT_CSS = """
    DebugLogModal {
        align: center middle;
    }

    #debug-log-container {
        width: 90%;
        height: 80%;
        border: round $primary;
        background: $surface;
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._last: LogEntry | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="debug-log-container"):
            yield Label("Debug Logs  [dim]c clear | s save | esc close[/dim]")
            yield RichLog(id="debug-log", wrap=True, auto_scroll=True)

    def on_mount(self) -> None:
        self._refresh_logs()
        self.set_interval(0.5, self._refresh_logs)

    def _refresh_logs(self) -> None:
        rich_log = self.query_one("#debug-log", RichLog)
        entries = list(log_buffer)
        start = 0
        if self._last is not None:
            for index in range(len(entries) - 1, -1, -1):
                if entries[index] is self._last:
                    start = index + 1
                    break
            else:
                rich_log.clear()
        for entry in entries[start:]:
            rich_log.write(self._format_entry(entry))
        if entries:
            self._last = entries[-1]

    @staticmethod
    def _format_entry(entry: LogEntry) -> Text:
        return Text(entry.format(), style=_LEVEL_STYLES.get(entry.level, ""))

    def action_close(self) -> None:
        self.dismiss(None)

    def action_clear_logs(self) -> None:
        clear_log_buffer()
        self._last = None
        self.query_one("#debug-log", RichLog).clear()

    def action_save_logs(self) -> None:
        path = get_debug_log_path()
        try:
            count = export_logs_to_file(path)
        except OSError as exc:
            self.notify(f"Could not save logs: {exc}", severity="error")
            return
        self.notify(f"Saved {count} log lines to {path}")
