"""Main screen: ticket, branch, board and transition lists."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Static

from jiratui.core.models import InputMode
from jiratui.ui.debug_modal import DebugLogModal
from jiratui.ui.keys import DEBUG_LOG_KEY, HELP_TEXT, translate_key
from jiratui.ui.widgets import InputPanel, SelectionPanel, issues_title

if TYPE_CHECKING:
    from textual import events
    from textual.app import ComposeResult

    from jiratui.core.events import EventBus
    from jiratui.core.state import ApplicationState


class BrowserScreen(Screen[None]):
    """Draws snapshots; every key it understands goes to the event bus."""

    DEFAULT_CSS = """
    BrowserScreen #lists {
        height: 1fr;
    }

    BrowserScreen #status-line {
        height: 1;
        padding: 0 1;
        color: $warning;
    }

    BrowserScreen #help-line {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }
    """

    def __init__(self, bus: EventBus) -> None:
        super().__init__()
        self._bus = bus

    def compose(self) -> ComposeResult:
        with Horizontal(id="lists"):
            yield SelectionPanel(id="left-pane")
            yield SelectionPanel(id="right-pane")
        yield InputPanel(id="input-panel")
        yield Static("", id="status-line")
        yield Static("", id="help-line")

    def on_key(self, event: events.Key) -> None:
        if event.key == DEBUG_LOG_KEY:
            event.stop()
            self.app.push_screen(DebugLogModal())
            return
        key_input = translate_key(event.key, event.character)
        if key_input is None:
            return
        event.stop()
        self._bus.publish(key_input)

    def draw(self, state: ApplicationState) -> None:
        left = self.query_one("#left-pane", SelectionPanel)
        right = self.query_one("#right-pane", SelectionPanel)
        mode = state.input_mode

        if mode == InputMode.BOARDS_LIST:
            left.show(
                "Boards",
                [board.name for board in state.boards],
                state.boards.selected_index,
                focused=True,
                empty="Loading boards...",
            )
            right.display = False
        else:
            right.display = True
            left.show(
                issues_title(state),
                [f"{issue.key}: {issue.summary}" for issue in state.issues],
                state.issues.selected_index,
                focused=state.issues_focused and mode == InputMode.ISSUES_LIST,
                empty="No tickets match the current filters",
            )
            if mode == InputMode.UPDATE_ISSUE_STATUS:
                right.show(
                    f"Move {state.selected_issue_key() or ''} to...",
                    [transition.name for transition in state.transitions],
                    state.transitions.selected_index,
                    focused=True,
                    empty="Loading transitions...",
                )
            else:
                right.show(
                    "Existing Branches",
                    [branch.name for branch in state.branches],
                    state.branches.selected_index,
                    focused=not state.issues_focused and mode == InputMode.ISSUES_LIST,
                    empty="Select a ticket to see its branches",
                )

        self.query_one("#input-panel", InputPanel).show_state(state)
        self.query_one("#status-line", Static).update(Text(state.status_message))
        self.query_one("#help-line", Static).update(HELP_TEXT[mode])
