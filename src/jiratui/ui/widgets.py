"""Widgets that draw application state snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.widgets import Static

from jiratui.core.models import InputMode

if TYPE_CHECKING:
    from collections.abc import Sequence

    from jiratui.core.state import ApplicationState

HIGHLIGHT_SYMBOL = ">> "


def render_selection(
    lines: Sequence[str],
    selected: int | None,
    *,
    active: bool = True,
    empty: str = "Nothing here yet",
) -> Text:
    """Render ``lines`` with the selected one marked; ``active`` decides the highlight."""
    if not lines:
        return Text(empty, style="dim italic")
    text = Text(no_wrap=True, overflow="ellipsis")
    pad = " " * len(HIGHLIGHT_SYMBOL)
    for index, line in enumerate(lines):
        if index == selected:
            style = "bold black on green" if active else "bold"
            text.append(HIGHLIGHT_SYMBOL + line, style=style)
        else:
            text.append(pad + line)
        if index < len(lines) - 1:
            text.append("\n")
    return text


def issues_title(state: ApplicationState) -> str:
    config = state.config
    title = "In Progress Jira Issues" if config.filter_in_progress else "Prioritised Jira Issues"
    scope: list[str] = []
    if config.filter_mine:
        scope.append("mine")
    if config.default_project_key:
        scope.append(config.default_project_key)
    return f"{title} ({', '.join(scope)})" if scope else title


class SelectionPanel(Static):
    """A bordered list showing one ``SelectionList`` from a snapshot."""

    DEFAULT_CSS = """
    SelectionPanel {
        width: 1fr;
        height: 1fr;
        border: round $secondary;
        padding: 0 1;
        overflow-y: auto;
    }

    SelectionPanel.focused {
        border: round $accent;
    }
    """

    def show(
        self,
        title: str,
        lines: Sequence[str],
        selected: int | None,
        *,
        focused: bool,
        empty: str = "Nothing here yet",
    ) -> None:
        self.border_title = title
        self.set_class(focused, "focused")
        self.update(render_selection(lines, selected, active=focused, empty=empty))
        if selected is not None:
            self.call_after_refresh(self._reveal, selected)

    def _reveal(self, line: int) -> None:
        """Scroll just enough to bring ``line`` into view."""
        height = self.scrollable_content_region.height
        if line < self.scroll_y:
            self.scroll_to(y=line, animate=False)
        elif height and line >= self.scroll_y + height:
            self.scroll_to(y=line - height + 1, animate=False)


class InputPanel(Static):
    """Text-entry line shown while composing a branch name or project key."""

    DEFAULT_CSS = """
    InputPanel {
        height: 3;
        border: round $accent;
        padding: 0 1;
        display: none;
    }

    InputPanel.visible {
        display: block;
    }
    """

    def show_state(self, state: ApplicationState) -> None:
        mode = state.input_mode
        if mode == InputMode.EDITING:
            key = state.selected_issue_key() or ""
            self.border_title = "New branch name"
            self.update(Text.assemble((f"{key}-", "dim"), state.input, ("▏", "blink")))
        elif mode == InputMode.EDITING_DEFAULT_PROJECT:
            self.border_title = "Default project key"
            self.update(Text.assemble(state.input, ("▏", "blink")))
        self.set_class(mode in (InputMode.EDITING, InputMode.EDITING_DEFAULT_PROJECT), "visible")
