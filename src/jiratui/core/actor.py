"""The state actor: sole owner of ``ApplicationState``.

The actor reads one event at a time from the bus, applies it to the state,
starts follow-up operations through the gateway and publishes a snapshot of
the state after every event. Completion events are applied regardless of the
current input mode. Whichever completion arrives last wins, even when it
answers a request made for a selection that is no longer current.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from jiratui.core.events import (
    BoardsFetched,
    BranchesFetched,
    BranchSwitched,
    FetchFailed,
    IssuesFetched,
    Key,
    KeyInput,
    TransitionApplied,
    TransitionsFetched,
)
from jiratui.core.models import CREATE_NEW_BRANCH, BranchSummary, FetchKind, InputMode
from jiratui.limits import SNAPSHOT_BUFFER

if TYPE_CHECKING:
    from collections.abc import Callable

    from jiratui.core.events import Event, EventBus
    from jiratui.core.gateway import FetchGateway
    from jiratui.core.models import IssueSummary
    from jiratui.core.state import ApplicationState

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Continue:
    """Keep processing events."""


@dataclass(frozen=True)
class Quit:
    """Stop the actor. Not an error: ``reason`` is shown to the operator."""

    reason: str


type Outcome = Continue | Quit

CONTINUE = Continue()
USER_QUIT_REASON = "Exited without switching branch"

_FAILURE_LABELS: dict[FetchKind, str] = {
    FetchKind.ISSUES: "Loading tickets failed",
    FetchKind.BOARDS: "Loading boards failed",
    FetchKind.BRANCHES: "Looking up branches failed",
    FetchKind.TRANSITIONS: "Loading transitions failed",
    FetchKind.APPLY_TRANSITION: "Updating the ticket status failed",
    FetchKind.CHECKOUT: "Checking out the branch failed",
    FetchKind.CREATE_BRANCH: "Creating the branch failed",
    FetchKind.SAVE_CONFIG: "Saving the configuration failed",
}


class StateActor:
    """Applies bus events to ``ApplicationState`` one at a time.

    Key presses are dispatched through a handler table keyed by input mode.
    After every event a detached snapshot goes to ``snapshots``, a bounded
    queue: when the renderer falls behind the actor waits instead of dropping
    frames.
    """

    def __init__(
        self,
        state: ApplicationState,
        bus: EventBus,
        gateway: FetchGateway,
        snapshots: asyncio.Queue[ApplicationState] | None = None,
    ) -> None:
        self._state = state
        self._bus = bus
        self._gateway = gateway
        self.snapshots: asyncio.Queue[ApplicationState] = (
            snapshots if snapshots is not None else asyncio.Queue(maxsize=SNAPSHOT_BUFFER)
        )
        self._key_handlers: dict[InputMode, Callable[[str], Outcome]] = {
            InputMode.ISSUES_LIST: self._on_issues_list_key,
            InputMode.BOARDS_LIST: self._on_boards_list_key,
            InputMode.UPDATE_ISSUE_STATUS: self._on_update_status_key,
            InputMode.EDITING: self._on_editing_key,
            InputMode.EDITING_DEFAULT_PROJECT: self._on_editing_project_key,
        }
        self._issues_list_commands: dict[str, Callable[[], Outcome]] = {
            "b": self._open_boards,
            "c": self._edit_default_project,
            "p": self._edit_default_project,
            "i": self._toggle_in_progress,
            "m": self._toggle_mine,
            "o": self._open_selected_issue,
            "q": self._quit,
            Key.CTRL_C: self._quit,
            "r": self._refresh_issues,
            "s": self._open_transitions,
            Key.ENTER: self._confirm_selection,
            Key.LEFT: self._focus_left,
            Key.RIGHT: self._focus_right,
            Key.UP: self._move_up,
            Key.DOWN: self._move_down,
        }

    def snapshot(self) -> ApplicationState:
        return self._state.snapshot()

    async def run(self) -> Quit:
        """Process events until one of them ends the session."""
        await self._publish()
        self._gateway.fetch_issues(self._state.filter_config)
        while True:
            event = await self._bus.next()
            outcome = self.handle(event)
            await self._publish()
            if isinstance(outcome, Quit):
                log.info("State actor stopping: %s", outcome.reason)
                self._bus.close()
                return outcome

    async def _publish(self) -> None:
        await self.snapshots.put(self._state.snapshot())

    def handle(self, event: Event) -> Outcome:
        """Apply one event to the state. Never raises for collaborator failures."""
        match event:
            case KeyInput(code=code):
                self._state.status_message = ""
                return self._key_handlers[self._state.input_mode](code)
            case IssuesFetched(issues=issues):
                self._on_issues_fetched(issues)
            case BranchesFetched(branches=branches):
                self._on_branches_fetched(branches)
            case BoardsFetched(boards=boards):
                self._state.boards.replace(boards)
            case TransitionsFetched(transitions=transitions):
                self._state.transitions.replace(transitions)
            case TransitionApplied(issue_key=issue_key):
                self._state.transitions.clear()
                self._state.input_mode = InputMode.ISSUES_LIST
                self._state.status_message = f"Updated {issue_key}"
                self._gateway.fetch_issues(self._state.filter_config)
            case BranchSwitched(name=name):
                return Quit(reason=f"Switched to {name}")
            case FetchFailed(kind=kind, message=message):
                self._state.status_message = f"{_FAILURE_LABELS[kind]}: {message}"
        return CONTINUE

    def _on_issues_fetched(self, issues: tuple[IssueSummary, ...]) -> None:
        state = self._state
        state.issues.replace(issues)
        state.branches.clear()
        state.issues_focused = True
        self._lookup_branches()

    def _on_branches_fetched(self, branches: tuple[BranchSummary, ...]) -> None:
        state = self._state
        state.branches.replace([*branches, BranchSummary(CREATE_NEW_BRANCH)])
        if state.issues_focused:
            # Focus moves to the branch list with advance(), which lands on index 0.
            state.branches.clear_selection()

    def _lookup_branches(self) -> None:
        key = self._state.selected_issue_key()
        if key is not None:
            self._gateway.find_branches(key)

    # Issues list

    def _on_issues_list_key(self, code: str) -> Outcome:
        command = self._issues_list_commands.get(code)
        if command is None:
            return CONTINUE
        return command()

    def _open_boards(self) -> Outcome:
        self._state.input_mode = InputMode.BOARDS_LIST
        self._gateway.fetch_boards(self._state.filter_config)
        return CONTINUE

    def _edit_default_project(self) -> Outcome:
        self._state.input = self._state.config.default_project_key
        self._state.input_mode = InputMode.EDITING_DEFAULT_PROJECT
        return CONTINUE

    def _toggle_in_progress(self) -> Outcome:
        config = self._state.config
        config.filter_in_progress = not config.filter_in_progress
        return self._persist_and_refresh()

    def _toggle_mine(self) -> Outcome:
        config = self._state.config
        config.filter_mine = not config.filter_mine
        return self._persist_and_refresh()

    def _persist_and_refresh(self) -> Outcome:
        self._gateway.save_config(self._state.config)
        self._gateway.fetch_issues(self._state.filter_config)
        return CONTINUE

    def _open_selected_issue(self) -> Outcome:
        issue = self._state.issues.selected
        if issue is not None:
            self._gateway.open_link(issue.permalink)
        return CONTINUE

    def _quit(self) -> Outcome:
        return Quit(reason=USER_QUIT_REASON)

    def _refresh_issues(self) -> Outcome:
        self._gateway.fetch_issues(self._state.filter_config)
        return CONTINUE

    def _open_transitions(self) -> Outcome:
        key = self._state.selected_issue_key()
        if key is None:
            return CONTINUE
        self._state.transitions.clear()
        self._state.input_mode = InputMode.UPDATE_ISSUE_STATUS
        self._gateway.fetch_transitions(key)
        return CONTINUE

    def _confirm_selection(self) -> Outcome:
        state = self._state
        if state.issues_focused:
            state.branches.advance()
            state.issues_focused = False
            return CONTINUE
        branch = state.branches.selected
        if branch is None:
            return CONTINUE
        if branch.is_sentinel:
            state.input = ""
            state.input_mode = InputMode.EDITING
        else:
            state.status_message = f"Checking out {branch.name}..."
            self._gateway.checkout_branch(branch.name)
        return CONTINUE

    def _focus_left(self) -> Outcome:
        state = self._state
        if state.issues_focused:
            state.issues.clear_selection()
            state.branches.clear()
        else:
            state.branches.clear_selection()
            state.issues_focused = True
        return CONTINUE

    def _focus_right(self) -> Outcome:
        state = self._state
        if state.issues_focused and state.selected_issue_key() is not None:
            state.branches.advance()
            state.issues_focused = False
        return CONTINUE

    def _move_up(self) -> Outcome:
        if self._state.issues_focused:
            self._state.issues.retreat()
            self._lookup_branches()
        else:
            self._state.branches.retreat()
        return CONTINUE

    def _move_down(self) -> Outcome:
        if self._state.issues_focused:
            self._state.issues.advance()
            self._lookup_branches()
        else:
            self._state.branches.advance()
        return CONTINUE

    # Boards list

    def _on_boards_list_key(self, code: str) -> Outcome:
        boards = self._state.boards
        if code == Key.ESCAPE:
            self._state.input_mode = InputMode.ISSUES_LIST
        elif code == Key.UP:
            boards.retreat()
        elif code == Key.DOWN:
            boards.advance()
        elif code == "o" and boards.selected is not None:
            self._gateway.open_link(boards.selected.permalink)
        elif code == Key.CTRL_C:
            return self._quit()
        return CONTINUE

    # Issue status

    def _on_update_status_key(self, code: str) -> Outcome:
        state = self._state
        if code == Key.ESCAPE:
            state.transitions.clear()
            state.input_mode = InputMode.ISSUES_LIST
        elif code == Key.UP:
            state.transitions.retreat()
        elif code == Key.DOWN:
            state.transitions.advance()
        elif code == Key.ENTER:
            key = state.selected_issue_key()
            transition = state.transitions.selected
            if key is not None and transition is not None:
                state.status_message = f"Moving {key} to {transition.name}..."
                self._gateway.apply_transition(key, transition.id)
        elif code == Key.CTRL_C:
            return self._quit()
        return CONTINUE

    # Text entry

    def _edit_buffer(self, code: str) -> None:
        if code == Key.BACKSPACE:
            self._state.input = self._state.input[:-1]
        elif code == Key.ESCAPE:
            self._state.input_mode = InputMode.ISSUES_LIST
        elif len(code) == 1 and code.isprintable():
            self._state.input += code

    def _on_editing_key(self, code: str) -> Outcome:
        if code == Key.ENTER:
            name = self._state.new_branch_name()
            if name is not None:
                self._state.status_message = f"Creating {name}..."
                self._gateway.create_branch(name)
            return CONTINUE
        if code == Key.CTRL_C:
            return self._quit()
        self._edit_buffer(code)
        return CONTINUE

    def _on_editing_project_key(self, code: str) -> Outcome:
        state = self._state
        if code == Key.ENTER:
            state.config.default_project_key = state.input
            state.input_mode = InputMode.ISSUES_LIST
            return self._persist_and_refresh()
        if code == Key.CTRL_C:
            return self._quit()
        self._edit_buffer(code)
        return CONTINUE
