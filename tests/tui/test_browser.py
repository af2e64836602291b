"""End-to-end tests of the Textual front end with in-memory collaborators."""

from __future__ import annotations

import pytest

from jiratui.core.actor import USER_QUIT_REASON, Quit
from jiratui.core.models import InputMode
from jiratui.ui.app import JiraTuiApp
from jiratui.ui.debug_modal import DebugLogModal
from jiratui.ui.widgets import InputPanel, SelectionPanel
from tests.helpers import FakeTracker, Session, make_issue, wait_for_snapshot, wait_until


@pytest.fixture
def app(session: Session) -> JiraTuiApp:
    return JiraTuiApp(session.actor, session.bus, session.gateway)


def branches_loaded(state) -> bool:
    return len(state.branches) > 0


async def test_startup_draws_tickets_and_branches(app: JiraTuiApp):
    async with app.run_test(size=(120, 30)):
        state = await wait_for_snapshot(app, branches_loaded, description="branches")

        left = app.browser.query_one("#left-pane", SelectionPanel)
        right = app.browser.query_one("#right-pane", SelectionPanel)
        assert state.selected_issue_key() == "OPS-12"
        assert left.border_title == "In Progress Jira Issues (mine)"
        assert left.has_class("focused")
        assert right.border_title == "Existing Branches"
        assert not right.has_class("focused")


async def test_arrow_keys_move_ticket_selection(app: JiraTuiApp):
    async with app.run_test(size=(120, 30)) as pilot:
        await wait_for_snapshot(app, branches_loaded)

        await pilot.press("down")

        state = await wait_for_snapshot(
            app, lambda s: [b.name for b in s.branches] == ["OPS-15-metrics", "Create New"]
        )
        assert state.selected_issue_key() == "OPS-15"


async def test_boards_mode_hides_branch_pane(app: JiraTuiApp):
    async with app.run_test(size=(120, 30)) as pilot:
        await wait_for_snapshot(app, branches_loaded)

        await pilot.press("b")
        await wait_for_snapshot(app, lambda s: len(s.boards) == 1)
        await pilot.pause()

        assert app.browser.query_one("#left-pane", SelectionPanel).border_title == "Boards"
        assert not app.browser.query_one("#right-pane", SelectionPanel).display

        await pilot.press("escape")
        await wait_for_snapshot(app, lambda s: s.input_mode == InputMode.ISSUES_LIST)
        await pilot.pause()
        assert app.browser.query_one("#right-pane", SelectionPanel).display


async def test_create_branch_flow_exits_with_switch(app: JiraTuiApp, session: Session):
    async with app.run_test(size=(120, 30)) as pilot:
        await wait_for_snapshot(app, branches_loaded)

        await pilot.press("enter", "up", "enter")
        await wait_for_snapshot(app, lambda s: s.input_mode == InputMode.EDITING)
        await pilot.pause()
        panel = app.browser.query_one("#input-panel", InputPanel)
        assert panel.has_class("visible")
        assert panel.border_title == "New branch name"

        await pilot.press("f", "i", "x", "enter")
        await wait_until(lambda: app.return_value is not None, description="app exit")

    assert app.return_value == Quit(reason="Switched to OPS-12-fix")
    assert session.vcs.created == ["OPS-12-fix"]


async def test_q_exits_without_switching(app: JiraTuiApp, session: Session):
    async with app.run_test(size=(120, 30)) as pilot:
        await wait_for_snapshot(app, branches_loaded)
        await pilot.press("q")
        await wait_until(lambda: app.return_value is not None, description="app exit")

    assert app.return_value == Quit(reason=USER_QUIT_REASON)
    assert session.vcs.checked_out == []


async def test_ctrl_c_exits(app: JiraTuiApp):
    async with app.run_test(size=(120, 30)) as pilot:
        await wait_for_snapshot(app, branches_loaded)
        await pilot.press("ctrl+c")
        await wait_until(lambda: app.return_value is not None, description="app exit")

    assert app.return_value == Quit(reason=USER_QUIT_REASON)


async def test_f12_opens_debug_log_without_reaching_actor(app: JiraTuiApp):
    async with app.run_test(size=(120, 30)) as pilot:
        await wait_for_snapshot(app, branches_loaded)

        await pilot.press("f12")
        await wait_until(lambda: isinstance(app.screen, DebugLogModal), description="modal")

        await pilot.press("q")
        await pilot.pause()
        assert app.return_value is None

        await pilot.press("escape")
        await wait_until(lambda: app.screen is app.browser, description="browser screen")


async def test_failure_shows_in_status_line(app: JiraTuiApp, session: Session):
    session.tracker.failures["list_issues"] = RuntimeError("Jira is down")

    async with app.run_test(size=(120, 30)):
        state = await wait_for_snapshot(app, lambda s: bool(s.status_message))

    assert state.status_message == "Loading tickets failed: Jira is down"


async def test_selected_ticket_is_scrolled_into_view(vcs, config_store):
    issues = [make_issue(f"OPS-{number}", f"Ticket {number}") for number in range(1, 41)]
    session = Session.create(FakeTracker(issues=issues), vcs, config_store)
    app = JiraTuiApp(session.actor, session.bus, session.gateway)

    async with app.run_test(size=(120, 20)) as pilot:
        await wait_for_snapshot(app, lambda s: s.selected_issue_key() == "OPS-1")
        left = app.browser.query_one("#left-pane", SelectionPanel)
        assert left.scroll_y == 0

        await pilot.press("up")
        await wait_for_snapshot(app, lambda s: s.selected_issue_key() == "OPS-40")

        def last_line_visible() -> bool:
            height = left.scrollable_content_region.height
            return left.scroll_y <= 39 < left.scroll_y + height

        await wait_until(last_line_visible, description="last ticket in view")
        assert left.scroll_y > 0

        await pilot.press("down")
        await wait_for_snapshot(app, lambda s: s.selected_issue_key() == "OPS-1")
        await wait_until(lambda: left.scroll_y == 0, description="first ticket in view")
