"""Ordering of completion events that race each other.

Nothing tags or cancels an earlier lookup, so whichever completion is applied
last decides what the operator sees.
"""

from __future__ import annotations

import asyncio

import pytest

from jiratui.core.events import Key
from jiratui.core.models import CREATE_NEW_BRANCH, InputMode
from tests.helpers import Session, wait_until

pytestmark = pytest.mark.unit


def branch_names(session: Session) -> list[str]:
    return [branch.name for branch in session.state.branches]


async def _load_tickets_with_gated_lookup(session: Session, key: str) -> asyncio.Event:
    gate = asyncio.Event()
    session.vcs.gates[key] = gate
    session.gateway.fetch_issues(session.state.filter_config)
    await wait_until(lambda: session.bus.pending() == 1, description="tickets")
    await session.apply_pending()
    await wait_until(lambda: key in session.vcs.lookups, description=f"{key} lookup")
    return gate


async def test_stale_branch_lookup_wins_when_it_completes_last(session: Session):
    gate = await _load_tickets_with_gated_lookup(session, "OPS-12")

    session.press(Key.DOWN)
    await wait_until(lambda: session.bus.pending() == 1, description="OPS-15 branches")
    await session.apply_pending()
    assert branch_names(session) == ["OPS-15-metrics", CREATE_NEW_BRANCH]

    gate.set()
    await session.settle()

    assert session.state.selected_issue_key() == "OPS-15"
    assert branch_names(session) == ["OPS-12-fix-login", "OPS-12-retry", CREATE_NEW_BRANCH]


async def test_in_order_completion_shows_current_ticket(session: Session):
    gate = await _load_tickets_with_gated_lookup(session, "OPS-12")

    gate.set()
    await session.settle()
    session.press(Key.DOWN)
    await session.settle()

    assert branch_names(session) == ["OPS-15-metrics", CREATE_NEW_BRANCH]


async def test_late_lookup_lands_while_in_another_mode(session: Session):
    gate = await _load_tickets_with_gated_lookup(session, "OPS-12")

    session.press("b")
    gate.set()
    await session.settle()

    state = session.state
    assert state.input_mode == InputMode.BOARDS_LIST
    assert branch_names(session) == ["OPS-12-fix-login", "OPS-12-retry", CREATE_NEW_BRANCH]
    assert len(state.boards) == 1


async def test_pending_lookup_is_not_cancelled_by_newer_one(session: Session):
    gate = await _load_tickets_with_gated_lookup(session, "OPS-12")

    session.press(Key.DOWN)
    await wait_until(lambda: session.bus.pending() == 1, description="OPS-15 branches")

    assert session.gateway.pending == 1
    gate.set()
    await session.settle()
    assert session.gateway.pending == 0
