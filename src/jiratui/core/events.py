"""Events consumed by the state actor and the bus that merges their producers."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import uuid4

if TYPE_CHECKING:
    from jiratui.core.models import (
        BoardSummary,
        BranchSummary,
        FetchKind,
        IssueSummary,
        TransitionSummary,
    )

log = logging.getLogger(__name__)


def _new_event_id() -> str:
    return uuid4().hex


def _now() -> datetime:
    return datetime.now()


class Key:
    """Names of the non-printable keys carried by ``KeyInput.code``.

    Printable keys travel as the character itself (``"b"``, ``"-"``).
    """

    ENTER = "enter"
    ESCAPE = "escape"
    BACKSPACE = "backspace"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    CTRL_C = "ctrl+c"

    NAMED = frozenset({ENTER, ESCAPE, BACKSPACE, UP, DOWN, LEFT, RIGHT, CTRL_C})


@dataclass(frozen=True)
class KeyInput:
    code: str
    event_id: str = field(default_factory=_new_event_id)
    occurred_at: datetime = field(default_factory=_now)

    @property
    def is_char(self) -> bool:
        return len(self.code) == 1 and self.code.isprintable()


@dataclass(frozen=True)
class IssuesFetched:
    issues: tuple[IssueSummary, ...]
    event_id: str = field(default_factory=_new_event_id)
    occurred_at: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class BoardsFetched:
    boards: tuple[BoardSummary, ...]
    event_id: str = field(default_factory=_new_event_id)
    occurred_at: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class BranchesFetched:
    branches: tuple[BranchSummary, ...]
    event_id: str = field(default_factory=_new_event_id)
    occurred_at: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class TransitionsFetched:
    transitions: tuple[TransitionSummary, ...]
    event_id: str = field(default_factory=_new_event_id)
    occurred_at: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class TransitionApplied:
    issue_key: str
    transition_id: str
    event_id: str = field(default_factory=_new_event_id)
    occurred_at: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class BranchSwitched:
    name: str
    event_id: str = field(default_factory=_new_event_id)
    occurred_at: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class FetchFailed:
    kind: FetchKind
    message: str
    event_id: str = field(default_factory=_new_event_id)
    occurred_at: datetime = field(default_factory=_now)


type Event = (
    KeyInput
    | IssuesFetched
    | BoardsFetched
    | BranchesFetched
    | TransitionsFetched
    | TransitionApplied
    | BranchSwitched
    | FetchFailed
)


class EventBus:
    """Unbounded many-producer, single-consumer event channel.

    Producers never wait: ``publish`` is synchronous. Events are delivered in
    the order they were committed to the queue. Once closed, publishing is a
    no-op so late fetch tasks can finish quietly.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Event] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, event: Event) -> None:
        if self._closed:
            log.debug("Dropping %s published after bus close", type(event).__name__)
            return
        self._queue.put_nowait(event)

    async def next(self) -> Event:
        return await self._queue.get()

    def pending(self) -> int:
        return self._queue.qsize()

    def close(self) -> None:
        self._closed = True
