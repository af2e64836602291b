"""Fire-and-forget operations against the external collaborators.

Every operation snapshots its parameters at call time, runs as its own task
and reports back through the event bus: exactly one completion event on
success, one ``FetchFailed`` on failure. Nothing is retried and nothing tracks
or cancels an earlier, still-running call of the same kind.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from jiratui.core.events import (
    BoardsFetched,
    BranchesFetched,
    BranchSwitched,
    FetchFailed,
    IssuesFetched,
    TransitionApplied,
    TransitionsFetched,
)
from jiratui.core.models import FetchKind
from jiratui.limits import SHUTDOWN_TIMEOUT

if TYPE_CHECKING:
    from collections.abc import Coroutine

    from jiratui.config import Config
    from jiratui.core.events import Event, EventBus
    from jiratui.core.models import FilterConfig
    from jiratui.core.ports import ConfigPersistence, IssueTracker, LinkOpener, VersionControl

log = logging.getLogger(__name__)


def _describe(exc: BaseException) -> str:
    text = str(exc).strip()
    return text or type(exc).__name__


class _PendingTasks:
    """Holds strong references to running tasks until they finish."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()

    def __len__(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, None], *, name: str) -> asyncio.Task[None]:
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error(
                "Background task %s failed",
                task.get_name(),
                exc_info=(type(exc), exc, exc.__traceback__),
            )

    async def drain(self) -> None:
        """Wait until no task is running, including ones spawned while waiting."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def shutdown(self, *, timeout: float = SHUTDOWN_TIMEOUT) -> None:
        pending = [task for task in self._tasks if not task.done()]
        if not pending:
            return
        for task in pending:
            task.cancel()
        done, _pending = await asyncio.wait(pending, timeout=timeout)
        if done:
            await asyncio.gather(*done, return_exceptions=True)


class FetchGateway:
    """Runs collaborator calls off the actor and reports each result as an event.

    Fetches run concurrently and are never ordered against each other. Config
    saves are the exception: they run one at a time in call order, so the file
    always ends up holding the most recently requested config.
    """

    def __init__(
        self,
        bus: EventBus,
        tracker: IssueTracker,
        vcs: VersionControl,
        config_store: ConfigPersistence,
        open_link: LinkOpener,
    ) -> None:
        self._bus = bus
        self._tracker = tracker
        self._vcs = vcs
        self._config_store = config_store
        self._open_link = open_link
        self._tasks = _PendingTasks()
        self._save_lock = asyncio.Lock()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        await self._tasks.drain()

    async def shutdown(self) -> None:
        await self._tasks.shutdown()

    def _run(self, kind: FetchKind, operation: Coroutine[Any, Any, Event]) -> asyncio.Task[None]:
        return self._tasks.spawn(self._report(kind, operation), name=f"fetch-{kind.value}")

    async def _report(self, kind: FetchKind, operation: Coroutine[Any, Any, Event]) -> None:
        try:
            event = await operation
        except Exception as exc:
            log.warning("%s operation failed", kind.value, exc_info=True)
            self._bus.publish(FetchFailed(kind=kind, message=_describe(exc)))
            return
        self._bus.publish(event)

    def fetch_issues(self, filter_config: FilterConfig) -> asyncio.Task[None]:
        return self._run(FetchKind.ISSUES, self._issues(filter_config))

    async def _issues(self, filter_config: FilterConfig) -> Event:
        return IssuesFetched(tuple(await self._tracker.list_issues(filter_config)))

    def fetch_boards(self, filter_config: FilterConfig) -> asyncio.Task[None]:
        return self._run(FetchKind.BOARDS, self._boards(filter_config))

    async def _boards(self, filter_config: FilterConfig) -> Event:
        return BoardsFetched(tuple(await self._tracker.list_boards(filter_config)))

    def find_branches(self, issue_key: str) -> asyncio.Task[None]:
        return self._run(FetchKind.BRANCHES, self._branches(issue_key))

    async def _branches(self, issue_key: str) -> Event:
        return BranchesFetched(tuple(await self._vcs.find_branches(issue_key)))

    def fetch_transitions(self, issue_key: str) -> asyncio.Task[None]:
        return self._run(FetchKind.TRANSITIONS, self._transitions(issue_key))

    async def _transitions(self, issue_key: str) -> Event:
        return TransitionsFetched(tuple(await self._tracker.list_transitions(issue_key)))

    def apply_transition(self, issue_key: str, transition_id: str) -> asyncio.Task[None]:
        return self._run(FetchKind.APPLY_TRANSITION, self._apply(issue_key, transition_id))

    async def _apply(self, issue_key: str, transition_id: str) -> Event:
        await self._tracker.apply_transition(issue_key, transition_id)
        return TransitionApplied(issue_key=issue_key, transition_id=transition_id)

    def checkout_branch(self, name: str) -> asyncio.Task[None]:
        return self._run(FetchKind.CHECKOUT, self._checkout(name))

    async def _checkout(self, name: str) -> Event:
        await self._vcs.checkout_branch(name)
        return BranchSwitched(name)

    def create_branch(self, name: str) -> asyncio.Task[None]:
        return self._run(FetchKind.CREATE_BRANCH, self._create(name))

    async def _create(self, name: str) -> Event:
        await self._vcs.create_branch(name)
        return BranchSwitched(name)

    def save_config(self, config: Config) -> asyncio.Task[None]:
        """Persist ``config``; only a failure is reported on the bus."""
        return self._tasks.spawn(self._save(config.model_copy()), name="save-config")

    async def _save(self, config: Config) -> None:
        try:
            async with self._save_lock:
                await self._config_store.save(config)
        except Exception as exc:
            log.warning("Saving config failed", exc_info=True)
            self._bus.publish(FetchFailed(kind=FetchKind.SAVE_CONFIG, message=_describe(exc)))

    def open_link(self, url: str) -> asyncio.Task[None]:
        return self._tasks.spawn(self._open(url), name="open-link")

    async def _open(self, url: str) -> None:
        try:
            await asyncio.to_thread(self._open_link, url)
        except Exception:
            log.warning("Could not open %s", url, exc_info=True)
