"""Wiring of the event bus, gateway, actor and renderer for one session."""

from __future__ import annotations

import logging
import webbrowser
from dataclasses import dataclass
from typing import TYPE_CHECKING

from jiratui.adapters.git import GitRepository
from jiratui.adapters.jira import JiraClient
from jiratui.config import ConfigStore
from jiratui.core.actor import StateActor
from jiratui.core.events import EventBus
from jiratui.core.gateway import FetchGateway
from jiratui.core.state import ApplicationState

if TYPE_CHECKING:
    from pathlib import Path

    from jiratui.config import JiraCredentials
    from jiratui.core.actor import Quit
    from jiratui.core.ports import ConfigPersistence, IssueTracker, LinkOpener, VersionControl

log = logging.getLogger(__name__)


@dataclass
class AppContext:
    """The pieces of a running session, built once at startup."""

    bus: EventBus
    gateway: FetchGateway
    actor: StateActor


def create_app_context(
    tracker: IssueTracker,
    vcs: VersionControl,
    config_store: ConfigPersistence,
    *,
    open_link: LinkOpener = webbrowser.open,
) -> AppContext:
    bus = EventBus()
    gateway = FetchGateway(bus, tracker, vcs, config_store, open_link)
    state = ApplicationState.initial(config_store.load())
    actor = StateActor(state, bus, gateway)
    return AppContext(bus=bus, gateway=gateway, actor=actor)


async def run_session(
    credentials: JiraCredentials,
    *,
    repo_path: Path | None = None,
    config_path: Path | None = None,
) -> Quit | None:
    """Run the TUI until the operator quits or switches branch.

    Raises ``StartupError`` when no repository can be found.
    """
    from jiratui.ui.app import JiraTuiApp

    repo = await GitRepository.discover(repo_path)
    log.info("Using repository %s", repo.root)
    store = ConfigStore(config_path)
    async with JiraClient(credentials) as tracker:
        ctx = create_app_context(tracker, repo, store)
        app = JiraTuiApp(ctx.actor, ctx.bus, ctx.gateway)
        return await app.run_async()
