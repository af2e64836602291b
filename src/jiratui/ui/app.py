"""Textual application: draws snapshots and feeds key presses to the actor."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.app import App
from textual.binding import Binding

from jiratui.core.events import Key, KeyInput
from jiratui.ui.browser import BrowserScreen

if TYPE_CHECKING:
    from jiratui.core.actor import Quit, StateActor
    from jiratui.core.events import EventBus
    from jiratui.core.gateway import FetchGateway
    from jiratui.core.state import ApplicationState


class JiraTuiApp(App["Quit | None"]):
    """Rendering collaborator for the state actor.

    It never touches application state: it forwards keys to the event bus and
    redraws from each snapshot the actor publishes.
    """

    TITLE = "jira-tui"

    BINDINGS = [
        Binding("ctrl+c", "interrupt", "Quit", show=False, priority=True),
    ]

    def __init__(self, actor: StateActor, bus: EventBus, gateway: FetchGateway) -> None:
        super().__init__()
        self._actor = actor
        self._bus = bus
        self._gateway = gateway
        self._browser: BrowserScreen | None = None
        self.last_snapshot: ApplicationState | None = None

    @property
    def browser(self) -> BrowserScreen:
        if self._browser is None:
            raise RuntimeError("JiraTuiApp is not mounted")
        return self._browser

    async def on_mount(self) -> None:
        self._browser = BrowserScreen(self._bus)
        await self.push_screen(self._browser)
        self.run_worker(self._render_snapshots(), name="renderer", group="core")
        self.run_worker(self._run_actor(), name="state-actor", group="core")

    async def on_unmount(self) -> None:
        await self._gateway.shutdown()

    async def _run_actor(self) -> None:
        outcome = await self._actor.run()
        self.exit(outcome)

    async def _render_snapshots(self) -> None:
        while True:
            snapshot = await self._actor.snapshots.get()
            self.browser.draw(snapshot)
            self.last_snapshot = snapshot

    def action_interrupt(self) -> None:
        self._bus.publish(KeyInput(Key.CTRL_C))
