"""Contracts for the collaborators the core talks to."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from jiratui.config import Config
    from jiratui.core.models import (
        BoardSummary,
        BranchSummary,
        FilterConfig,
        IssueSummary,
        TransitionSummary,
    )


class IssueTracker(Protocol):
    async def list_issues(self, filter_config: FilterConfig) -> list[IssueSummary]: ...

    async def list_boards(self, filter_config: FilterConfig) -> list[BoardSummary]: ...

    async def list_transitions(self, issue_key: str) -> list[TransitionSummary]: ...

    async def apply_transition(self, issue_key: str, transition_id: str) -> None: ...


class VersionControl(Protocol):
    async def find_branches(self, prefix: str) -> list[BranchSummary]:
        """Local branches whose name starts with ``prefix``."""
        ...

    async def checkout_branch(self, name: str) -> None: ...

    async def create_branch(self, name: str) -> None:
        """Create ``name`` from the default branch if missing, then switch to it."""
        ...


class ConfigPersistence(Protocol):
    def load(self) -> Config: ...

    async def save(self, config: Config) -> None: ...


class LinkOpener(Protocol):
    def __call__(self, url: str) -> object: ...
