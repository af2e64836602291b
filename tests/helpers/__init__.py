"""Test helpers package."""

from tests.helpers.fakes import (
    FakeTracker,
    FakeVersionControl,
    MemoryConfigStore,
    Session,
    make_board,
    make_issue,
)
from tests.helpers.git import configure_git_user, init_git_repo_with_commit
from tests.helpers.wait import wait_for_snapshot, wait_until

__all__ = [
    "FakeTracker",
    "FakeVersionControl",
    "MemoryConfigStore",
    "Session",
    "configure_git_user",
    "init_git_repo_with_commit",
    "make_board",
    "make_issue",
    "wait_for_snapshot",
    "wait_until",
]
