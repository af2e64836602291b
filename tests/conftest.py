"""Pytest fixtures for jira-tui tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from hypothesis import Phase, Verbosity, settings

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="jiratui-tests-"))
os.environ["JIRATUI_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")
os.environ["JIRATUI_DATA_DIR"] = str(_TEST_BASE_DIR / "data")

if TYPE_CHECKING:
    from tests.helpers.fakes import FakeTracker, FakeVersionControl, MemoryConfigStore, Session


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    del config
    for item in items:
        path = Path(str(item.path))
        if "integration" in path.parts:
            item.add_marker(pytest.mark.integration)
        elif "unit" in path.parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def tracker() -> FakeTracker:
    from tests.helpers.fakes import FakeTracker

    return FakeTracker()


@pytest.fixture
def vcs() -> FakeVersionControl:
    from tests.helpers.fakes import FakeVersionControl

    return FakeVersionControl()


@pytest.fixture
def config_store() -> MemoryConfigStore:
    from tests.helpers.fakes import MemoryConfigStore

    return MemoryConfigStore()


@pytest.fixture
def session(
    tracker: FakeTracker, vcs: FakeVersionControl, config_store: MemoryConfigStore
) -> Session:
    """Actor, bus and gateway wired to in-memory collaborators."""
    from tests.helpers.fakes import Session

    return Session.create(tracker, vcs, config_store)
