"""Value types shared by the actor, the gateway and the adapters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

CREATE_NEW_BRANCH = "Create New"


class InputMode(Enum):
    """Mutually exclusive UI modes; the active one decides which keys mean something."""

    ISSUES_LIST = auto()
    BOARDS_LIST = auto()
    EDITING = auto()
    EDITING_DEFAULT_PROJECT = auto()
    UPDATE_ISSUE_STATUS = auto()


class FetchKind(Enum):
    """Gateway operations, used to label failures."""

    ISSUES = "issues"
    BOARDS = "boards"
    BRANCHES = "branches"
    TRANSITIONS = "transitions"
    APPLY_TRANSITION = "apply_transition"
    CHECKOUT = "checkout"
    CREATE_BRANCH = "create_branch"
    SAVE_CONFIG = "save_config"


@dataclass(frozen=True, slots=True)
class IssueSummary:
    key: str
    summary: str
    permalink: str


@dataclass(frozen=True, slots=True)
class BoardSummary:
    id: int
    name: str
    permalink: str


@dataclass(frozen=True, slots=True)
class BranchSummary:
    name: str

    @property
    def is_sentinel(self) -> bool:
        return self.name == CREATE_NEW_BRANCH


@dataclass(frozen=True, slots=True)
class TransitionSummary:
    id: str
    name: str


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """Parameters that shape the ticket query."""

    mine_only: bool
    in_progress_only: bool
    project_key: str
