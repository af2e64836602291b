"""Application state owned by the state actor."""

from __future__ import annotations

from dataclasses import dataclass, field

from jiratui.config import Config
from jiratui.core.models import (
    BoardSummary,
    BranchSummary,
    FilterConfig,
    InputMode,
    IssueSummary,
    TransitionSummary,
)
from jiratui.core.selection import SelectionList


@dataclass
class ApplicationState:
    """Everything the renderer needs to draw one frame.

    Only the state actor mutates an instance; everyone else receives copies
    from ``snapshot()``.
    """

    config: Config = field(default_factory=Config)
    issues: SelectionList[IssueSummary] = field(default_factory=SelectionList)
    boards: SelectionList[BoardSummary] = field(default_factory=SelectionList)
    branches: SelectionList[BranchSummary] = field(default_factory=SelectionList)
    transitions: SelectionList[TransitionSummary] = field(default_factory=SelectionList)
    input_mode: InputMode = InputMode.ISSUES_LIST
    issues_focused: bool = True
    input: str = ""
    status_message: str = ""

    @classmethod
    def initial(cls, config: Config) -> ApplicationState:
        return cls(config=config.model_copy())

    def snapshot(self) -> ApplicationState:
        return ApplicationState(
            config=self.config.model_copy(),
            issues=self.issues.copy(),
            boards=self.boards.copy(),
            branches=self.branches.copy(),
            transitions=self.transitions.copy(),
            input_mode=self.input_mode,
            issues_focused=self.issues_focused,
            input=self.input,
            status_message=self.status_message,
        )

    @property
    def filter_config(self) -> FilterConfig:
        return FilterConfig(
            mine_only=self.config.filter_mine,
            in_progress_only=self.config.filter_in_progress,
            project_key=self.config.default_project_key,
        )

    def selected_issue_key(self) -> str | None:
        issue = self.issues.selected
        return issue.key if issue else None

    def new_branch_name(self) -> str | None:
        """Name of the branch the Editing buffer would create, if a ticket is selected."""
        key = self.selected_issue_key()
        if key is None:
            return None
        return f"{key}-{self.input}"
