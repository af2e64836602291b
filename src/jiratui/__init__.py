"""jira-tui: browse Jira tickets and pick or create a git branch for one."""

__version__ = "0.3.0"
