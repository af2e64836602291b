"""Collaborator implementations: Jira over HTTP and git over subprocesses."""

from jiratui.adapters.git import GitRepository
from jiratui.adapters.jira import JiraClient, build_jql

__all__ = [
    "GitRepository",
    "JiraClient",
    "build_jql",
]
