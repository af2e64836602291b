"""Numeric limits and timeouts - no circular dependencies."""

from __future__ import annotations

SNAPSHOT_BUFFER = 20
"""Slots in the actor -> renderer snapshot queue. The actor blocks when full."""

HTTP_TIMEOUT = 15.0
GIT_REMOTE_TIMEOUT = 10.0
"""Seconds to wait for origin to answer before falling back to the default branch."""
JIRA_PAGE_SIZE = 100

SHUTDOWN_TIMEOUT = 2.0

MAX_LOG_LINES = 2000
MAX_LOG_MESSAGE_LENGTH = 4096
