"""Jira REST client used as the issue tracker collaborator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from jiratui.core.models import BoardSummary, IssueSummary, TransitionSummary
from jiratui.errors import TrackerError
from jiratui.limits import HTTP_TIMEOUT, JIRA_PAGE_SIZE

if TYPE_CHECKING:
    from jiratui.config import JiraCredentials
    from jiratui.core.models import FilterConfig

log = logging.getLogger(__name__)

# Jira's built-in id for the "In Progress" status.
IN_PROGRESS_CLAUSE = "status=3"
PRIORITISED_CLAUSE = 'status="Prioritised"'
MINE_CLAUSE = "assignee=currentuser()"
NO_SUMMARY = "No summary given"


def quote_jql(value: str) -> str:
    """Quote ``value`` as a JQL string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_jql(filter_config: FilterConfig) -> str:
    """Compose the ticket search query for ``filter_config``."""
    clauses: list[str] = []
    if filter_config.mine_only:
        clauses.append(MINE_CLAUSE)
    clauses.append(IN_PROGRESS_CLAUSE if filter_config.in_progress_only else PRIORITISED_CLAUSE)
    if filter_config.project_key:
        clauses.append(f"project = {quote_jql(filter_config.project_key)}")
    return " AND ".join(clauses)


class JiraClient:
    """Thin async wrapper over the Jira REST and Agile APIs."""

    def __init__(
        self,
        credentials: JiraCredentials,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._host = credentials.host
        self._client = client or httpx.AsyncClient(
            base_url=credentials.host,
            auth=httpx.BasicAuth(credentials.user, credentials.password),
            headers={"Accept": "application/json"},
            timeout=HTTP_TIMEOUT,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> JiraClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def issue_permalink(self, key: str) -> str:
        return f"{self._host}/browse/{key}"

    def board_permalink(self, board_id: int) -> str:
        return f"{self._host}/secure/RapidBoard.jspa?rapidView={board_id}"

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TrackerError(
                f"Jira answered {exc.response.status_code} for {method} {path}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TrackerError(f"Could not reach Jira: {exc}") from exc
        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TrackerError(f"Jira sent an unreadable response for {path}") from exc

    async def list_issues(self, filter_config: FilterConfig) -> list[IssueSummary]:
        jql = build_jql(filter_config)
        log.debug("Searching issues: %s", jql)
        payload = await self._request(
            "GET",
            "/rest/api/2/search",
            params={"jql": jql, "fields": "summary", "maxResults": JIRA_PAGE_SIZE},
        )
        issues: list[IssueSummary] = []
        for raw in (payload or {}).get("issues", []):
            key = raw.get("key")
            if not key:
                continue
            summary = (raw.get("fields") or {}).get("summary") or NO_SUMMARY
            issues.append(
                IssueSummary(key=key, summary=summary, permalink=self.issue_permalink(key))
            )
        return issues

    async def list_boards(self, filter_config: FilterConfig) -> list[BoardSummary]:
        params: dict[str, Any] = {"maxResults": JIRA_PAGE_SIZE}
        if filter_config.project_key:
            params["projectKeyOrId"] = filter_config.project_key
        payload = await self._request("GET", "/rest/agile/1.0/board", params=params)
        return [
            BoardSummary(
                id=int(raw["id"]),
                name=raw.get("name", ""),
                permalink=self.board_permalink(int(raw["id"])),
            )
            for raw in (payload or {}).get("values", [])
            if "id" in raw
        ]

    async def list_transitions(self, issue_key: str) -> list[TransitionSummary]:
        payload = await self._request("GET", f"/rest/api/2/issue/{issue_key}/transitions")
        return [
            TransitionSummary(id=str(raw["id"]), name=raw.get("name", ""))
            for raw in (payload or {}).get("transitions", [])
            if "id" in raw
        ]

    async def apply_transition(self, issue_key: str, transition_id: str) -> None:
        await self._request(
            "POST",
            f"/rest/api/2/issue/{issue_key}/transitions",
            json={"transition": {"id": transition_id}},
        )
        log.info("Applied transition %s to %s", transition_id, issue_key)
