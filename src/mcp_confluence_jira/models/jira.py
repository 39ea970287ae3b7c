"""
Jira models.

Issues come back from the search and agile endpoints with their values
nested under ``fields``; these models flatten them to the handful of
values callers need.
"""

from typing import Any

from pydantic import Field

from .adf import adf_to_text
from .base import ApiModel

ISSUE_SEARCH_FIELDS = (
    "key",
    "summary",
    "description",
    "status",
    "issuetype",
    "priority",
    "assignee",
    "updated",
)

SPRINT_ISSUE_FIELDS = (
    "key",
    "summary",
    "status",
    "assignee",
    "priority",
    "issuetype",
)


def _issue_values(data: dict[str, Any]) -> dict[str, Any]:
    # Raw issues nest values under "fields"; trimmed ones are already flat
    fields = data.get("fields")
    return fields if isinstance(fields, dict) else data


def _display(value: Any, *keys: str) -> str | None:
    """Reduce a nested Jira object (status, user, ...) to one label."""
    if value is None:
        return None
    if isinstance(value, dict):
        for key in keys:
            if value.get(key) is not None:
                return str(value[key])
        return None
    return str(value)


class JiraIssueSummary(ApiModel):
    """
    Caller-facing projection of a Jira issue returned by JQL search.
    """

    key: str | None = None
    summary: str | None = None
    description: str | None = None
    status: str | None = None
    issue_type: str | None = Field(default=None, alias="type")
    priority: str | None = None
    assignee: str | None = None
    updated: str | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "JiraIssueSummary":
        if not data:
            return cls()
        values = _issue_values(data)
        return cls(
            key=data.get("key"),
            summary=values.get("summary"),
            description=adf_to_text(values.get("description")),
            status=_display(values.get("status"), "name"),
            issue_type=_display(
                values.get("issuetype", values.get("type")), "name"
            ),
            priority=_display(values.get("priority"), "name"),
            assignee=_display(values.get("assignee"), "displayName", "name"),
            updated=values.get("updated"),
        )


class JiraSprintIssue(ApiModel):
    """
    Caller-facing projection of an issue listed by the agile endpoints.
    """

    key: str | None = None
    summary: str | None = None
    status: str | None = None
    assignee: str | None = None
    priority: str | None = None
    issue_type: str | None = Field(default=None, alias="type")

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraSprintIssue":
        if not data:
            return cls()
        values = _issue_values(data)
        return cls(
            key=data.get("key"),
            summary=values.get("summary"),
            status=_display(values.get("status"), "name"),
            assignee=_display(values.get("assignee"), "displayName", "name"),
            priority=_display(values.get("priority"), "name"),
            issue_type=_display(
                values.get("issuetype", values.get("type")), "name"
            ),
        )


class JiraTransition(ApiModel):
    """
    A transition currently available on an issue.
    """

    id: str = ""
    name: str = ""
    to_status: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraTransition":
        if not data:
            return cls()
        to_status = data.get("to")
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            to_status=_display(to_status, "name") if to_status else data.get("to_status"),
        )

    @property
    def label(self) -> str:
        return f"{self.id} ({self.name})"


class JiraSprint(ApiModel):
    """
    Model representing a Jira sprint.
    """

    id: int | None = None
    name: str | None = None
    state: str | None = None
    goal: str | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    board_id: int | None = Field(default=None, alias="boardId")

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraSprint":
        if not data:
            return cls()
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            state=data.get("state"),
            goal=data.get("goal") or None,
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
            board_id=data.get("originBoardId", data.get("boardId")),
        )


def trim_issue(raw: dict[str, Any]) -> dict[str, Any]:
    """Project a search result issue onto the caller-facing field set."""
    return JiraIssueSummary.from_api_response(raw).to_simplified_dict()


def trim_sprint_issue(raw: dict[str, Any]) -> dict[str, Any]:
    """Project an agile-endpoint issue onto the caller-facing field set."""
    return JiraSprintIssue.from_api_response(raw).to_simplified_dict()
