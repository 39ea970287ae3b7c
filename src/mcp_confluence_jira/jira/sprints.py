"""Module for Jira sprints operations."""

import logging
from collections.abc import Sequence
from typing import Any

from ..models.jira import SPRINT_ISSUE_FIELDS, JiraSprint, trim_sprint_issue
from .client import AGILE_PATH, JiraClient

logger = logging.getLogger("mcp-confluence-jira.jira")

SPRINT_STATES = ("active", "future", "closed")
NO_ACTIVE_SPRINT_MESSAGE = "No active sprint found"


class SprintsMixin(JiraClient):
    """Mixin for Jira sprints operations."""

    def get_board_sprints_models(
        self, board_id: int, state: str | None = None
    ) -> list[JiraSprint]:
        """
        Get the sprints of a board as JiraSprint models.

        Args:
            board_id: Board ID
            state: Sprint state (active, future, closed); None returns every state

        Raises:
            BackendRejectedError: If the board cannot be read
        """
        params = {"state": state} if state else None
        response = self.send("GET", f"{AGILE_PATH}/board/{board_id}/sprint", params=params)
        data = response.raise_for_backend_error().data or {}
        return [JiraSprint.from_api_response(sprint) for sprint in data.get("values", [])]

    def get_board_sprints(
        self, board_id: int, state: str | None = None
    ) -> dict[str, Any]:
        """
        List the sprints of a board.

        Returns:
            The board ID, the state filter and the sprints
        """
        sprints = self.get_board_sprints_models(board_id, state)
        return {
            "board_id": board_id,
            "state": state or "all",
            "sprints": [sprint.to_simplified_dict() for sprint in sprints],
        }

    def get_sprint_issues(
        self, sprint_id: int, fields: Sequence[str] | None = None
    ) -> dict[str, Any]:
        """
        List the issues of a sprint.

        Args:
            sprint_id: Sprint ID
            fields: Fields to request; defaults to key, summary, status,
                assignee, priority and issue type

        Returns:
            The sprint ID, the total and the trimmed issues
        """
        requested = list(fields or SPRINT_ISSUE_FIELDS)
        response = self.send(
            "GET",
            f"{AGILE_PATH}/sprint/{sprint_id}/issue",
            params={"fields": ",".join(requested)},
        )
        data = response.raise_for_backend_error().data or {}
        return {
            "sprint_id": sprint_id,
            "total": data.get("total"),
            "issues": [trim_sprint_issue(issue) for issue in data.get("issues", [])],
        }

    def get_current_sprint(
        self, board_id: int, include_issues: bool = True
    ) -> dict[str, Any]:
        """
        Get the active sprint of a board, optionally with its issues.

        A board without an active sprint is not an error: the result says so
        and no issue lookup is made.
        """
        active = self.get_board_sprints_models(board_id, state="active")
        if not active:
            logger.info(f"Board {board_id} has no active sprint")
            return {
                "board_id": board_id,
                "active_sprint": None,
                "message": NO_ACTIVE_SPRINT_MESSAGE,
            }

        sprint = active[0]
        result: dict[str, Any] = {
            "board_id": board_id,
            "active_sprint": sprint.to_simplified_dict(),
        }
        if include_issues and sprint.id is not None:
            result["issues"] = self.get_sprint_issues(sprint.id)
        return result
