"""Module for Jira search operations."""

import logging
from collections.abc import Iterable
from typing import Any

from ..exceptions import LocalValidationError
from ..models.jira import ISSUE_SEARCH_FIELDS, trim_issue
from .client import API_PATH, JiraClient

logger = logging.getLogger("mcp-confluence-jira.jira")

USER_ISSUES_LIMIT = 100
USER_ROLES = ("assignee", "reporter")


def quote_jql_string(value: str) -> str:
    """Quote a value as a single-quoted JQL string literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class SearchMixin(JiraClient):
    """Mixin for Jira search operations."""

    def search_raw(
        self, jql: str, limit: int, fields: Iterable[str]
    ) -> dict[str, Any]:
        """
        Run a JQL search and return the untouched response body.

        Raises:
            BackendRejectedError: If Jira rejects the query
        """
        params = {
            "jql": jql,
            "maxResults": limit,
            "fields": ",".join(fields),
            "validateQuery": "strict",
        }
        logger.info(f"Executing JQL search (limit={limit}): {jql}")
        response = self.send("GET", f"{API_PATH}/search", params=params)
        return response.raise_for_backend_error().data or {}

    def search_issues(self, jql: str, limit: int = 10) -> dict[str, Any]:
        """
        Search issues using JQL.

        Args:
            jql: JQL query string
            limit: Maximum number of issues to return

        Returns:
            Dictionary with the total match count and the trimmed issues
        """
        data = self.search_raw(jql, limit, ISSUE_SEARCH_FIELDS)
        return {
            "total": data.get("total"),
            "issues": [trim_issue(issue) for issue in data.get("issues", [])],
        }

    def build_user_issues_jql(
        self,
        board_id: int,
        username: str,
        user_type: str = "assignee",
        status: str = "all",
    ) -> str:
        """
        Build the JQL that selects a user's issues on a board.

        Args:
            board_id: Board ID
            username: Jira username to match
            user_type: Either ``assignee`` or ``reporter``
            status: ``open``, ``in_progress``, ``done`` or ``all``

        Returns:
            JQL string
        """
        if user_type not in USER_ROLES:
            raise LocalValidationError(
                f"Invalid user type: {user_type}. Expected one of: {', '.join(USER_ROLES)}"
            )

        status_names = {
            "open": self.config.open_status,
            "in_progress": self.config.in_progress_status,
            "done": self.config.done_status,
            "all": None,
        }
        if status not in status_names:
            raise LocalValidationError(
                f"Invalid status: {status}. Expected one of: {', '.join(status_names)}"
            )

        clauses = [
            f"{user_type} = {quote_jql_string(username)}",
            f"board = {board_id}",
        ]
        if status_names[status]:
            clauses.append(f"status = {quote_jql_string(status_names[status])}")
        return " AND ".join(clauses)

    def get_user_issues(
        self,
        board_id: int,
        username: str,
        user_type: str = "assignee",
        status: str = "all",
    ) -> dict[str, Any]:
        """
        Get the issues a user is assigned to or reported on a board.

        Returns:
            Search result with the generated JQL included
        """
        jql = self.build_user_issues_jql(board_id, username, user_type, status)
        result = self.search_issues(jql, limit=USER_ISSUES_LIMIT)
        return {"jql": jql, **result}
