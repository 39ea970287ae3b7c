"""Module for Jira issue operations."""

import logging
from typing import Any

from ..exceptions import LocalValidationError
from ..models.adf import to_rich_text
from .client import API_PATH, JiraClient

logger = logging.getLogger("mcp-confluence-jira.jira")

# Jira's stock "Medium" priority
DEFAULT_PRIORITY_ID = "3"


class IssuesMixin(JiraClient):
    """Mixin for Jira issue operations."""

    def create_issue(
        self,
        project: str,
        summary: str,
        issue_type: str,
        description: str | None = None,
        assignee: str | None = None,
        priority: str | None = None,
    ) -> dict[str, Any]:
        """
        Create a new Jira issue.

        Args:
            project: The project key
            summary: Summary of the issue
            issue_type: Issue type name (e.g. 'Task', 'Bug')
            description: Plain text description, sent as ADF
            assignee: Assignee account ID
            priority: Priority ID; Medium when omitted

        Returns:
            The new issue's key, id and self link plus the raw response

        Raises:
            LocalValidationError: If a required field is blank
            BackendRejectedError: If Jira rejects the issue
        """
        if not project:
            raise LocalValidationError("Project key is required")
        if not issue_type:
            raise LocalValidationError("Issue type is required")
        if not summary:
            raise LocalValidationError("Summary is required")

        fields: dict[str, Any] = {
            "project": {"key": project},
            "summary": summary,
            "issuetype": {"name": issue_type},
            "priority": {"id": priority or DEFAULT_PRIORITY_ID},
        }
        rich_description = to_rich_text(description)
        if rich_description:
            fields["description"] = rich_description
        if assignee:
            fields["assignee"] = {"id": assignee}

        logger.info(f"Creating {issue_type} in project {project}")
        response = self.send(
            "POST",
            f"{API_PATH}/issue",
            body={"fields": fields, "update": {}},
            mutation=True,
        )
        data = response.raise_for_backend_error().data or {}
        return {
            "success": True,
            "key": data.get("key"),
            "id": data.get("id"),
            "self": data.get("self"),
            "data": data,
        }

    def update_issue(
        self,
        issue_key: str,
        summary: str | None = None,
        description: str | None = None,
        assignee: str | None = None,
        priority: str | None = None,
    ) -> dict[str, Any]:
        """
        Update an existing issue's description.

        Only the description is forwarded to Jira. The other fields are part
        of the tool's contract but are not written; when no description is
        given the request carries an empty field set.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')
            summary: Not forwarded
            description: New plain text description, sent as ADF
            assignee: Not forwarded
            priority: Not forwarded

        Returns:
            Success flag, HTTP status and message
        """
        ignored = [
            name
            for name, value in (
                ("summary", summary),
                ("assignee", assignee),
                ("priority", priority),
            )
            if value
        ]
        if ignored:
            logger.debug(f"Not forwarding fields for {issue_key}: {', '.join(ignored)}")

        fields: dict[str, Any] = {}
        rich_description = to_rich_text(description)
        if rich_description:
            fields["description"] = rich_description

        response = self.send(
            "PUT",
            f"{API_PATH}/issue/{issue_key}",
            body={"fields": fields},
            mutation=True,
        )
        response.raise_for_backend_error()
        return {
            "success": True,
            "status": response.status,
            "message": "Issue updated successfully",
        }
