"""Module for Jira transition operations."""

import logging
from typing import Any

from ..exceptions import LocalValidationError
from ..models.jira import JiraTransition
from .client import API_PATH, JiraClient

logger = logging.getLogger("mcp-confluence-jira.jira")

HISTORY_METADATA = {
    "type": "mcp",
    "description": "Status updated via MCP API",
    "activityDescription": "issue_transitioned",
    "actor": {"type": "application", "id": "mcp-server"},
}


class TransitionsMixin(JiraClient):
    """Mixin for Jira transition operations."""

    def get_transitions_models(self, issue_key: str) -> list[JiraTransition]:
        """
        Get the transitions currently available on an issue.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')

        Returns:
            List of JiraTransition models

        Raises:
            BackendRejectedError: If the transitions cannot be read
        """
        response = self.send("GET", f"{API_PATH}/issue/{issue_key}/transitions")
        data = response.raise_for_backend_error().data or {}
        return [
            JiraTransition.from_api_response(transition)
            for transition in data.get("transitions", [])
            if isinstance(transition, dict)
        ]

    def get_transitions(self, issue_key: str) -> dict[str, Any]:
        """
        List the transitions currently available on an issue.

        Returns:
            The issue key and its available transitions
        """
        transitions = self.get_transitions_models(issue_key)
        return {
            "issue_key": issue_key,
            "transitions": [t.to_simplified_dict() for t in transitions],
        }

    def transition_issue(self, issue_key: str, transition_id: str) -> dict[str, Any]:
        """
        Move an issue through one of its currently available transitions.

        The live transition list is fetched right before the transition is
        posted, and an ID that is not in it is rejected without posting.

        Args:
            issue_key: The key of the issue to transition
            transition_id: The ID of the transition to perform

        Returns:
            Success flag, HTTP status, message and the applied transition

        Raises:
            LocalValidationError: If the transition is not currently available
            BackendRejectedError: If Jira rejects either call
        """
        transition_id = str(transition_id).strip()
        available = self.get_transitions_models(issue_key)
        selected = next((t for t in available if t.id == transition_id), None)

        if selected is None:
            options = ", ".join(t.label for t in available) or "none"
            raise LocalValidationError(
                f"Invalid transition ID: {transition_id}. Available transitions: {options}"
            )

        logger.info(
            f"Transitioning issue {issue_key} with transition {selected.label}"
        )
        response = self.send(
            "POST",
            f"{API_PATH}/issue/{issue_key}/transitions",
            body={
                "transition": {"id": transition_id},
                "historyMetadata": HISTORY_METADATA,
            },
            mutation=True,
        )
        response.raise_for_backend_error()
        return {
            "success": True,
            "status": response.status,
            "message": "Issue status updated successfully",
            "transition": selected.to_simplified_dict(),
        }
