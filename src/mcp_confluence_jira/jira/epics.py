"""Module for Jira epic operations."""

import logging
from typing import Any

from ..models.jira import SPRINT_ISSUE_FIELDS, trim_sprint_issue
from .search import SearchMixin

logger = logging.getLogger("mcp-confluence-jira.jira")

EPIC_ISSUES_PAGE_SIZE = 100


class EpicsMixin(SearchMixin):
    """Mixin for Jira epic operations."""

    def get_epic_issues(self, epic_key: str) -> dict[str, Any]:
        """
        List the issues linked to an epic.

        Args:
            epic_key: The key of the epic (e.g. 'PROJ-1')

        Returns:
            The epic key, the total and the trimmed issues
        """
        jql = f'"Epic Link" = {epic_key}'
        data = self.search_raw(jql, EPIC_ISSUES_PAGE_SIZE, SPRINT_ISSUE_FIELDS)
        return {
            "epic_key": epic_key,
            "total": data.get("total"),
            "issues": [trim_sprint_issue(issue) for issue in data.get("issues", [])],
        }
