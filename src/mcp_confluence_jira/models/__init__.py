"""
Pydantic models and document mappers for backend payloads.
"""

from .adf import adf_to_text, to_rich_text
from .base import ApiModel
from .jira import (
    ISSUE_SEARCH_FIELDS,
    SPRINT_ISSUE_FIELDS,
    JiraIssueSummary,
    JiraSprint,
    JiraSprintIssue,
    JiraTransition,
    trim_issue,
    trim_sprint_issue,
)

__all__ = [
    "ISSUE_SEARCH_FIELDS",
    "SPRINT_ISSUE_FIELDS",
    "ApiModel",
    "JiraIssueSummary",
    "JiraSprint",
    "JiraSprintIssue",
    "JiraTransition",
    "adf_to_text",
    "to_rich_text",
    "trim_issue",
    "trim_sprint_issue",
]
