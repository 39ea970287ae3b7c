"""Jira API module for MCP Confluence/Jira.

This module provides the Jira operations exposed as tools.
"""

from .client import JiraClient
from .config import JiraConfig
from .epics import EpicsMixin
from .issues import IssuesMixin
from .search import SearchMixin
from .sprints import SprintsMixin
from .transitions import TransitionsMixin


class JiraFetcher(
    EpicsMixin,
    SearchMixin,
    IssuesMixin,
    TransitionsMixin,
    SprintsMixin,
):
    """Main entry point for Jira operations."""

    pass


__all__ = ["JiraClient", "JiraConfig", "JiraFetcher"]
