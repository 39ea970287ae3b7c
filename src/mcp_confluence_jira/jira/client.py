"""Base client module for Jira API interactions."""

import logging
from typing import Any

from atlassian.rest_client import AtlassianRestAPI
from requests import Session

from ..utils.auth import configure_basic_auth
from ..utils.http import BackendResponse, send_request
from .config import JiraConfig

logger = logging.getLogger("mcp-confluence-jira.jira")

API_PATH = "rest/api/3"
AGILE_PATH = "rest/agile/1.0"

# Jira rejects some mutating REST calls as XSRF without this header
NO_CHECK_HEADERS = {"X-Atlassian-Token": "no-check"}


class JiraClient:
    """Base client for Jira API interactions."""

    def __init__(self, config: JiraConfig | None = None) -> None:
        """Initialize the Jira client with a given configuration.

        Args:
            config: Jira configuration object. If None, will be loaded from environment variables.

        Raises:
            ValueError: If environment variables are missing.
        """
        self.config = config or JiraConfig.from_env()

        session = Session()
        configure_basic_auth(session, self.config.credential)

        logger.debug(f"Initializing Jira client. URL: {self.config.url}")
        self.jira = AtlassianRestAPI(url=self.config.url, session=session)

    def send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: Any = None,
        mutation: bool = False,
    ) -> BackendResponse:
        """Send a request to Jira.

        Args:
            method: HTTP method
            path: Path relative to the Jira base URL
            params: Query string parameters
            body: JSON request body
            mutation: Whether to add the XSRF bypass header

        Returns:
            BackendResponse; non-2xx statuses are not raised
        """
        headers = NO_CHECK_HEADERS if mutation else None
        return send_request(
            self.jira, method, path, params=params, body=body, headers=headers
        )
