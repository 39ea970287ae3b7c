"""Base client module for Confluence API interactions."""

import logging
from typing import Any

from atlassian.rest_client import AtlassianRestAPI
from requests import Session

from ..utils.auth import configure_basic_auth
from ..utils.http import BackendResponse, send_request
from .config import ConfluenceConfig

logger = logging.getLogger("mcp-confluence-jira.confluence")


class ConfluenceClient:
    """Base client for Confluence API interactions."""

    def __init__(self, config: ConfluenceConfig | None = None) -> None:
        """Initialize the Confluence client with given or environment config.

        Args:
            config: Configuration for Confluence client. If None, will load from
                environment.

        Raises:
            ValueError: If configuration is invalid or environment variables are missing
        """
        self.config = config or ConfluenceConfig.from_env()

        session = Session()
        configure_basic_auth(session, self.config.credential)

        logger.debug(
            f"Initializing Confluence client. URL: {self.config.url}, "
            f"API mode: {self.config.api_mode.value}"
        )
        self.confluence = AtlassianRestAPI(url=self.config.url, session=session)

    def send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: Any = None,
    ) -> BackendResponse:
        """Send a request below the content API prefix of this deployment.

        Args:
            method: HTTP method
            path: Path below the API prefix, e.g. ``content/123``
            params: Query string parameters
            body: JSON request body

        Returns:
            BackendResponse; non-2xx statuses are not raised
        """
        full_path = f"{self.config.api_prefix}/{path.lstrip('/')}"
        return send_request(self.confluence, method, full_path, params=params, body=body)
