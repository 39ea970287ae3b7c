"""Module for Confluence search operations."""

import logging
from typing import Any

from .client import ConfluenceClient

logger = logging.getLogger("mcp-confluence-jira.confluence")


class SearchMixin(ConfluenceClient):
    """Mixin for Confluence search operations."""

    def search(self, cql: str, limit: int = 10) -> dict[str, Any]:
        """
        Search content using Confluence Query Language (CQL).

        Args:
            cql: Confluence Query Language string
            limit: Maximum number of results to return

        Returns:
            The content search response as returned by Confluence

        Raises:
            BackendRejectedError: If Confluence rejects the query
        """
        logger.info(f"Executing CQL search (limit={limit}): {cql}")
        response = self.send(
            "GET", "content/search", params={"cql": cql, "limit": limit}
        )
        return response.raise_for_backend_error().data
