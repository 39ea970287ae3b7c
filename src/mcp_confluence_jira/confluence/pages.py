"""Module for Confluence page operations."""

import logging
from typing import Any

from ..exceptions import LocalValidationError
from .client import ConfluenceClient

logger = logging.getLogger("mcp-confluence-jira.confluence")

PAGE_EXPAND = "body.storage,version,space"
UPDATE_VERSION_MESSAGE = "Updated via API"


def _storage_body(content: str) -> dict[str, Any]:
    return {"storage": {"value": content, "representation": "storage"}}


class PagesMixin(ConfluenceClient):
    """Mixin for Confluence page operations."""

    def get_page(self, page_id: str) -> dict[str, Any]:
        """
        Get a page with its storage-format body, version and space.

        Args:
            page_id: The ID of the page

        Returns:
            The page as returned by Confluence

        Raises:
            BackendRejectedError: If the page cannot be read
        """
        return self._fetch_page(page_id, PAGE_EXPAND)

    def _fetch_page(self, page_id: str, expand: str) -> dict[str, Any]:
        response = self.send("GET", f"content/{page_id}", params={"expand": expand})
        return response.raise_for_backend_error().data

    def create_page(
        self,
        space_key: str,
        title: str,
        content: str,
        parent_id: str | None = None,
    ) -> dict[str, Any]:
        """
        Create a new page in a Confluence space.

        Args:
            space_key: The key of the space
            title: The title of the page
            content: The page body in storage format
            parent_id: Optional parent page ID

        Returns:
            The created page as returned by Confluence
        """
        data: dict[str, Any] = {
            "type": "page",
            "title": title,
            "space": {"key": space_key},
            "body": _storage_body(content),
        }
        if parent_id:
            data["ancestors"] = [{"id": parent_id}]

        logger.info(f"Creating page '{title}' in space {space_key}")
        response = self.send("POST", "content", body=data)
        return response.raise_for_backend_error().data

    def update_page(
        self,
        page_id: str,
        content: str,
        title: str | None = None,
    ) -> dict[str, Any]:
        """
        Replace the body of an existing page.

        Confluence only accepts a full page representation whose version is
        exactly one above the stored one, so the current page is read first
        and every field the caller left out is copied from it.

        Args:
            page_id: The ID of the page to update
            content: The new page body in storage format
            title: Optional new title; defaults to the current title

        Returns:
            The updated page as returned by Confluence

        Raises:
            BackendRejectedError: If reading or writing the page fails
        """
        current = self._fetch_page(page_id, f"{PAGE_EXPAND},ancestors")
        space = current.get("space") or {}
        version = (current.get("version") or {}).get("number")
        if not isinstance(version, int):
            raise LocalValidationError(f"Page {page_id} has no readable version number")

        data: dict[str, Any] = {
            "id": page_id,
            "type": "page",
            "status": "current",
            "title": title or current.get("title"),
            "space": {
                "key": space.get("key"),
                "name": space.get("name"),
                "type": "global",
            },
            "version": {
                "number": version + 1,
                "message": UPDATE_VERSION_MESSAGE,
                "minorEdit": False,
            },
            "body": _storage_body(content),
            "metadata": {
                "properties": {
                    "content-type": "page",
                    "update-type": "api",
                }
            },
        }

        ancestors = current.get("ancestors") or []
        if ancestors:
            data["ancestors"] = [
                {
                    "id": ancestor.get("id"),
                    "type": ancestor.get("type"),
                    "status": ancestor.get("status"),
                }
                for ancestor in ancestors
            ]

        logger.info(
            f"Updating page {page_id} to version {data['version']['number']}"
        )
        response = self.send("PUT", f"content/{page_id}", body=data)
        return response.raise_for_backend_error().data
