"""Thin request layer over the atlassian REST client."""

import logging
from dataclasses import dataclass
from typing import Any

import requests
from atlassian.rest_client import AtlassianRestAPI

from ..exceptions import BackendRejectedError, NetworkFailureError

logger = logging.getLogger("mcp-confluence-jira.utils.http")

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@dataclass(frozen=True)
class BackendResponse:
    """Status code and decoded body of one backend call.

    Non-2xx answers are returned as data rather than raised, so handlers can
    read the backend's own error message before deciding what to do.
    """

    status: int
    data: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def error_message(self) -> str:
        """Pick the most useful message out of a backend error body."""
        data = self.data
        if isinstance(data, dict):
            messages = data.get("errorMessages")
            if isinstance(messages, list) and messages:
                return str(messages[0])
            errors = data.get("errors")
            if isinstance(errors, dict) and errors:
                field, message = next(iter(errors.items()))
                return f"{field}: {message}"
            if data.get("message"):
                return str(data["message"])
        elif isinstance(data, str) and data.strip():
            return data.strip().splitlines()[0]
        return f"Request failed with status code {self.status}"

    def raise_for_backend_error(self) -> "BackendResponse":
        """Raise BackendRejectedError unless the status is 2xx."""
        if not self.ok:
            raise BackendRejectedError(
                self.error_message, status=self.status, details=self.data
            )
        return self


def _decode_body(response: requests.Response) -> Any:
    if not response.text:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def send_request(
    rest: AtlassianRestAPI,
    method: str,
    path: str,
    params: dict[str, Any] | None = None,
    body: Any = None,
    headers: dict[str, str] | None = None,
) -> BackendResponse:
    """Send one request and return its status and decoded JSON body.

    Args:
        rest: Configured REST client carrying base URL and session auth
        method: HTTP method
        path: Path relative to the client's base URL
        params: Query string parameters
        body: JSON-serializable request body
        headers: Extra headers merged over the JSON defaults

    Returns:
        BackendResponse, whatever the status code

    Raises:
        NetworkFailureError: If no response was obtained
    """
    request_headers = {**JSON_HEADERS, **(headers or {})}
    logger.debug(f"{method} {path} params={params}")
    try:
        response = rest.request(
            method=method,
            path=path,
            data=body,
            params=params,
            headers=request_headers,
            advanced_mode=True,
        )
    except requests.RequestException as e:
        logger.error(f"Network error during {method} {path}: {e}")
        raise NetworkFailureError(f"Network error during {method} {path}: {e}") from e

    result = BackendResponse(status=response.status_code, data=_decode_body(response))
    if not result.ok:
        logger.warning(f"{method} {path} returned {result.status}")
    return result
