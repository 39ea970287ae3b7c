"""Credential handling for the Confluence and Jira REST APIs."""

import base64
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .env import get_required_env

if TYPE_CHECKING:
    from requests import Session

logger = logging.getLogger("mcp-confluence-jira.utils.auth")


@dataclass(frozen=True)
class BackendCredential:
    """Principal and API token shared by both backends."""

    principal: str  # Email or username
    secret: str  # API token used as password

    def __repr__(self) -> str:
        return f"BackendCredential(principal={self.principal!r}, secret='***')"

    @classmethod
    def from_env(cls) -> "BackendCredential":
        """Create the credential from CONFLUENCE_API_MAIL / CONFLUENCE_API_KEY.

        Raises:
            ValueError: If either variable is missing
        """
        return cls(
            principal=get_required_env("CONFLUENCE_API_MAIL"),
            secret=get_required_env("CONFLUENCE_API_KEY"),
        )


def basic_auth_header(credential: BackendCredential) -> str:
    """Build the value of a Basic ``Authorization`` header."""
    raw = f"{credential.principal}:{credential.secret}".encode()
    return f"Basic {base64.b64encode(raw).decode('ascii')}"


def configure_basic_auth(session: "Session", credential: BackendCredential) -> None:
    """Attach Basic authentication to every request made through the session.

    Args:
        session: The requests session to configure
        credential: Principal and API token
    """
    logger.debug(f"Configuring Basic authentication for {credential.principal}")
    session.headers["Authorization"] = basic_auth_header(credential)
