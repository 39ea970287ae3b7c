"""Configuration module for the Confluence client."""

from dataclasses import dataclass
from enum import Enum

from ..utils.auth import BackendCredential
from ..utils.env import get_required_env, is_env_not_false


class ApiMode(str, Enum):
    """REST path style of the Confluence deployment."""

    CLOUD = "cloud"
    SERVER = "server"

    @property
    def api_prefix(self) -> str:
        # Cloud serves Confluence under /wiki on the site host
        return "wiki/rest/api" if self is ApiMode.CLOUD else "rest/api"


@dataclass(frozen=True)
class ConfluenceConfig:
    """Confluence API configuration."""

    url: str  # Base URL for Confluence
    credential: BackendCredential
    api_mode: ApiMode = ApiMode.CLOUD

    @property
    def is_cloud(self) -> bool:
        return self.api_mode is ApiMode.CLOUD

    @property
    def api_prefix(self) -> str:
        return self.api_mode.api_prefix

    @classmethod
    def from_env(
        cls, credential: BackendCredential | None = None
    ) -> "ConfluenceConfig":
        """Create configuration from environment variables.

        CONFLUENCE_CLOUD selects the path style; every value except the
        literal ``false`` keeps Cloud paths.

        Raises:
            ValueError: If any required environment variable is missing
        """
        url = get_required_env("CONFLUENCE_URL").rstrip("/")
        api_mode = ApiMode.CLOUD if is_env_not_false("CONFLUENCE_CLOUD") else ApiMode.SERVER
        return cls(
            url=url,
            credential=credential or BackendCredential.from_env(),
            api_mode=api_mode,
        )
