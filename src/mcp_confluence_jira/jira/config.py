"""Configuration module for Jira API interactions."""

from dataclasses import dataclass

from ..utils.auth import BackendCredential
from ..utils.env import get_optional_env, get_required_env

DEFAULT_OPEN_STATUS = "To Do"
DEFAULT_IN_PROGRESS_STATUS = "In Progress"
DEFAULT_DONE_STATUS = "Done"


@dataclass(frozen=True)
class JiraConfig:
    """Jira API configuration.

    The status names are the workflow labels of the target Jira site; they
    vary between deployments and languages, so they are configurable.
    """

    url: str  # Base URL for Jira
    credential: BackendCredential
    open_status: str = DEFAULT_OPEN_STATUS
    in_progress_status: str = DEFAULT_IN_PROGRESS_STATUS
    done_status: str = DEFAULT_DONE_STATUS

    @classmethod
    def from_env(cls, credential: BackendCredential | None = None) -> "JiraConfig":
        """Create configuration from environment variables.

        Raises:
            ValueError: If required environment variables are missing
        """
        return cls(
            url=get_required_env("JIRA_URL").rstrip("/"),
            credential=credential or BackendCredential.from_env(),
            open_status=get_optional_env("JIRA_OPEN_STATUS", DEFAULT_OPEN_STATUS),
            in_progress_status=get_optional_env(
                "JIRA_IN_PROGRESS_STATUS", DEFAULT_IN_PROGRESS_STATUS
            ),
            done_status=get_optional_env("JIRA_DONE_STATUS", DEFAULT_DONE_STATUS),
        )
