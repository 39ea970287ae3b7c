"""Environment variable utility functions for MCP Confluence/Jira."""

import os


def get_required_env(env_var_name: str) -> str:
    """Return a required environment variable.

    Raises:
        ValueError: If the variable is unset or blank
    """
    value = os.getenv(env_var_name, "").strip()
    if not value:
        raise ValueError(f"Missing required {env_var_name} environment variable")
    return value


def get_optional_env(env_var_name: str, default: str) -> str:
    """Return an environment variable, falling back when unset or blank."""
    value = os.getenv(env_var_name, "").strip()
    return value or default


def is_env_not_false(env_var_name: str) -> bool:
    """Check a flag that stays on unless set to the literal ``false``.

    Only the exact string ``false`` turns the flag off; any other value,
    including an unset variable, keeps it on.
    """
    return os.getenv(env_var_name) != "false"
