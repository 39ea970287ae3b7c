"""
Utility functions for the MCP Confluence/Jira integration.
"""

from .auth import BackendCredential, basic_auth_header, configure_basic_auth
from .env import get_optional_env, get_required_env, is_env_not_false
from .http import BackendResponse, send_request

__all__ = [
    "BackendCredential",
    "BackendResponse",
    "basic_auth_header",
    "configure_basic_auth",
    "get_optional_env",
    "get_required_env",
    "is_env_not_false",
    "send_request",
]
