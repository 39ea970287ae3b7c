"""Error types raised by the tool handlers and the dispatcher."""

from typing import Any


class GatewayError(Exception):
    """Base exception for MCP Confluence/Jira errors."""

    pass


class UnknownToolError(GatewayError):
    """Raised when a call names a tool that is not in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class MissingArgumentError(GatewayError):
    """Raised when a required tool argument is absent or blank."""

    def __init__(self, param_name: str) -> None:
        super().__init__(f"Missing required argument: {param_name}")
        self.param_name = param_name


class InvalidArgumentError(GatewayError):
    """Raised when an argument cannot be coerced to its declared kind."""

    def __init__(self, param_name: str, reason: str) -> None:
        super().__init__(f"Invalid argument '{param_name}': {reason}")
        self.param_name = param_name


class LocalValidationError(GatewayError):
    """Raised when a request is rejected before any backend call is made."""

    pass


class ServiceNotConfiguredError(GatewayError):
    """Raised when a tool targets a backend that has no client."""

    pass


class BackendRejectedError(GatewayError):
    """Raised when a backend answers with a non-2xx status."""

    def __init__(
        self, message: str, status: int | None = None, details: Any = None
    ) -> None:
        super().__init__(message)
        self.status = status
        self.details = details


class NetworkFailureError(GatewayError):
    """Raised when no response could be obtained from a backend."""

    pass
