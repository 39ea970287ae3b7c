"""Validation and routing of tool calls to the Confluence and Jira handlers."""

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING, Any

from anyio import to_thread

from ..exceptions import (
    BackendRejectedError,
    GatewayError,
    InvalidArgumentError,
    MissingArgumentError,
    ServiceNotConfiguredError,
    UnknownToolError,
)
from ..logging_config import get_logger, log_operation
from .registry import ToolParameter, ToolSpec, get_tool_spec

if TYPE_CHECKING:
    from ..confluence import ConfluenceFetcher
    from ..jira import JiraFetcher

logger = get_logger("mcp-confluence-jira.dispatcher")

# Tool name -> (service, fetcher method)
HANDLERS: dict[str, tuple[str, str]] = {
    "confluence_search": ("confluence", "search"),
    "confluence_get_page": ("confluence", "get_page"),
    "confluence_create_page": ("confluence", "create_page"),
    "confluence_update_page": ("confluence", "update_page"),
    "jira_search": ("jira", "search_issues"),
    "jira_create_issue": ("jira", "create_issue"),
    "jira_update_issue": ("jira", "update_issue"),
    "jira_get_transitions": ("jira", "get_transitions"),
    "jira_transition_issue": ("jira", "transition_issue"),
    "jira_get_board_sprints": ("jira", "get_board_sprints"),
    "jira_get_sprint_issues": ("jira", "get_sprint_issues"),
    "jira_get_current_sprint": ("jira", "get_current_sprint"),
    "jira_get_epic_issues": ("jira", "get_epic_issues"),
    "jira_get_user_issues": ("jira", "get_user_issues"),
}

_TRUE_VALUES = {"true", "1", "yes", "y", "on"}
_FALSE_VALUES = {"false", "0", "no", "n", "off"}


def format_json(value: Any) -> str:
    """Render a result as indented JSON with stable key order."""
    return json.dumps(value, indent=2, ensure_ascii=False, sort_keys=True, default=str)


def _single_line(message: str) -> str:
    return " ".join(message.split())


@dataclass(frozen=True)
class ToolCall:
    """One inbound tool invocation."""

    name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a tool call: a serialized payload or an error."""

    ok: bool
    payload: str | None = None
    error: str | None = None
    status: int | None = None
    details: Any = None

    @classmethod
    def success(cls, value: Any) -> "ToolResult":
        return cls(ok=True, payload=format_json(value))

    @classmethod
    def failure(
        cls, message: str, status: int | None = None, details: Any = None
    ) -> "ToolResult":
        return cls(ok=False, error=_single_line(message), status=status, details=details)

    @property
    def text(self) -> str:
        """Text block sent back to the MCP client."""
        if self.ok:
            return self.payload or ""
        body: dict[str, Any] = {"success": False, "error": self.error}
        if self.status is not None:
            body["status"] = self.status
        if self.details is not None:
            body["details"] = self.details
        return format_json(body)


def _coerce_integer(param: ToolParameter, value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidArgumentError(param.name, "expected an integer, got a boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    try:
        return int(str(value).strip())
    except ValueError:
        raise InvalidArgumentError(
            param.name, f"expected an integer, got {value!r}"
        ) from None


def _coerce_boolean(param: ToolParameter, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise InvalidArgumentError(param.name, f"expected a boolean, got {value!r}")


def _coerce_array(param: ToolParameter, value: Any) -> list[str]:
    if isinstance(value, list | tuple):
        items = [str(item).strip() for item in value]
    else:
        items = [item.strip() for item in str(value).split(",")]
    return [item for item in items if item]


def coerce_argument(param: ToolParameter, value: Any) -> Any:
    """
    Convert a raw argument to the parameter's declared kind.

    Any present value may be read as a string; integers and booleans are
    parsed from their text form and arrays accept comma-separated text.

    Raises:
        InvalidArgumentError: If the value cannot be converted
    """
    if value is None:
        return None
    if param.kind == "integer":
        if isinstance(value, str) and not value.strip():
            return None
        return _coerce_integer(param, value)
    if param.kind == "boolean":
        if isinstance(value, str) and not value.strip():
            return None
        return _coerce_boolean(param, value)
    if param.kind == "array":
        return _coerce_array(param, value)

    text = str(value)
    if param.kind == "enum":
        text = text.strip()
        if text and text not in param.enum:
            raise InvalidArgumentError(
                param.name, f"expected one of {', '.join(param.enum)}, got {text!r}"
            )
    return text


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list):
        return not value
    return False


def decode_arguments(spec: ToolSpec, arguments: Mapping[str, Any]) -> dict[str, Any]:
    """
    Decode a raw argument map into handler keyword arguments.

    Declared defaults fill in omitted optional parameters; arguments the
    tool does not declare are dropped.

    Raises:
        MissingArgumentError: If a required parameter is absent or blank
        InvalidArgumentError: If a value does not fit its declared kind
    """
    decoded: dict[str, Any] = {}
    for param in spec.parameters:
        value = coerce_argument(param, arguments.get(param.name))
        if _is_blank(value):
            if param.required:
                raise MissingArgumentError(param.name)
            if param.default is not None:
                default = param.default
                decoded[param.handler_keyword] = (
                    list(default) if isinstance(default, tuple) else default
                )
            continue
        decoded[param.handler_keyword] = value

    declared = {param.name for param in spec.parameters}
    undeclared = sorted(set(arguments) - declared)
    if undeclared:
        logger.debug(f"Ignoring undeclared arguments for {spec.name}: {undeclared}")
    return decoded


class Dispatcher:
    """Route validated tool calls to the Confluence and Jira fetchers."""

    def __init__(
        self,
        confluence: "ConfluenceFetcher | None" = None,
        jira: "JiraFetcher | None" = None,
    ) -> None:
        self.services: dict[str, Any] = {"confluence": confluence, "jira": jira}

    def _resolve_handler(self, name: str) -> Callable[..., Any]:
        service_name, method_name = HANDLERS[name]
        service = self.services.get(service_name)
        if service is None:
            raise ServiceNotConfiguredError(
                f"{service_name.capitalize()} is not configured."
            )
        return getattr(service, method_name)

    async def dispatch(self, call: ToolCall) -> ToolResult:
        """
        Validate a tool call, run its handler and wrap the outcome.

        Never raises: every failure becomes an error ToolResult.
        """
        with log_operation(logger, "call_tool", tool=call.name):
            try:
                spec = get_tool_spec(call.name)
                if spec is None or call.name not in HANDLERS:
                    raise UnknownToolError(call.name)

                kwargs = decode_arguments(spec, call.arguments or {})
                handler = self._resolve_handler(spec.name)
                value = await to_thread.run_sync(partial(handler, **kwargs))
            except BackendRejectedError as e:
                logger.warning(f"{call.name} rejected by backend ({e.status}): {e}")
                return ToolResult.failure(str(e), status=e.status, details=e.details)
            except GatewayError as e:
                logger.warning(f"{call.name} failed: {e}")
                return ToolResult.failure(str(e))
            except Exception as e:  # noqa: BLE001 - tool errors must not reach the transport
                logger.error(f"Unexpected error in {call.name}: {e}", exc_info=True)
                return ToolResult.failure(f"Unexpected error: {e}")

            logger.info(f"{call.name} completed")
            return ToolResult.success(value)
