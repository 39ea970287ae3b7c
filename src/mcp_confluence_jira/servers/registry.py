"""Static catalog of the tools exposed over MCP."""

from dataclasses import dataclass, field
from typing import Any, Literal

from ..models.jira import SPRINT_ISSUE_FIELDS

ParameterKind = Literal["string", "integer", "boolean", "array", "enum"]

_JSON_TYPES = {
    "string": "string",
    "integer": "integer",
    "boolean": "boolean",
    "array": "array",
    "enum": "string",
}


@dataclass(frozen=True)
class ToolParameter:
    """One declared argument of a tool."""

    name: str
    kind: ParameterKind
    description: str
    required: bool = False
    default: Any = None
    enum: tuple[str, ...] = ()
    keyword: str | None = None  # handler keyword when it differs from name

    @property
    def handler_keyword(self) -> str:
        return self.keyword or self.name

    def to_json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": _JSON_TYPES[self.kind],
            "description": self.description,
        }
        if self.kind == "array":
            schema["items"] = {"type": "string"}
        if self.enum:
            schema["enum"] = list(self.enum)
        if self.default is not None:
            schema["default"] = (
                list(self.default) if isinstance(self.default, tuple) else self.default
            )
        return schema


@dataclass(frozen=True)
class ToolSpec:
    """Name, description and argument contract of one tool."""

    name: str
    description: str
    parameters: tuple[ToolParameter, ...] = field(default_factory=tuple)

    @property
    def required(self) -> list[str]:
        return [param.name for param in self.parameters if param.required]

    def to_input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                param.name: param.to_json_schema() for param in self.parameters
            },
            "required": self.required,
        }


def _string(name: str, description: str, required: bool = False) -> ToolParameter:
    return ToolParameter(name, "string", description, required=required)


def _limit() -> ToolParameter:
    return ToolParameter(
        "limit", "integer", "Maximum number of results to return", default=10
    )


_BOARD_ID = ToolParameter("board_id", "integer", "Jira board ID", required=True)
_ISSUE_KEY = _string("issue_key", "Issue key (e.g. PROJ-123)", required=True)

TOOL_SPECS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="confluence_search",
        description="Execute a CQL query on Confluence to search pages",
        parameters=(
            _string(
                "cql",
                "CQL query string, e.g. 'type=page AND space=DEV AND title~\"Meeting\"'",
                required=True,
            ),
            _limit(),
        ),
    ),
    ToolSpec(
        name="confluence_get_page",
        description="Get the content of a Confluence page with its version and space",
        parameters=(_string("page_id", "Confluence page ID", required=True),),
    ),
    ToolSpec(
        name="confluence_create_page",
        description="Create a new Confluence page",
        parameters=(
            _string(
                "space_key", "Key of the space the page is created in", required=True
            ),
            _string("title", "Page title", required=True),
            _string("content", "Page content in storage format", required=True),
            _string("parent_id", "Parent page ID"),
        ),
    ),
    ToolSpec(
        name="confluence_update_page",
        description=(
            "Update an existing Confluence page. The title, space and parent "
            "pages are kept unless overridden"
        ),
        parameters=(
            _string("page_id", "ID of the page to update", required=True),
            _string("content", "New page content in storage format", required=True),
            _string("title", "New page title"),
        ),
    ),
    ToolSpec(
        name="jira_search",
        description="Execute a JQL query on Jira to search issues",
        parameters=(
            _string(
                "jql",
                "JQL query string, e.g. 'project = PROJ AND status = \"In Progress\"'",
                required=True,
            ),
            _limit(),
        ),
    ),
    ToolSpec(
        name="jira_create_issue",
        description="Create a new Jira issue",
        parameters=(
            _string("project", "Project key", required=True),
            _string("summary", "Issue summary", required=True),
            _string(
                "issue_type", "Issue type name (e.g. Task, Bug, Story)", required=True
            ),
            _string("description", "Issue description in plain text"),
            _string("assignee", "Assignee account ID"),
            _string("priority", "Priority ID (defaults to 3, Medium)"),
        ),
    ),
    ToolSpec(
        name="jira_update_issue",
        description="Update the description of an existing Jira issue",
        parameters=(
            _ISSUE_KEY,
            _string("summary", "New issue summary (not applied)"),
            _string("description", "New issue description in plain text"),
            _string("assignee", "New assignee account ID (not applied)"),
            _string("priority", "New priority ID (not applied)"),
        ),
    ),
    ToolSpec(
        name="jira_get_transitions",
        description="List the status transitions currently available on a Jira issue",
        parameters=(_ISSUE_KEY,),
    ),
    ToolSpec(
        name="jira_transition_issue",
        description=(
            "Change the status of a Jira issue. The transition ID must be one "
            "of the issue's currently available transitions"
        ),
        parameters=(
            _ISSUE_KEY,
            _string(
                "transition_id",
                "Transition ID to change the issue status",
                required=True,
            ),
        ),
    ),
    ToolSpec(
        name="jira_get_board_sprints",
        description="List the sprints of a Jira board",
        parameters=(
            _BOARD_ID,
            ToolParameter(
                "state",
                "enum",
                "Sprint state filter; all states when omitted",
                enum=("active", "future", "closed"),
            ),
        ),
    ),
    ToolSpec(
        name="jira_get_sprint_issues",
        description="List the issues of a Jira sprint",
        parameters=(
            ToolParameter("sprint_id", "integer", "Jira sprint ID", required=True),
            ToolParameter(
                "fields",
                "array",
                "Issue fields to return",
                default=SPRINT_ISSUE_FIELDS,
            ),
        ),
    ),
    ToolSpec(
        name="jira_get_current_sprint",
        description="Get the active sprint of a Jira board, optionally with its issues",
        parameters=(
            _BOARD_ID,
            ToolParameter(
                "include_issues",
                "boolean",
                "Whether to include the sprint's issues",
                default=True,
            ),
        ),
    ),
    ToolSpec(
        name="jira_get_epic_issues",
        description="List the issues linked to a Jira epic",
        parameters=(_string("epic_key", "Epic issue key (e.g. PROJ-1)", required=True),),
    ),
    ToolSpec(
        name="jira_get_user_issues",
        description="List the issues a user is assigned to or reported on a Jira board",
        parameters=(
            _BOARD_ID,
            _string("username", "Jira username", required=True),
            ToolParameter(
                "type",
                "enum",
                "Match the user as assignee or reporter",
                default="assignee",
                enum=("assignee", "reporter"),
                keyword="user_type",
            ),
            ToolParameter(
                "status",
                "enum",
                "Status filter",
                default="all",
                enum=("open", "in_progress", "done", "all"),
            ),
        ),
    ),
)

_TOOLS_BY_NAME = {spec.name: spec for spec in TOOL_SPECS}


def list_tools() -> list[ToolSpec]:
    """Return the tool catalog in its fixed order."""
    return list(TOOL_SPECS)


def get_tool_spec(name: str) -> ToolSpec | None:
    """Look up a tool by name."""
    return _TOOLS_BY_NAME.get(name)
