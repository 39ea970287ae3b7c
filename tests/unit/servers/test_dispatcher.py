"""Tests for argument decoding and tool dispatch."""

import json
import time
from unittest.mock import MagicMock

import anyio
import pytest

from mcp_confluence_jira.confluence import ConfluenceFetcher
from mcp_confluence_jira.exceptions import (
    BackendRejectedError,
    InvalidArgumentError,
    MissingArgumentError,
    NetworkFailureError,
)
from mcp_confluence_jira.jira import JiraFetcher
from mcp_confluence_jira.servers.dispatcher import (
    Dispatcher,
    ToolCall,
    ToolResult,
    coerce_argument,
    decode_arguments,
)
from mcp_confluence_jira.servers.dispatcher import logger as dispatcher_logger
from mcp_confluence_jira.servers.registry import ToolParameter, get_tool_spec


@pytest.fixture
def mock_confluence():
    return MagicMock(spec=ConfluenceFetcher)


@pytest.fixture
def mock_jira():
    return MagicMock(spec=JiraFetcher)


@pytest.fixture
def dispatcher(mock_confluence, mock_jira):
    return Dispatcher(confluence=mock_confluence, jira=mock_jira)


class TestCoerceArgument:
    def test_integer_from_string(self):
        param = ToolParameter("board_id", "integer", "Board")

        assert coerce_argument(param, "42") == 42
        assert coerce_argument(param, 7.0) == 7

    @pytest.mark.parametrize("value", ["abc", True, 1.5])
    def test_integer_rejects(self, value):
        param = ToolParameter("board_id", "integer", "Board")

        with pytest.raises(InvalidArgumentError, match="board_id"):
            coerce_argument(param, value)

    @pytest.mark.parametrize(
        "value, expected",
        [(True, True), ("false", False), ("Yes", True), ("0", False)],
    )
    def test_boolean(self, value, expected):
        param = ToolParameter("include_issues", "boolean", "Include")

        assert coerce_argument(param, value) is expected

    def test_boolean_rejects(self):
        param = ToolParameter("include_issues", "boolean", "Include")

        with pytest.raises(InvalidArgumentError):
            coerce_argument(param, "maybe")

    def test_array_from_comma_separated_text(self):
        param = ToolParameter("fields", "array", "Fields")

        assert coerce_argument(param, "key, status,,") == ["key", "status"]
        assert coerce_argument(param, ["key", " summary "]) == ["key", "summary"]

    def test_enum_rejects_unknown_value(self):
        param = ToolParameter("state", "enum", "State", enum=("active", "closed"))

        with pytest.raises(InvalidArgumentError, match="expected one of active, closed"):
            coerce_argument(param, "archived")

    def test_string_accepts_numbers(self):
        param = ToolParameter("page_id", "string", "Page")

        assert coerce_argument(param, 123) == "123"


class TestDecodeArguments:
    def test_defaults_and_keyword_mapping(self):
        kwargs = decode_arguments(
            get_tool_spec("jira_get_user_issues"),
            {"board_id": "5", "username": "alice", "type": "reporter"},
        )

        assert kwargs == {
            "board_id": 5,
            "username": "alice",
            "user_type": "reporter",
            "status": "all",
        }

    def test_optional_without_default_is_omitted(self):
        kwargs = decode_arguments(
            get_tool_spec("confluence_create_page"),
            {"space_key": "DOC", "title": "T", "content": "<p>x</p>"},
        )

        assert "parent_id" not in kwargs

    def test_undeclared_arguments_are_dropped(self):
        kwargs = decode_arguments(
            get_tool_spec("confluence_get_page"),
            {"page_id": "1", "expand": "history"},
        )

        assert kwargs == {"page_id": "1"}

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_required_argument(self, value):
        with pytest.raises(MissingArgumentError, match="Missing required argument: cql"):
            decode_arguments(get_tool_spec("confluence_search"), {"cql": value})

    def test_default_list_is_a_fresh_copy(self):
        spec = get_tool_spec("jira_get_sprint_issues")

        first = decode_arguments(spec, {"sprint_id": 1})
        first["fields"].append("labels")
        second = decode_arguments(spec, {"sprint_id": 1})

        assert "labels" not in second["fields"]


class TestToolResult:
    def test_success_is_sorted_indented_json(self):
        result = ToolResult.success({"b": 1, "a": "é"})

        assert result.text == '{\n  "a": "é",\n  "b": 1\n}'

    def test_failure_envelope(self):
        result = ToolResult.failure("Bad\nrequest", status=400, details={"x": 1})

        assert json.loads(result.text) == {
            "success": False,
            "error": "Bad request",
            "status": 400,
            "details": {"x": 1},
        }

    def test_failure_without_status(self):
        assert json.loads(ToolResult.failure("boom").text) == {
            "success": False,
            "error": "boom",
        }


@pytest.mark.anyio
class TestDispatch:
    async def test_unknown_tool(self, dispatcher, mock_confluence, mock_jira):
        result = await dispatcher.dispatch(ToolCall("jira_delete_issue", {"issue_key": "X"}))

        assert not result.ok
        assert result.error == "Unknown tool: jira_delete_issue"
        assert mock_confluence.mock_calls == []
        assert mock_jira.mock_calls == []

    async def test_missing_argument_makes_no_backend_call(self, dispatcher, mock_jira):
        result = await dispatcher.dispatch(
            ToolCall("jira_transition_issue", {"issue_key": "PROJ-1"})
        )

        assert result.error == "Missing required argument: transition_id"
        mock_jira.transition_issue.assert_not_called()

    async def test_invalid_argument(self, dispatcher, mock_jira):
        result = await dispatcher.dispatch(
            ToolCall("jira_get_board_sprints", {"board_id": "five"})
        )

        assert not result.ok
        assert "board_id" in result.error
        mock_jira.get_board_sprints.assert_not_called()

    async def test_routes_decoded_arguments(self, dispatcher, mock_jira):
        mock_jira.get_current_sprint.return_value = {"board_id": 5, "active_sprint": None}

        result = await dispatcher.dispatch(
            ToolCall("jira_get_current_sprint", {"board_id": "5"})
        )

        mock_jira.get_current_sprint.assert_called_once_with(
            board_id=5, include_issues=True
        )
        assert result.ok
        assert json.loads(result.text) == {"active_sprint": None, "board_id": 5}

    async def test_confluence_route(self, dispatcher, mock_confluence):
        mock_confluence.search.return_value = {"results": []}

        await dispatcher.dispatch(ToolCall("confluence_search", {"cql": "type=page"}))

        mock_confluence.search.assert_called_once_with(cql="type=page", limit=10)

    async def test_backend_rejection_keeps_status(self, dispatcher, mock_jira):
        mock_jira.search_issues.side_effect = BackendRejectedError(
            "Field 'foo' does not exist", status=400, details={"errorMessages": ["x"]}
        )

        result = await dispatcher.dispatch(ToolCall("jira_search", {"jql": "foo = 1"}))

        assert json.loads(result.text) == {
            "success": False,
            "error": "Field 'foo' does not exist",
            "status": 400,
            "details": {"errorMessages": ["x"]},
        }

    async def test_network_failure(self, dispatcher, mock_confluence):
        mock_confluence.get_page.side_effect = NetworkFailureError("Connection refused")

        result = await dispatcher.dispatch(
            ToolCall("confluence_get_page", {"page_id": "1"})
        )

        assert result.error == "Connection refused"
        assert result.status is None

    async def test_unexpected_exception_is_contained(self, dispatcher, mock_jira):
        mock_jira.get_epic_issues.side_effect = RuntimeError("kaboom")

        result = await dispatcher.dispatch(
            ToolCall("jira_get_epic_issues", {"epic_key": "PROJ-1"})
        )

        assert result.error == "Unexpected error: kaboom"

    async def test_unconfigured_service(self, mock_confluence):
        dispatcher = Dispatcher(confluence=mock_confluence)

        result = await dispatcher.dispatch(
            ToolCall("jira_get_epic_issues", {"epic_key": "PROJ-1"})
        )

        assert result.error == "Jira is not configured."

    async def test_overlapping_calls_keep_logging_context_separate(
        self, dispatcher, mock_jira
    ):
        def slow_epic(epic_key):
            time.sleep(0.3)
            return {"epic_key": epic_key}

        def quick_sprints(board_id, state=None):
            time.sleep(0.05)
            return {"board_id": board_id}

        mock_jira.get_epic_issues.side_effect = slow_epic
        mock_jira.get_board_sprints.side_effect = quick_sprints
        results = {}

        async def run(name, arguments):
            results[name] = await dispatcher.dispatch(ToolCall(name, arguments))

        async with anyio.create_task_group() as tg:
            tg.start_soon(run, "jira_get_epic_issues", {"epic_key": "PROJ-1"})
            await anyio.sleep(0.01)
            tg.start_soon(run, "jira_get_board_sprints", {"board_id": 5})

        assert results["jira_get_epic_issues"].ok
        assert results["jira_get_board_sprints"].ok
        assert dispatcher_logger.context == {}
