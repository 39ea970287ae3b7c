"""Unit tests for the command line entry point."""

import os
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from mcp_confluence_jira import main


@pytest.fixture
def backend_env(monkeypatch):
    monkeypatch.setenv("CONFLUENCE_URL", "https://example.atlassian.net")
    monkeypatch.setenv("JIRA_URL", "https://example.atlassian.net")
    monkeypatch.setenv("CONFLUENCE_API_MAIL", "user@example.com")
    monkeypatch.setenv("CONFLUENCE_API_KEY", "api-token-123")
    monkeypatch.setenv("CONFLUENCE_CLOUD", "true")
    monkeypatch.setenv("JIRA_IN_PROGRESS_STATUS", "In Progress")


@pytest.fixture
def mock_run():
    with (
        patch("mcp_confluence_jira.load_dotenv"),
        patch("mcp_confluence_jira.server.run_server", new=MagicMock()) as run_server,
        patch("mcp_confluence_jira.asyncio.run") as asyncio_run,
    ):
        yield run_server, asyncio_run


def test_stdio_is_default(backend_env, mock_run):
    run_server, asyncio_run = mock_run

    result = CliRunner().invoke(main, [])

    assert result.exit_code == 0, result.output
    run_server.assert_called_once_with(transport="stdio", port=8000)
    asyncio_run.assert_called_once_with(run_server.return_value)


def test_sse_transport_and_port(backend_env, mock_run):
    run_server, _ = mock_run

    result = CliRunner().invoke(main, ["--transport", "sse", "--port", "9000"])

    assert result.exit_code == 0, result.output
    run_server.assert_called_once_with(transport="sse", port=9000)


def test_options_override_environment(backend_env, mock_run):
    result = CliRunner().invoke(
        main,
        [
            "--confluence-server",
            "--jira-url",
            "https://jira.internal",
            "--jira-in-progress-status",
            "Doing",
        ],
    )

    assert result.exit_code == 0, result.output
    assert os.environ["CONFLUENCE_CLOUD"] == "false"
    assert os.environ["JIRA_URL"] == "https://jira.internal"
    assert os.environ["JIRA_IN_PROGRESS_STATUS"] == "Doing"


def test_missing_configuration_exits(backend_env, monkeypatch, mock_run):
    run_server, asyncio_run = mock_run
    monkeypatch.delenv("CONFLUENCE_API_KEY")

    result = CliRunner().invoke(main, [])

    assert result.exit_code == 1
    run_server.assert_not_called()
    asyncio_run.assert_not_called()
