"""Tests for the Jira Search and Epics mixins."""

import pytest

from mcp_confluence_jira.exceptions import BackendRejectedError, LocalValidationError
from mcp_confluence_jira.jira.config import JiraConfig
from mcp_confluence_jira.jira.search import quote_jql_string
from tests.utils.factories import raw_issue

SEARCH_PATH = "rest/api/3/search"


class TestSearchIssues:
    def test_search_trims_issues(self, jira_fetcher, jira_rest):
        description = {
            "version": 1,
            "type": "doc",
            "content": [
                {"type": "paragraph", "content": [{"type": "text", "text": "Broken"}]}
            ],
        }
        jira_rest.add(
            "GET",
            SEARCH_PATH,
            data={"total": 42, "issues": [raw_issue(description=description)]},
        )

        result = jira_fetcher.search_issues("project = PROJ", limit=5)

        params = jira_rest.calls[0].params
        assert params["jql"] == "project = PROJ"
        assert params["maxResults"] == 5
        assert params["validateQuery"] == "strict"
        assert params["fields"].split(",") == [
            "key",
            "summary",
            "description",
            "status",
            "issuetype",
            "priority",
            "assignee",
            "updated",
        ]
        assert result["total"] == 42
        assert result["issues"] == [
            {
                "key": "PROJ-1",
                "summary": "Fix login",
                "description": "Broken",
                "status": "To Do",
                "type": "Bug",
                "priority": "High",
                "assignee": "Alice Example",
                "updated": "2024-01-02T10:00:00.000+0000",
            }
        ]

    def test_search_default_limit(self, jira_fetcher, jira_rest):
        jira_rest.add("GET", SEARCH_PATH, data={"total": 0, "issues": []})

        result = jira_fetcher.search_issues("project = PROJ")

        assert jira_rest.calls[0].params["maxResults"] == 10
        assert result == {"total": 0, "issues": []}

    def test_search_invalid_jql(self, jira_fetcher, jira_rest):
        jira_rest.add(
            "GET",
            SEARCH_PATH,
            status=400,
            data={"errorMessages": ["Error in the JQL Query: Expecting operator"]},
        )

        with pytest.raises(BackendRejectedError, match="Error in the JQL Query"):
            jira_fetcher.search_issues("project PROJ")


class TestUserIssues:
    def test_reporter_done_jql(self, jira_fetcher):
        jql = jira_fetcher.build_user_issues_jql(5, "alice", "reporter", "done")

        assert jql == "reporter = 'alice' AND board = 5 AND status = 'Done'"

    def test_all_statuses_has_no_status_clause(self, jira_fetcher):
        jql = jira_fetcher.build_user_issues_jql(5, "alice")

        assert jql == "assignee = 'alice' AND board = 5"

    def test_in_progress_status_is_configurable(self, jira_fetcher, credential):
        jira_fetcher.config = JiraConfig(
            url="https://example.atlassian.net",
            credential=credential,
            in_progress_status="En cours",
        )

        jql = jira_fetcher.build_user_issues_jql(5, "alice", status="in_progress")

        assert jql.endswith("status = 'En cours'")

    def test_username_is_quoted(self, jira_fetcher):
        jql = jira_fetcher.build_user_issues_jql(5, "o'brien", status="open")

        assert jql == "assignee = 'o\\'brien' AND board = 5 AND status = 'To Do'"

    @pytest.mark.parametrize(
        "user_type, status",
        [("watcher", "all"), ("assignee", "blocked")],
    )
    def test_invalid_filters(self, jira_fetcher, jira_rest, user_type, status):
        with pytest.raises(LocalValidationError):
            jira_fetcher.get_user_issues(5, "alice", user_type, status)

        assert jira_rest.calls == []

    def test_get_user_issues(self, jira_fetcher, jira_rest):
        jira_rest.add("GET", SEARCH_PATH, data={"total": 1, "issues": [raw_issue()]})

        result = jira_fetcher.get_user_issues(5, "alice", status="open")

        assert result["jql"] == "assignee = 'alice' AND board = 5 AND status = 'To Do'"
        assert result["total"] == 1
        assert result["issues"][0]["key"] == "PROJ-1"
        assert jira_rest.calls[0].params["maxResults"] == 100


def test_quote_jql_string_escapes_backslashes():
    assert quote_jql_string("a\\b") == "'a\\\\b'"


def test_get_epic_issues(jira_fetcher, jira_rest):
    jira_rest.add(
        "GET",
        SEARCH_PATH,
        data={"total": 2, "issues": [raw_issue("PROJ-2"), raw_issue("PROJ-3")]},
    )

    result = jira_fetcher.get_epic_issues("PROJ-1")

    params = jira_rest.calls[0].params
    assert params["jql"] == '"Epic Link" = PROJ-1'
    assert params["maxResults"] == 100
    assert result["epic_key"] == "PROJ-1"
    assert result["total"] == 2
    assert [issue["key"] for issue in result["issues"]] == ["PROJ-2", "PROJ-3"]
    assert "description" not in result["issues"][0]
