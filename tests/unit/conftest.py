"""
Shared fixtures for unit tests.

Fetchers are built from real configuration objects; only their REST client
is swapped for a MockRestAPI so no network access happens.
"""

import pytest

from mcp_confluence_jira.confluence import ConfluenceFetcher
from mcp_confluence_jira.confluence.config import ApiMode, ConfluenceConfig
from mcp_confluence_jira.jira import JiraFetcher
from mcp_confluence_jira.jira.config import JiraConfig
from mcp_confluence_jira.utils.auth import BackendCredential
from tests.utils.mocks import MockRestAPI


@pytest.fixture
def credential():
    return BackendCredential(principal="user@example.com", secret="api-token-123")


@pytest.fixture
def confluence_config(credential):
    return ConfluenceConfig(
        url="https://example.atlassian.net",
        credential=credential,
        api_mode=ApiMode.CLOUD,
    )


@pytest.fixture
def jira_config(credential):
    return JiraConfig(url="https://example.atlassian.net", credential=credential)


@pytest.fixture
def confluence_rest():
    return MockRestAPI()


@pytest.fixture
def jira_rest():
    return MockRestAPI()


@pytest.fixture
def confluence_fetcher(confluence_config, confluence_rest):
    fetcher = ConfluenceFetcher(config=confluence_config)
    fetcher.confluence = confluence_rest
    return fetcher


@pytest.fixture
def jira_fetcher(jira_config, jira_rest):
    fetcher = JiraFetcher(config=jira_config)
    fetcher.jira = jira_rest
    return fetcher
