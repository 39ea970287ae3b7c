"""Confluence API integration module.

This module provides access to Confluence content through the Model Context Protocol.
"""

from .client import ConfluenceClient
from .config import ApiMode, ConfluenceConfig
from .pages import PagesMixin
from .search import SearchMixin


class ConfluenceFetcher(SearchMixin, PagesMixin):
    """Main entry point for Confluence operations."""

    pass


__all__ = ["ApiMode", "ConfluenceClient", "ConfluenceConfig", "ConfluenceFetcher"]
