"""Entry point for running the MCP Confluence/Jira server."""

from . import main

if __name__ == "__main__":
    main()
