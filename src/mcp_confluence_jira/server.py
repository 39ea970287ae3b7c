import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from mcp.server import Server
from mcp.types import TextContent, Tool

from .confluence import ConfluenceFetcher
from .confluence.config import ConfluenceConfig
from .jira import JiraFetcher
from .jira.config import JiraConfig
from .logging_config import log_config_param
from .servers import Dispatcher, ToolCall
from .servers.registry import list_tools as list_tool_specs
from .utils.auth import BackendCredential

logger = logging.getLogger("mcp-confluence-jira")


@dataclass(frozen=True)
class AppContext:
    """Application context for MCP Confluence/Jira."""

    dispatcher: Dispatcher


def load_configs() -> tuple[ConfluenceConfig, JiraConfig]:
    """Read both service configurations from the environment.

    Raises:
        ValueError: If any required environment variable is missing
    """
    credential = BackendCredential.from_env()
    return (
        ConfluenceConfig.from_env(credential=credential),
        JiraConfig.from_env(credential=credential),
    )


def log_configs(confluence_config: ConfluenceConfig, jira_config: JiraConfig) -> None:
    log_config_param(logger, "Confluence", "URL", confluence_config.url)
    log_config_param(
        logger, "Confluence", "API Mode", confluence_config.api_mode.value
    )
    log_config_param(logger, "Jira", "URL", jira_config.url)
    log_config_param(
        logger, "Jira", "In Progress Status", jira_config.in_progress_status
    )
    log_config_param(
        logger, "Backend", "Principal", confluence_config.credential.principal
    )
    log_config_param(
        logger,
        "Backend",
        "API Token",
        confluence_config.credential.secret,
        sensitive=True,
    )


@asynccontextmanager
async def server_lifespan(server: Server) -> AsyncIterator[AppContext]:
    """Build the backend clients once for the lifetime of the server."""
    logger.info("Starting MCP Confluence/Jira server")
    confluence_config, jira_config = load_configs()
    log_configs(confluence_config, jira_config)

    dispatcher = Dispatcher(
        confluence=ConfluenceFetcher(config=confluence_config),
        jira=JiraFetcher(config=jira_config),
    )
    logger.info("Confluence and Jira clients initialized successfully.")
    yield AppContext(dispatcher=dispatcher)


app = Server("mcp-confluence-jira", lifespan=server_lifespan)


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List the Confluence and Jira tools."""
    return [
        Tool(
            name=spec.name,
            description=spec.description,
            inputSchema=spec.to_input_schema(),
        )
        for spec in list_tool_specs()
    ]


@app.call_tool(validate_input=False)
async def call_tool(name: str, arguments: Any) -> Sequence[TextContent]:
    """Handle tool calls for Confluence and Jira operations."""
    ctx: AppContext = app.request_context.lifespan_context
    result = await ctx.dispatcher.dispatch(ToolCall(name=name, arguments=arguments or {}))
    return [TextContent(type="text", text=result.text)]


async def run_server(transport: str = "stdio", port: int = 8000) -> None:
    """Run the MCP Confluence/Jira server with the specified transport."""
    if transport == "sse":
        import uvicorn
        from mcp.server.sse import SseServerTransport
        from starlette.applications import Starlette
        from starlette.requests import Request
        from starlette.responses import Response
        from starlette.routing import Mount, Route

        sse = SseServerTransport("/messages/")

        async def handle_sse(request: Request) -> Response:
            async with sse.connect_sse(
                request.scope, request.receive, request._send
            ) as streams:
                await app.run(
                    streams[0], streams[1], app.create_initialization_options()
                )
            return Response()

        starlette_app = Starlette(
            routes=[
                Route("/sse", endpoint=handle_sse),
                Mount("/messages/", app=sse.handle_post_message),
            ],
        )

        config = uvicorn.Config(starlette_app, host="0.0.0.0", port=port)  # noqa: S104
        server = uvicorn.Server(config)
        await server.serve()
    else:
        from mcp.server.stdio import stdio_server

        async with stdio_server() as (read_stream, write_stream):
            await app.run(
                read_stream, write_stream, app.create_initialization_options()
            )
