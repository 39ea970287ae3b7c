import asyncio
import os
import sys

import click
from dotenv import load_dotenv

from .logging_config import log_operation, setup_logger

__version__ = "0.1.0"

logger = setup_logger()


@click.command()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse"]),
    default="stdio",
    help="Transport type (stdio or sse)",
)
@click.option(
    "--port",
    default=8000,
    help="Port to listen on for SSE transport",
)
@click.option(
    "--log-dir",
    help="Directory to store log files",
)
@click.option(
    "--log-to-file/--no-log-to-file",
    default=False,
    help="Enable/disable file logging",
)
@click.option(
    "--confluence-url",
    help="Confluence URL (e.g., https://your-domain.atlassian.net)",
)
@click.option(
    "--confluence-cloud/--confluence-server",
    default=None,
    help="Use Cloud (/wiki/rest/api) or Server (/rest/api) Confluence paths",
)
@click.option(
    "--jira-url",
    help="Jira URL (e.g., https://your-domain.atlassian.net)",
)
@click.option("--api-mail", help="Email or username used for both services")
@click.option("--api-key", help="API token used for both services")
@click.option(
    "--jira-in-progress-status",
    help="Name of the Jira status matched by status=in_progress",
)
def main(
    verbose: int,
    env_file: str | None,
    transport: str,
    port: int,
    log_dir: str | None,
    log_to_file: bool,
    confluence_url: str | None,
    confluence_cloud: bool | None,
    jira_url: str | None,
    api_mail: str | None,
    api_key: str | None,
    jira_in_progress_status: str | None,
) -> None:
    """MCP Confluence/Jira Server - Confluence pages and Jira issues as MCP tools."""
    logging_level = None
    if verbose == 1:
        logging_level = "INFO"
    elif verbose >= 2:
        logging_level = "DEBUG"

    setup_logger(level=logging_level, log_to_file=log_to_file, log_dir=log_dir)

    with log_operation(logger, "application_startup", app_version=__version__):
        if env_file:
            logger.info(f"Loading environment from file: {env_file}")
            load_dotenv(env_file)
        else:
            logger.debug("Attempting to load environment from default .env file")
            load_dotenv()

        # Command line arguments take precedence over the environment
        if confluence_url:
            os.environ["CONFLUENCE_URL"] = confluence_url
        if confluence_cloud is not None:
            os.environ["CONFLUENCE_CLOUD"] = str(confluence_cloud).lower()
        if jira_url:
            os.environ["JIRA_URL"] = jira_url
        if api_mail:
            os.environ["CONFLUENCE_API_MAIL"] = api_mail
        if api_key:
            os.environ["CONFLUENCE_API_KEY"] = api_key
        if jira_in_progress_status:
            os.environ["JIRA_IN_PROGRESS_STATUS"] = jira_in_progress_status

        from . import server

        try:
            server.load_configs()
        except ValueError as e:
            logger.error(
                f"{e}. Please check your environment variables or .env file."
            )
            sys.exit(1)

        logger.info(
            f"Starting MCP Confluence/Jira v{__version__} with {transport} transport"
        )

    asyncio.run(server.run_server(transport=transport, port=port))


__all__ = ["main", "__version__", "setup_logger", "log_operation"]

if __name__ == "__main__":
    main()
