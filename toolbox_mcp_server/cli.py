"""toolbox-mcp CLI entrypoint."""

from __future__ import annotations

import json
import logging
import sys

import anyio
import click

from toolbox_mcp_server import __version__
from toolbox_mcp_server.config import Config, DocumentStoreConfig
from toolbox_mcp_server.handler_wrappers import StartupFailure
from toolbox_mcp_server.mcp_server import McpServer
from toolbox_mcp_server.session import DocumentStoreSession, FilesystemSession

logger = logging.getLogger("toolbox_mcp_server")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _setup_logging(config: Config) -> None:
    # stdout belongs to the protocol; diagnostics go to stderr
    logging.basicConfig(level=config.log_level_value, stream=sys.stderr, format=_LOG_FORMAT)


def _check_config(config: Config) -> None:
    valid, error = config.is_valid()
    if not valid:
        click.echo(f"Invalid configuration: {error}", err=True)
        sys.exit(1)


def run_server(server: McpServer) -> None:
    """Run a server to completion; exit 1 if it cannot start."""
    try:
        anyio.run(server.run)
    except StartupFailure as e:
        logger.error("Fatal error: %s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted before signal handling was installed")
    except Exception as e:
        logger.exception("Fatal error: %s", e)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="toolbox-mcp")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Diagnostic log level (default: TOOLBOX_LOG_LEVEL or INFO).",
)
@click.pass_context
def main(ctx: click.Context, log_level: str | None) -> None:
    """Toolbox MCP servers: filesystem and MongoDB tools over stdio."""
    ctx.obj = {"log_level": log_level}


@main.command("filesystem")
@click.pass_context
def filesystem(ctx: click.Context) -> None:
    """Serve read_file, list_files, create_file and create_folder."""
    from toolbox_mcp_server.primitives import filesystem_catalog

    config = Config.from_env()
    if ctx.obj["log_level"]:
        config.log_level = ctx.obj["log_level"]
    _check_config(config)
    _setup_logging(config)

    run_server(McpServer(filesystem_catalog, FilesystemSession()))


@main.command("document-store")
@click.option("--uri", default=None, help="MongoDB connection URI (env MONGODB_URI).")
@click.option("--database", default=None, help="Database to bind (env MONGODB_DB).")
@click.option(
    "--connect-timeout-ms",
    type=int,
    default=None,
    help="How long startup waits for the server (env MONGODB_CONNECT_TIMEOUT_MS).",
)
@click.pass_context
def document_store(
    ctx: click.Context,
    uri: str | None,
    database: str | None,
    connect_timeout_ms: int | None,
) -> None:
    """Serve find, find_one, count and list_collections against MongoDB."""
    from toolbox_mcp_server.primitives import document_store_catalog

    config = DocumentStoreConfig.from_env()
    if ctx.obj["log_level"]:
        config.log_level = ctx.obj["log_level"]
    if uri:
        config.uri = uri
    if database:
        config.database = database
    if connect_timeout_ms is not None:
        config.connect_timeout_ms = connect_timeout_ms
    _check_config(config)
    _setup_logging(config)

    run_server(McpServer(document_store_catalog, DocumentStoreSession(config)))


@main.command("tools")
@click.argument("instance", type=click.Choice(["filesystem", "document-store"]))
def tools(instance: str) -> None:
    """Print the tool catalog of INSTANCE as JSON."""
    from toolbox_mcp_server.primitives import document_store_catalog, filesystem_catalog

    catalog = filesystem_catalog if instance == "filesystem" else document_store_catalog
    click.echo(json.dumps([d.to_dict() for d in catalog.list_tools()], indent=2))


if __name__ == "__main__":
    main()
