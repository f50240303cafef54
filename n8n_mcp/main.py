"""
n8n MCP Server - FastMCP Implementation

Provides 18 tools for managing n8n workflows, executions and tags, and for
running workflows through their webhooks. Runs over stdio by default, or
over HTTP when N8N_MCP_TRANSPORT=http.
"""
import logging
import os
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from .api_client import N8nClient
from .config import ConfigError, ConnectionConfig
from .tools import N8nTools

logger = logging.getLogger(__name__)

INSTRUCTIONS = """\
This server provides tools that interact with an n8n server.

n8n ('node-mation') is a service for building automations, used either on
n8n's cloud offering or self-hosted. With these tools you can create,
retrieve (in bulk and by ID), update, activate, deactivate and delete
workflows, and read or replace the tags of a workflow. You can retrieve (in
bulk and by ID) and delete executions, and retrieve, create, update and
delete tags.

If the user asks you to update or run a workflow (or assign a tag), you may
need to retrieve all workflows first to find the right one. Workflows are run
through the path of their webhook node.
"""

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
VALID_TRANSPORTS = {"stdio", "http"}


def create_server(config: ConnectionConfig) -> FastMCP:
    """
    Build the MCP server with every n8n tool registered.

    Args:
        config: Validated connection settings

    Returns:
        FastMCP server ready to run
    """
    client = N8nClient(config)

    @asynccontextmanager
    async def lifespan(_server: FastMCP) -> AsyncIterator[dict]:
        try:
            yield {}
        finally:
            await client.close()

    mcp = FastMCP("n8n", instructions=INSTRUCTIONS, lifespan=lifespan)
    N8nTools(client).register(mcp)
    return mcp


def configure_logging() -> None:
    """Log to stderr; stdout carries the MCP stream"""
    level_name = os.getenv("N8N_MCP_LOG_LEVEL", "INFO").upper()
    if level_name not in VALID_LOG_LEVELS:
        print(
            f"Warning: Invalid N8N_MCP_LOG_LEVEL '{level_name}'. "
            f"Valid levels: {', '.join(sorted(VALID_LOG_LEVELS))}. Using INFO.",
            file=sys.stderr,
        )
        level_name = "INFO"

    logging.basicConfig(
        level=getattr(logging, level_name),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """Entry point for `n8n-mcp` and `python -m n8n_mcp`"""
    configure_logging()

    try:
        config = ConnectionConfig.from_env()
    except ConfigError as e:
        logger.error(f"Cannot start n8n MCP server: {e}")
        sys.exit(1)

    transport = os.getenv("N8N_MCP_TRANSPORT", "stdio").lower()
    if transport not in VALID_TRANSPORTS:
        logger.error(
            f"Invalid N8N_MCP_TRANSPORT '{transport}'. "
            f"Valid transports: {', '.join(sorted(VALID_TRANSPORTS))}"
        )
        sys.exit(1)

    mcp = create_server(config)
    logger.info(f"Starting n8n MCP server for {config.base_url} over {transport}")

    try:
        if transport == "http":
            host = os.getenv("N8N_MCP_HOST", "0.0.0.0")
            port = int(os.getenv("PORT", 8000))
            mcp.run(transport="http", host=host, port=port)
        else:
            mcp.run()
    except KeyboardInterrupt:
        logger.info("Received interrupt signal, shutting down")


if __name__ == "__main__":
    main()
