"""Shared fixtures for n8n-mcp tests.

The n8n instance is replaced by a local pytest-httpserver, and tools are
called through FastMCP's in-memory client so every test goes through the
real MCP request path (schema validation, tool dispatch, error results).
"""

from collections.abc import AsyncIterator

import pytest
from fastmcp import Client, FastMCP
from pytest_httpserver import HTTPServer

from n8n_mcp.config import ConnectionConfig
from n8n_mcp.main import create_server

API_KEY = "test-api-key"


@pytest.fixture
def config(httpserver: HTTPServer) -> ConnectionConfig:
    """Connection settings pointing at the local mock n8n."""
    return ConnectionConfig(base_url=httpserver.url_for("/"), api_key=API_KEY)


@pytest.fixture
def server(config: ConnectionConfig) -> FastMCP:
    return create_server(config)


@pytest.fixture
async def mcp_client(server: FastMCP) -> AsyncIterator[Client]:
    """Connected in-memory MCP client."""
    async with Client(server) as client:
        yield client
