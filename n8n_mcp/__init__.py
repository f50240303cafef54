"""MCP server exposing the n8n REST API as tools."""
from .api_client import N8nClient, TransportError
from .config import ConfigError, ConnectionConfig
from .main import create_server

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ConnectionConfig",
    "N8nClient",
    "TransportError",
    "create_server",
]
