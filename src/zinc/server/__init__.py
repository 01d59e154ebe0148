"""Protocol server — dispatcher, serving loop and configuration."""

from zinc.server.config import ConfigError, ServerConfig, load_config
from zinc.server.dispatcher import Method, RequestDispatcher
from zinc.server.server import MCPServer

__all__ = [
    "ConfigError",
    "MCPServer",
    "Method",
    "RequestDispatcher",
    "ServerConfig",
    "load_config",
]
