"""pathalias MCP Server - Model Context Protocol integration.

Exposes alias resolution as MCP tools so MCP-compatible assistants can ask
what an aliased import points at.

Usage:
    pathalias-mcp --workspace /my/project
"""

from .server import HAS_MCP, PathAliasToolHandler, create_server, main, run_server

__all__ = [
    "HAS_MCP",
    "PathAliasToolHandler",
    "create_server",
    "run_server",
    "main",
]
