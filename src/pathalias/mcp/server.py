#!/usr/bin/env python3
"""pathalias MCP Server - Exposes alias resolution as MCP tools.

Features:
    - Tool for resolving a specifier against a project's path aliases
    - Tool and resource for listing the compiled mapping table

Usage:
    pathalias-mcp --workspace /my/project
"""

import asyncio
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Sequence

# MCP SDK imports
try:
    from mcp.server import Server
    from mcp.server.stdio import stdio_server
    from mcp.types import Resource, TextContent, Tool

    HAS_MCP = True
except ImportError:
    HAS_MCP = False
    Server = None

from ..config import load_config
from ..mapping import MappingTable, build_mapping_table
from ..resolver import AliasResolver, Rewrite

logger = logging.getLogger(__name__)

# ==============================================================================
# TOOL DEFINITIONS
# ==============================================================================

TOOLS: List[Dict[str, Any]] = [
    {
        "name": "pathalias_resolve",
        "description": """Resolve an import specifier through the project's path aliases (tsconfig "paths").

USE THIS TOOL WHEN:
- An import like '@app/widgets/button' needs to be mapped to a real location
- You need to know which alias rule claims a specifier

RETURNS: The rewritten specifier and the alias rule applied, or 'passthrough' when no alias matches.""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "specifier": {
                    "type": "string",
                    "description": "Import specifier to resolve",
                },
                "path": {
                    "type": "string",
                    "description": "Project directory or configuration file (default: workspace)",
                },
            },
            "required": ["specifier"],
        },
    },
    {
        "name": "pathalias_mappings",
        "description": """List the path alias mappings configured for a project, in the order they are tried.

RETURNS: Base directory and one line per alias -> target rule.""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "path": {
                    "type": "string",
                    "description": "Project directory or configuration file (default: workspace)",
                },
            },
        },
    },
]


class PathAliasToolHandler:
    """Runs pathalias tools against a workspace."""

    def __init__(self, workspace_root: Optional[str] = None):
        self.workspace_root = workspace_root or os.getcwd()

    def _load_table(self, path: Optional[str]) -> MappingTable:
        path = path or self.workspace_root
        if os.path.isfile(path) or path.endswith((".json", ".toml")):
            config = load_config(os.path.dirname(path), path)
        else:
            config = load_config(path)
        return build_mapping_table(config)

    async def handle_resolve(self, arguments: Dict[str, Any]) -> str:
        specifier = arguments["specifier"]
        table = self._load_table(arguments.get("path"))
        action = AliasResolver(table).resolve(specifier)
        if isinstance(action, Rewrite):
            return f"{specifier} -> {action.specifier}\nalias: {action.mapping.alias}"
        return f"{specifier}: passthrough (no alias matches)"

    async def handle_mappings(self, arguments: Dict[str, Any]) -> str:
        table = self._load_table(arguments.get("path"))
        return self.format_table(table)

    @staticmethod
    def format_table(table: MappingTable) -> str:
        lines = [f"# Path aliases (base: {table.base_directory})", ""]
        for m in table.mappings:
            suffix = " (typings, inactive)" if m.is_typing else ""
            lines.append(f"- `{m.alias}` -> `{m.target}`{suffix}")
        if not table.mappings:
            lines.append("No aliases configured.")
        return "\n".join(lines)


# ==============================================================================
# MCP SERVER
# ==============================================================================

def create_server(workspace_root: Optional[str] = None) -> "Server":
    """Create and configure the MCP server."""
    if not HAS_MCP:
        raise ImportError("MCP SDK not installed. Install with: pip install pathalias[mcp]")

    server = Server("pathalias")
    handler = PathAliasToolHandler(workspace_root)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(
                name=tool["name"],
                description=tool["description"],
                inputSchema=tool["inputSchema"],
            )
            for tool in TOOLS
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> Sequence[TextContent]:
        """Execute a tool and return the result."""
        try:
            if name == "pathalias_resolve":
                result = await handler.handle_resolve(arguments)
            elif name == "pathalias_mappings":
                result = await handler.handle_mappings(arguments)
            else:
                result = f"Unknown tool: {name}"

            return [TextContent(type="text", text=result)]

        except Exception as e:
            logger.exception(f"Error executing tool {name}")
            return [TextContent(type="text", text=f"Error: {str(e)}")]

    @server.list_resources()
    async def list_resources() -> list[Resource]:
        return [
            Resource(
                uri="pathalias://mappings",
                name="Path Aliases",
                description="The workspace's compiled alias mappings",
                mimeType="application/json",
            ),
        ]

    @server.read_resource()
    async def read_resource(uri: str) -> str:
        """Read a resource by URI."""
        if uri != "pathalias://mappings":
            return f"Unknown resource: {uri}"

        table = handler._load_table(None)
        return json.dumps(
            {
                "base_directory": table.base_directory,
                "mappings": [
                    {"alias": m.alias, "target": m.target, "typings": m.is_typing}
                    for m in table.mappings
                ],
            },
            indent=2,
        )

    return server


async def run_server(workspace_root: Optional[str] = None):
    """Run the MCP server using stdio transport."""
    server = create_server(workspace_root)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main():
    """Entry point for the MCP server."""
    import argparse

    parser = argparse.ArgumentParser(description="pathalias MCP Server")
    parser.add_argument(
        "--workspace",
        "-w",
        default=os.getcwd(),
        help="Workspace root directory",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    if not HAS_MCP:
        print("Error: MCP SDK not installed. Install with: pip install pathalias[mcp]", file=sys.stderr)
        sys.exit(1)

    asyncio.run(run_server(args.workspace))


if __name__ == "__main__":
    main()
