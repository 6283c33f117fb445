"""Tests for the MCP tool handler."""

import asyncio
import json

import pytest

from pathalias.errors import ConfigError
from pathalias.mcp.server import TOOLS, PathAliasToolHandler


@pytest.fixture
def workspace(tmp_path):
    (tmp_path / "tsconfig.json").write_text(
        json.dumps(
            {
                "compilerOptions": {
                    "paths": {"@app/*": ["./src/app/*"], "node": ["@types/node"]},
                }
            }
        )
    )
    return tmp_path


class TestToolDefinitions:
    """Tests for the tool list."""

    def test_tool_names(self):
        assert [t["name"] for t in TOOLS] == ["pathalias_resolve", "pathalias_mappings"]

    def test_resolve_requires_specifier(self):
        assert TOOLS[0]["inputSchema"]["required"] == ["specifier"]


class TestPathAliasToolHandler:
    """Tests for PathAliasToolHandler."""

    def test_resolve(self, workspace):
        handler = PathAliasToolHandler(str(workspace))
        result = asyncio.run(handler.handle_resolve({"specifier": "@app/x"}))
        assert result.startswith("@app/x -> ")
        assert result.endswith("alias: @app/*")

    def test_resolve_passthrough(self, workspace):
        handler = PathAliasToolHandler(str(workspace))
        result = asyncio.run(handler.handle_resolve({"specifier": "react"}))
        assert "passthrough" in result

    def test_resolve_with_config_file(self, workspace):
        handler = PathAliasToolHandler("/nonexistent")
        result = asyncio.run(
            handler.handle_resolve(
                {"specifier": "@app/x", "path": str(workspace / "tsconfig.json")}
            )
        )
        assert "alias: @app/*" in result

    def test_mappings(self, workspace):
        handler = PathAliasToolHandler(str(workspace))
        result = asyncio.run(handler.handle_mappings({}))
        assert "`@app/*` -> `./src/app/*`" in result
        assert "`node` -> `@types/node` (typings, inactive)" in result

    def test_mappings_empty(self, tmp_path):
        (tmp_path / "tsconfig.json").write_text("{}")
        handler = PathAliasToolHandler(str(tmp_path))
        assert "No aliases configured." in asyncio.run(handler.handle_mappings({}))

    def test_missing_config(self, tmp_path):
        handler = PathAliasToolHandler(str(tmp_path))
        with pytest.raises(ConfigError):
            asyncio.run(handler.handle_mappings({"path": str(tmp_path / "none.json")}))
