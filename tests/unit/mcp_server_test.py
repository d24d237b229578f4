"""Tests for the MCP server tool definitions."""

from __future__ import annotations

from typing import Any

import pytest
from fastmcp.exceptions import ToolError

from mediator_navigator.config import NavigatorSettings
from mediator_navigator.mcp.server import create_mcp_server
from tests.conftest import WorkspaceBuilder


def _tool(name: str, settings: NavigatorSettings | None = None) -> Any:
    server = create_mcp_server(settings)
    return server._tool_manager._tools[name].fn  # type: ignore[attr-defined]


@pytest.fixture
def pinged(workspace_builder: WorkspaceBuilder) -> WorkspaceBuilder:
    workspace_builder.write(
        {
            "Ping.cs": "public class Ping : IRequest<string> { }\n",
            "Handlers/PingHandler.cs": "using MediatR;\n\nclass PingHandler : IRequestHandler<Ping, string> { }\n",
        }
    )
    return workspace_builder


class TestMcpServerCreation:
    def test_creates_server(self) -> None:
        server = create_mcp_server()
        assert server is not None
        assert server.name == "mediator-navigator"

    def test_server_has_tools(self) -> None:
        server = create_mcp_server()
        tool_names = {t.name for t in server._tool_manager._tools.values()}
        assert tool_names == {"locate_handler", "request_type", "find_handler"}


class TestLocateHandlerTool:
    @pytest.mark.asyncio
    async def test_found(self, pinged: WorkspaceBuilder) -> None:
        result = await _tool("locate_handler")(str(pinged.path("Ping.cs")), str(pinged.path()))

        assert result == {
            "status": "found",
            "request_type": "Ping",
            "location": {"file_path": str(pinged.path("Handlers/PingHandler.cs")), "line": 3},
        }

    @pytest.mark.asyncio
    async def test_workspace_falls_back_to_active_file_directory(self, pinged: WorkspaceBuilder) -> None:
        result = await _tool("locate_handler")(str(pinged.path("Ping.cs")))

        assert result["status"] == "found"

    @pytest.mark.asyncio
    async def test_missing_workspace_is_failure_payload(self, pinged: WorkspaceBuilder) -> None:
        result = await _tool("locate_handler")(str(pinged.path("Ping.cs")), str(pinged.path("missing")))

        assert result["status"] == "parse_or_io_failure"
        assert "Workspace not found" in result["message"]


    @pytest.mark.asyncio
    async def test_default_workspace_is_enclosing_solution(self, workspace_builder: WorkspaceBuilder) -> None:
        workspace_builder.write(
            {
                "App/App.csproj": "<Project />",
                "App/Requests/Ping.cs": "public class Ping : IRequest<string> { }\n",
                "App/Handlers/PingHandler.cs": "class PingHandler : IRequestHandler<Ping, string> { }\n",
            }
        )
        workspace_builder.solution("App.sln", [("App", "App/App.csproj")])

        result = await _tool("locate_handler")(str(workspace_builder.path("App/Requests/Ping.cs")))

        assert result["status"] == "found"
        assert result["location"] == {
            "file_path": str(workspace_builder.path("App/Handlers/PingHandler.cs").resolve()),
            "line": 1,
        }


class TestRequestTypeTool:
    @pytest.mark.asyncio
    async def test_returns_name(self, pinged: WorkspaceBuilder) -> None:
        assert await _tool("request_type")(str(pinged.path("Ping.cs"))) == "Ping"

    @pytest.mark.asyncio
    async def test_none_without_request(self, pinged: WorkspaceBuilder) -> None:
        assert await _tool("request_type")(str(pinged.path("Handlers/PingHandler.cs"))) is None

    @pytest.mark.asyncio
    async def test_unreadable_file_raises_tool_error(self, pinged: WorkspaceBuilder) -> None:
        with pytest.raises(ToolError, match="Unable to read"):
            await _tool("request_type")(str(pinged.path("Nope.cs")))


class TestFindHandlerTool:
    @pytest.mark.asyncio
    async def test_returns_location(self, pinged: WorkspaceBuilder) -> None:
        result = await _tool("find_handler")("Ping", str(pinged.path()))

        assert result == {"file_path": str(pinged.path("Handlers/PingHandler.cs")), "line": 3}

    @pytest.mark.asyncio
    async def test_unknown_request_returns_none(self, pinged: WorkspaceBuilder) -> None:
        assert await _tool("find_handler")("Pong", str(pinged.path())) is None

    @pytest.mark.asyncio
    async def test_empty_request_is_failure_payload(self, pinged: WorkspaceBuilder) -> None:
        result = await _tool("find_handler")("", str(pinged.path()))

        assert result["status"] == "parse_or_io_failure"

    @pytest.mark.asyncio
    async def test_uses_configured_handler_interface(self, workspace_builder: WorkspaceBuilder) -> None:
        workspace_builder.write({"SaveHandler.cs": "class SaveHandler : ICommandHandler<Save> { }\n"})
        settings = NavigatorSettings(handler_interface="ICommandHandler")

        result = await _tool("find_handler", settings)("Save", str(workspace_builder.path()))

        assert result == {"file_path": str(workspace_builder.path("SaveHandler.cs")), "line": 1}
