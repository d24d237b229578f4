"""FastMCP server exposing mediator-navigator tools."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from mediator_navigator.config import NavigatorSettings
from mediator_navigator.core.extractor import extract_request_type
from mediator_navigator.core.navigate import locate_handler_in_workspace
from mediator_navigator.core.resolver import resolve_handler
from mediator_navigator.core.walk import iter_source_files, read_source_text
from mediator_navigator.models import ParseOrIOFailure
from mediator_navigator.workspace import WorkspaceError, find_workspace_root, load_workspace


def create_mcp_server(settings: NavigatorSettings | None = None) -> FastMCP:
    """Create a FastMCP server that resolves requests against workspaces on disk."""
    settings = settings or NavigatorSettings()

    mcp = FastMCP("mediator-navigator", instructions="Jump from a C# MediatR request to its handler.")

    @mcp.tool()
    async def locate_handler(active_file: str, workspace: str | None = None) -> dict[str, Any]:
        """Find the handler for the request declared in active_file."""
        root = Path(workspace) if workspace else find_workspace_root(Path(active_file))
        try:
            loaded = load_workspace(root, settings)
        except (WorkspaceError, OSError) as exc:
            return ParseOrIOFailure(message=str(exc)).model_dump()
        result = locate_handler_in_workspace(Path(active_file), loaded, settings)
        return result.model_dump()

    @mcp.tool()
    async def request_type(path: str) -> str | None:
        """Return the request type declared in a C# file, if any."""
        try:
            text = read_source_text(Path(path))
        except (OSError, UnicodeDecodeError) as exc:
            raise ToolError(f"Unable to read {path}: {exc}") from exc
        return extract_request_type(text, settings)

    @mcp.tool()
    async def find_handler(request_type: str, workspace: str) -> dict[str, Any] | None:
        """Find the handler for a request type name in a workspace."""
        if not request_type:
            return ParseOrIOFailure(message="request_type must not be empty.").model_dump()
        try:
            loaded = load_workspace(workspace, settings)
        except (WorkspaceError, OSError) as exc:
            return ParseOrIOFailure(message=str(exc)).model_dump()
        location = resolve_handler(request_type, iter_source_files(loaded, settings), settings)
        return location.model_dump() if location else None

    return mcp
