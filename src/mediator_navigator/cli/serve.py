import typer
from rich.console import Console

serve_app = typer.Typer(help="Start servers.")
console = Console(stderr=True)


@serve_app.command("mcp")
def mcp(
    transport: str = "stdio",
) -> None:
    """Start the MCP server."""
    from mediator_navigator.config import NavigatorSettings
    from mediator_navigator.mcp.server import create_mcp_server

    server = create_mcp_server(NavigatorSettings.from_env())
    console.print(f"[green]Starting MCP server (transport: {transport})[/green]")
    server.run(transport=transport)  # type: ignore[arg-type]
