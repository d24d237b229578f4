from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mediator_navigator.config import NavigatorSettings
from mediator_navigator.core.ast import extract_type_declarations
from mediator_navigator.core.extractor import extract_request_type
from mediator_navigator.core.navigate import locate_handler_in_workspace
from mediator_navigator.core.resolver import resolve_handler
from mediator_navigator.core.walk import iter_source_files, read_source_text
from mediator_navigator.models import Found, ParseOrIOFailure
from mediator_navigator.workspace import Workspace, WorkspaceError, load_workspace

console = Console()
err_console = Console(stderr=True)

EXIT_NOT_FOUND = 1
EXIT_FAILURE = 2

WorkspaceOption = Annotated[
    Path,
    typer.Option(
        "--workspace",
        "-w",
        envvar="MEDIATOR_NAVIGATOR_WORKSPACE",
        help="Solution file (.sln/.slnx) or directory to scan.",
    ),
]


def _load(workspace: Path, settings: NavigatorSettings) -> Workspace:
    try:
        return load_workspace(workspace, settings)
    except (WorkspaceError, OSError) as exc:
        err_console.print(f"[red]{escape(str(exc))}[/red]", highlight=False)
        raise typer.Exit(EXIT_FAILURE) from exc


def _read(path: Path) -> str:
    try:
        return read_source_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        err_console.print(f"[red]Unable to read {escape(str(path))}: {escape(str(exc))}[/red]", highlight=False)
        raise typer.Exit(EXIT_FAILURE) from exc


def locate(
    active_file: Annotated[Path, typer.Argument(help="C# file declaring the request type.")],
    workspace: WorkspaceOption = Path("."),
    json_output: Annotated[bool, typer.Option("--json", help="Print the result as JSON.")] = False,
) -> None:
    """Find the handler for the request declared in ACTIVE_FILE."""
    settings = NavigatorSettings.from_env()
    result = locate_handler_in_workspace(active_file, _load(workspace, settings), settings)

    if json_output:
        typer.echo(result.model_dump_json(indent=2))
    elif isinstance(result, Found):
        typer.echo(f"{result.location.file_path}:{result.location.line}")
        console.print(f"[green]Found[/green] handler for {result.request_type}", highlight=False)
    elif isinstance(result, ParseOrIOFailure):
        err_console.print(f"[red]{escape(result.message)}[/red]", highlight=False)
    else:
        console.print(f"[yellow]{result.message}[/yellow]", highlight=False)

    if isinstance(result, ParseOrIOFailure):
        raise typer.Exit(EXIT_FAILURE)
    if not isinstance(result, Found):
        raise typer.Exit(EXIT_NOT_FOUND)


def request_type(
    file: Annotated[Path, typer.Argument(help="C# file to inspect.")],
) -> None:
    """Print the request type declared in FILE."""
    settings = NavigatorSettings.from_env()
    name = extract_request_type(_read(file), settings)
    if name is None:
        message = f"No public {settings.request_interface} declaration in {file}"
        console.print(f"[yellow]{escape(message)}[/yellow]", highlight=False)
        raise typer.Exit(EXIT_NOT_FOUND)
    typer.echo(name)


def find_handler(
    request: Annotated[str, typer.Argument(metavar="REQUEST_TYPE", help="Request type name, as written in source.")],
    workspace: WorkspaceOption = Path("."),
) -> None:
    """Find the handler for REQUEST_TYPE without an active file."""
    if not request.strip():
        err_console.print("[red]REQUEST_TYPE must not be empty.[/red]")
        raise typer.Exit(EXIT_FAILURE)
    settings = NavigatorSettings.from_env()
    location = resolve_handler(request, iter_source_files(_load(workspace, settings), settings), settings)
    if location is None:
        console.print(f"[yellow]No {settings.handler_interface} found for {request}.[/yellow]", highlight=False)
        raise typer.Exit(EXIT_NOT_FOUND)
    typer.echo(f"{location.file_path}:{location.line}")


def declarations(
    file: Annotated[Path, typer.Argument(help="C# file to inspect.")],
) -> None:
    """List the class and record declarations parsed from FILE."""
    found = extract_type_declarations(_read(file))
    table = Table(show_lines=False)
    for header in ("line", "kind", "name", "modifiers", "bases"):
        table.add_column(header)
    for declaration in found:
        table.add_row(
            str(declaration.line),
            declaration.kind,
            declaration.name,
            " ".join(declaration.modifiers),
            escape(", ".join(base.text for base in declaration.base_types)),
        )
    console.print(table)
    console.print(f"({len(found)} declarations)")
