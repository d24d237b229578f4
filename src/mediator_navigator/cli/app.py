from typing import Annotated

import typer

from mediator_navigator.cli.locate import declarations, find_handler, locate, request_type
from mediator_navigator.cli.serve import serve_app
from mediator_navigator.log import configure_logging

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

app = typer.Typer(
    name="mediator-navigator",
    help="Mediator Navigator CLI: jump from a C# request to its handler.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def main_callback(
    log_level: Annotated[
        str,
        typer.Option(envvar="MEDIATOR_NAVIGATOR_LOG_LEVEL", help="Logging level (DEBUG, INFO, WARNING, ERROR)."),
    ] = "WARNING",
) -> None:
    if log_level.upper() not in _LOG_LEVELS:
        raise typer.BadParameter(f"must be one of {', '.join(_LOG_LEVELS)}", param_hint="--log-level")
    configure_logging(log_level)


app.command("locate")(locate)
app.command("request-type")(request_type)
app.command("find-handler")(find_handler)
app.command("declarations")(declarations)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
