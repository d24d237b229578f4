import logging
from collections.abc import Iterable
from pathlib import Path

from mediator_navigator.config import NavigatorSettings
from mediator_navigator.core.extractor import extract_request_type
from mediator_navigator.core.ports.workspace import WorkspaceLike
from mediator_navigator.core.resolver import resolve_handler
from mediator_navigator.core.walk import iter_source_files, read_source_text
from mediator_navigator.models import (
    Found,
    HandlerNotFound,
    ParseOrIOFailure,
    QueryResult,
    RequestTypeNotDetermined,
    SourceFile,
)

logger = logging.getLogger(__name__)


def locate_handler(
    active_file_path: str,
    active_file_text: str,
    workspace_files: Iterable[SourceFile],
    settings: NavigatorSettings | None = None,
) -> QueryResult:
    """Find the handler for the request type declared in the active file.

    Never raises: every outcome, including unexpected faults, is a ``QueryResult``.
    """
    settings = settings or NavigatorSettings()
    try:
        try:
            request_type = extract_request_type(active_file_text, settings)
        except ValueError as exc:
            logger.warning("Unable to parse %s: %s", active_file_path, exc)
            return ParseOrIOFailure(message=f"Unable to parse {active_file_path}: {exc}")

        if not request_type:
            logger.info("No %s declaration in %s", settings.request_interface, active_file_path)
            return RequestTypeNotDetermined()

        location = resolve_handler(request_type, workspace_files, settings)
        if location is None:
            return HandlerNotFound(request_type=request_type)
        return Found(request_type=request_type, location=location)
    except Exception as exc:
        logger.exception("Handler lookup failed for %s", active_file_path)
        return ParseOrIOFailure(message=f"Error: {exc}")


def locate_handler_in_workspace(
    active_file: Path,
    workspace: WorkspaceLike,
    settings: NavigatorSettings | None = None,
) -> QueryResult:
    settings = settings or NavigatorSettings()
    try:
        text = read_source_text(active_file)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Unable to read %s: %s", active_file, exc)
        return ParseOrIOFailure(message=f"Unable to read {active_file}: {exc}")
    return locate_handler(str(active_file), text, iter_source_files(workspace, settings), settings)
