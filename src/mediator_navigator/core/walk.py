import logging
from collections.abc import Iterator
from pathlib import Path

from mediator_navigator.config import NavigatorSettings
from mediator_navigator.core.languages import is_source_file
from mediator_navigator.core.ports.workspace import WorkspaceItem, WorkspaceLike
from mediator_navigator.models import SourceFile

logger = logging.getLogger(__name__)


def _walk_item(item: WorkspaceItem, extension: str) -> Iterator[WorkspaceItem]:
    # Nested items are visited before the item's own file.
    for child in item.items:
        yield from _walk_item(child, extension)
    if item.path is not None and is_source_file(item.name, extension):
        yield item


def iter_source_items(workspace: WorkspaceLike, extension: str = ".cs") -> Iterator[WorkspaceItem]:
    """Yield source items in scan order: project order, item order, children first."""
    for project in workspace.projects:
        for item in project.items:
            yield from _walk_item(item, extension)


def read_source_text(path: Path) -> str:
    # utf-8-sig drops the BOM Visual Studio writes by default.
    return path.read_text(encoding="utf-8-sig")


def iter_source_files(workspace: WorkspaceLike, settings: NavigatorSettings | None = None) -> Iterator[SourceFile]:
    """Lazily read every source item; unreadable files are logged and skipped."""
    settings = settings or NavigatorSettings()
    for item in iter_source_items(workspace, settings.source_extension):
        if item.path is None:
            continue
        try:
            text = read_source_text(item.path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable file %s: %s", item.path, exc)
            continue
        yield SourceFile(path=str(item.path), text=text)
