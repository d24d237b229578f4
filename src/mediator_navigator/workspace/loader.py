"""Build a :class:`Workspace` from a solution file or a directory on disk.

Project order follows the solution file when there is one; otherwise project
directories are taken in sorted path order. Inside a project, folders come
before files and both are sorted case-insensitively, which mirrors how
Solution Explorer lists an SDK-style project.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from mediator_navigator.config import NavigatorSettings
from mediator_navigator.workspace.model import Project, ProjectItem, Workspace

logger = logging.getLogger(__name__)

_SOLUTION_SUFFIXES = (".sln", ".slnx")
_PROJECT_SUFFIX = ".csproj"
_SOLUTION_FOLDER_TYPE = "2150E333-8FDC-42A3-9474-1A3956D46DE8"
_PROJECT_LINE = re.compile(
    r'^Project\("\{(?P<type>[^}]+)\}"\)\s*=\s*"(?P<name>[^"]*)"\s*,\s*"(?P<path>[^"]*)"',
    re.MULTILINE,
)


class WorkspaceError(ValueError):
    """Raised when a workspace root cannot be turned into projects."""


def _is_excluded(directory: Path, settings: NavigatorSettings) -> bool:
    return directory.name.startswith(".") or directory.name in settings.excluded_dirs


def _owns_project(directory: Path) -> bool:
    return any(child.suffix.lower() == _PROJECT_SUFFIX for child in directory.iterdir() if child.is_file())


def _sort_key(path: Path) -> tuple[bool, str]:
    return (not path.is_dir(), path.name.lower())


def _build_items(directory: Path, settings: NavigatorSettings) -> tuple[ProjectItem, ...]:
    items: list[ProjectItem] = []
    for entry in sorted(directory.iterdir(), key=_sort_key):
        if entry.is_dir():
            if _is_excluded(entry, settings) or _owns_project(entry):
                continue
            items.append(ProjectItem(name=entry.name, items=_build_items(entry, settings)))
        elif entry.is_file():
            items.append(ProjectItem(name=entry.name, path=entry))
    return tuple(items)


def build_project(name: str, project_file: Path | None, directory: Path, settings: NavigatorSettings) -> Project:
    if not directory.is_dir():
        logger.warning("Project %s has no directory at %s", name, directory)
        return Project(name=name, path=project_file)
    return Project(name=name, path=project_file, items=_build_items(directory, settings))


def _find_project_files(directory: Path, settings: NavigatorSettings) -> list[Path]:
    found: list[Path] = []
    for entry in directory.iterdir():
        if entry.is_dir():
            if not _is_excluded(entry, settings):
                found.extend(_find_project_files(entry, settings))
        elif entry.suffix.lower() == _PROJECT_SUFFIX:
            found.append(entry)
    return found


def parse_solution(solution: Path) -> list[tuple[str, Path]]:
    """Return ``(name, project_file)`` pairs in solution order, C# projects only."""
    try:
        text = solution.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise WorkspaceError(f"Unable to read solution {solution}: {exc}") from exc

    projects: list[tuple[str, Path]] = []
    if solution.suffix.lower() == ".slnx":
        try:
            root = ET.fromstring(text)
        except ET.ParseError as exc:
            raise WorkspaceError(f"Malformed solution {solution}: {exc}") from exc
        for element in root.iter("Project"):
            relative = element.get("Path", "").replace("\\", "/")
            if relative.lower().endswith(_PROJECT_SUFFIX):
                projects.append((Path(relative).stem, solution.parent / relative))
        return projects

    for match in _PROJECT_LINE.finditer(text):
        if match.group("type").upper() == _SOLUTION_FOLDER_TYPE:
            continue
        relative = match.group("path").replace("\\", "/")
        if not relative.lower().endswith(_PROJECT_SUFFIX):
            logger.debug("Ignoring non C# project %s in %s", relative, solution)
            continue
        projects.append((match.group("name"), solution.parent / relative))
    return projects


def load_solution(solution: Path, settings: NavigatorSettings | None = None) -> Workspace:
    settings = settings or NavigatorSettings()
    projects = tuple(
        build_project(name, project_file, project_file.parent, settings)
        for name, project_file in parse_solution(solution)
    )
    logger.info("Loaded %d project(s) from %s", len(projects), solution)
    return Workspace(root=solution.parent, projects=projects)


def _holds(directory: Path, suffixes: tuple[str, ...]) -> bool:
    try:
        return any(entry.is_file() and entry.suffix.lower() in suffixes for entry in directory.iterdir())
    except OSError:
        return False


def find_workspace_root(active_file: Path) -> Path:
    """Nearest ancestor holding a solution, else one holding a project file, else the file's folder."""
    start = active_file.resolve().parent
    ancestors = [start, *start.parents]
    for suffixes in (_SOLUTION_SUFFIXES, (_PROJECT_SUFFIX,)):
        for directory in ancestors:
            if _holds(directory, suffixes):
                logger.debug("Using %s as workspace root for %s", directory, active_file)
                return directory
    return start


def load_workspace(root: str | Path, settings: NavigatorSettings | None = None) -> Workspace:
    settings = settings or NavigatorSettings()
    root_path = Path(root)
    if not root_path.exists():
        raise WorkspaceError(f"Workspace not found: {root_path}")

    if root_path.is_file():
        if root_path.suffix.lower() not in _SOLUTION_SUFFIXES:
            raise WorkspaceError(f"Unsupported workspace file: {root_path}")
        return load_solution(root_path, settings)

    solutions = sorted(
        entry for entry in root_path.iterdir() if entry.is_file() and entry.suffix.lower() in _SOLUTION_SUFFIXES
    )
    if solutions:
        return load_solution(solutions[0], settings)

    project_files = sorted(_find_project_files(root_path, settings))
    if project_files:
        projects = tuple(build_project(pf.stem, pf, pf.parent, settings) for pf in project_files)
    else:
        projects = (build_project(root_path.resolve().name, None, root_path, settings),)
    logger.info("Loaded %d project(s) from %s", len(projects), root_path)
    return Workspace(root=root_path, projects=projects)
