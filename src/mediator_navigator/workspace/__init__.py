from mediator_navigator.workspace.loader import (
    WorkspaceError,
    find_workspace_root,
    load_solution,
    load_workspace,
    parse_solution,
)
from mediator_navigator.workspace.model import Project, ProjectItem, Workspace

__all__ = [
    "Project",
    "ProjectItem",
    "Workspace",
    "WorkspaceError",
    "find_workspace_root",
    "load_solution",
    "load_workspace",
    "parse_solution",
]
