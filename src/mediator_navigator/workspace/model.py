from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ProjectItem:
    name: str
    path: Path | None = None
    items: tuple["ProjectItem", ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Project:
    name: str
    path: Path | None = None
    items: tuple[ProjectItem, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Workspace:
    root: Path
    projects: tuple[Project, ...] = field(default_factory=tuple)
