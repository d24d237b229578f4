from collections.abc import Sequence
from pathlib import Path
from typing import Protocol


class WorkspaceItem(Protocol):
    """A named node in a project tree: a leaf file, a container, or both."""

    @property
    def name(self) -> str: ...

    @property
    def path(self) -> Path | None: ...

    @property
    def items(self) -> Sequence["WorkspaceItem"]: ...


class WorkspaceLike(Protocol):
    @property
    def projects(self) -> Sequence[WorkspaceItem]: ...
