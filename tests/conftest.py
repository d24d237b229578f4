"""Shared fixtures and helpers for tests."""

import logging
import textwrap
from collections.abc import Iterator, Mapping
from pathlib import Path

import pytest
from tree_sitter import Parser

from mediator_navigator.core.ast import create_parser

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# WorkspaceBuilder: throwaway C# solutions on disk
# ---------------------------------------------------------------------------


class WorkspaceBuilder:
    """Write ``path -> contents`` entries under a temporary workspace root."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def write(self, files: Mapping[str, str]) -> None:
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")

    def path(self, relative: str = "") -> Path:
        return self.root / relative if relative else self.root

    def solution(self, name: str, projects: list[tuple[str, str]]) -> Path:
        """Write a classic ``.sln`` listing ``(project_name, relative_csproj)`` in order."""
        lines = ["Microsoft Visual Studio Solution File, Format Version 12.00"]
        for index, (project_name, relative) in enumerate(projects):
            guid = f"{{00000000-0000-0000-0000-{index:012d}}}"
            lines.append(
                f'Project("{{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}}") = "{project_name}", "{relative}", "{guid}"'
            )
            lines.append("EndProject")
        lines.append("Global")
        lines.append("EndGlobal")
        path = self.root / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def csharp_parser() -> Parser:
    """Return a tree-sitter parser for C#."""
    return create_parser()


@pytest.fixture
def workspace_builder(tmp_path: Path) -> WorkspaceBuilder:
    return WorkspaceBuilder(tmp_path / "workspace")


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo CLI logging setup so caplog sees package records again."""
    yield
    logger = logging.getLogger("mediator_navigator")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
