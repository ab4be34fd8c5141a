"""Shared test fixtures for Codeshelf."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from codeshelf.core.artifact_store import ProgramStore
from codeshelf.core.hasher import set_default_provider
from codeshelf.core.links import LinkStore
from codeshelf.core.paths import PathResolver
from codeshelf.core.project_tree import ProjectTree
from codeshelf.models.identifiers import BuildMode, UserId


@pytest.fixture(autouse=True)
def _md5_default():
    """Every test starts (and ends) with the MD5 default provider."""
    set_default_provider("md5")
    yield
    set_default_provider("md5")


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Provide a temporary store root."""
    return tmp_path / "data"


@pytest.fixture
def resolver(data_root: Path) -> PathResolver:
    return PathResolver(data_root)


@pytest.fixture
def mode() -> BuildMode:
    return BuildMode(name="codeworld")


@pytest.fixture
def user() -> UserId:
    return UserId(value="user-42")


@pytest.fixture
def link_store(resolver: PathResolver) -> LinkStore:
    return LinkStore(resolver)


@pytest.fixture
def project_tree(resolver: PathResolver) -> ProjectTree:
    return ProjectTree(resolver)


@pytest.fixture
def program_store(resolver: PathResolver) -> ProgramStore:
    return ProgramStore(resolver)


@pytest.fixture
def write_project(
    project_tree: ProjectTree, mode: BuildMode, user: UserId
) -> Callable[..., Path]:
    """Factory fixture: write a project document the way the editor does."""

    def _factory(name: str, rel_path: str = "", **fields: Any) -> Path:
        path = project_tree.ensure_project_parent(
            mode, user, rel_path, project_tree.project_id(name)
        )
        doc: dict[str, Any] = {"name": name, "source": "main = drawingOf(blank)"}
        doc.update(fields)
        path.write_text(json.dumps(doc), encoding="utf-8")
        return path

    return _factory
