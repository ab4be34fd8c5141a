"""Per-user project trees.

Projects and folders are addressed by hashing their *names*, so a project
keeps its location while its content changes. A user's tree looks like::

    {projects_root}/{user}/{rel path}/
        Sab/
            Sab....cw           project file (editor-owned JSON)
        Dxy/
            Dxy.../
                dir.info        folder display name, raw UTF-8
                ...             nested projects and folders

Listing projects is lenient: entries that vanish mid-scan or fail to decode
are skipped. Listing folders is strict: a folder without a marker is an
error.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from codeshelf.core.fsops import (
    atomic_write,
    ensure_dir,
    remove_dir_if_exists,
    remove_file_if_exists,
)
from codeshelf.core.hasher import HashProvider, name_to_dir_id, name_to_project_id
from codeshelf.core.paths import DIR_MARKER, PathResolver
from codeshelf.models.identifiers import BuildMode, DirId, ProjectId, UserId
from codeshelf.models.project import Project

logger = logging.getLogger(__name__)

PROJECT_SHARD_PREFIX = ProjectId.TAG
DIR_SHARD_PREFIX = DirId.TAG


def _shard_entries(directory: Path, prefix: str) -> list[Path]:
    """Entries of every shard directory in ``directory`` starting with ``prefix``."""
    entries: list[Path] = []
    for shard_dir in sorted(Path(directory).iterdir()):
        if shard_dir.name.startswith(prefix) and shard_dir.is_dir():
            entries.extend(sorted(shard_dir.iterdir()))
    return entries


def read_project(path: Path) -> Project | None:
    """Decode a project file, or ``None`` if it is absent or malformed."""
    try:
        raw = Path(path).read_bytes()
    except (FileNotFoundError, IsADirectoryError):
        return None
    try:
        return Project.model_validate_json(raw)
    except ValidationError as exc:
        logger.warning(
            "Skipping undecodable project file %s (%d errors)", path, exc.error_count()
        )
        return None


def list_project_names(directory: Path) -> list[str]:
    """Display names of the projects directly inside ``directory``."""
    names: list[str] = []
    for candidate in _shard_entries(directory, PROJECT_SHARD_PREFIX):
        project = read_project(candidate)
        if project is not None:
            names.append(project.name)
    return names


def list_dir_names(directory: Path) -> list[str]:
    """Display names of the folders directly inside ``directory``.

    Raises ``FileNotFoundError`` if a folder has no ``dir.info`` marker.
    """
    return [
        (folder / DIR_MARKER).read_bytes().decode("utf-8")
        for folder in _shard_entries(directory, DIR_SHARD_PREFIX)
    ]


class ProjectTree:
    """Creates, locates and lists projects and folders in users' trees.

    Parameters
    ----------
    resolver:
        Path resolver carrying the data root.
    provider:
        Hash provider for name-derived ids. ``None`` uses the default.
    """

    def __init__(self, resolver: PathResolver, provider: HashProvider | None = None) -> None:
        self._resolver = resolver
        self._provider = provider

    # ------------------------------------------------------------------
    # Directory creation
    # ------------------------------------------------------------------

    def ensure_user_root(self, mode: BuildMode, user: UserId) -> Path:
        return ensure_dir(self._resolver.user_project_dir(mode, user))

    def ensure_subdir(
        self,
        mode: BuildMode,
        user: UserId,
        rel_path: str | Path,
        recursive: bool = True,
    ) -> Path:
        """Create a directory inside the user's tree, creating the root first."""
        self.ensure_user_root(mode, user)
        return ensure_dir(self._resolver.user_path(mode, user, rel_path), recursive=recursive)

    def ensure_user_base_dir(
        self, mode: BuildMode, user: UserId, rel_file_path: str | Path
    ) -> Path:
        """Create the parent directory of a user-relative file path."""
        self.ensure_user_root(mode, user)
        target = self._resolver.user_path(mode, user, rel_file_path)
        return ensure_dir(target.parent, recursive=False)

    def ensure_project_parent(
        self,
        mode: BuildMode,
        user: UserId,
        rel_path: str | Path,
        project_id: ProjectId,
    ) -> Path:
        """Create the shard directory a project file will be written into.

        ``rel_path`` itself must already exist.
        """
        self.ensure_user_root(mode, user)
        path = self._resolver.project_file(mode, user, rel_path, project_id)
        ensure_dir(path.parent, recursive=False)
        return path

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def project_id(self, name: str) -> ProjectId:
        return name_to_project_id(name, self._provider)

    def project_path(
        self, mode: BuildMode, user: UserId, rel_path: str | Path, name: str
    ) -> Path:
        return self._resolver.project_file(mode, user, rel_path, self.project_id(name))

    def delete_project(
        self, mode: BuildMode, user: UserId, rel_path: str | Path, name: str
    ) -> None:
        remove_file_if_exists(self.project_path(mode, user, rel_path, name))

    def list_projects(
        self, mode: BuildMode, user: UserId, rel_path: str | Path = ""
    ) -> list[str]:
        return list_project_names(self._resolver.user_path(mode, user, rel_path))

    # ------------------------------------------------------------------
    # Folders
    # ------------------------------------------------------------------

    def dir_id(self, name: str) -> DirId:
        return name_to_dir_id(name, self._provider)

    def create_dir(
        self, mode: BuildMode, user: UserId, rel_path: str | Path, name: str
    ) -> DirId:
        """Create a named folder and write its ``dir.info`` marker."""
        dir_id = self.dir_id(name)
        self.ensure_user_root(mode, user)
        folder = ensure_dir(self._resolver.dir_path(mode, user, rel_path, dir_id))
        atomic_write(folder / DIR_MARKER, name.encode("utf-8"))
        logger.debug("Created folder %r (%s) for user %s", name, dir_id, user)
        return dir_id

    def delete_dir(
        self, mode: BuildMode, user: UserId, rel_path: str | Path, name: str
    ) -> None:
        """Remove a folder and everything inside it."""
        remove_dir_if_exists(
            self._resolver.dir_path(mode, user, rel_path, self.dir_id(name))
        )

    def list_dirs(
        self, mode: BuildMode, user: UserId, rel_path: str | Path = ""
    ) -> list[str]:
        return list_dir_names(self._resolver.user_path(mode, user, rel_path))
