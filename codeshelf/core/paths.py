"""Sharded path resolution for every artifact family.

Layout::

    {data_root}/{mode}/{family}/{id[0:3]}/{id}[.ext]
    {data_root}/base/{version}/base.{js,symbs}

The three-character shard (type tag included) bounds the number of entries
in any one directory. Path computation is pure; nothing here touches the
filesystem.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path, PurePosixPath

from codeshelf.models.identifiers import (
    BuildMode,
    DeployId,
    DirId,
    Identifier,
    ProgramId,
    ProjectId,
    ShareId,
    UserId,
)

SHARD_WIDTH = 3

PROJECT_EXT = "cw"
DIR_MARKER = "dir.info"

# Files written by the compiler next to the target, relative to the
# program's base path in the build root.
AUXILIARY_SUFFIXES: tuple[str, ...] = (
    ".js_hi",
    ".js_o",
    ".jsexe/index.html",
    ".jsexe/lib.js",
    ".jsexe/manifest.webapp",
    ".jsexe/out.js",
    ".jsexe/out.stats",
    ".jsexe/rts.js",
    ".jsexe/runmain.js",
)


class ArtifactFamily(str, Enum):
    """Root directory name for each artifact family under a build mode."""

    SOURCE = "user"
    BUILD = "build"
    SHARE = "share"
    PROJECTS = "projects"
    DEPLOY = "deploy"


def shard(identifier: Identifier | str) -> str:
    """Return the shard directory name: the first three characters of the id."""
    return str(identifier)[:SHARD_WIDTH]


def sharded_name(identifier: Identifier | str, ext: str | None = None) -> Path:
    """``{shard}/{id}[.ext]`` relative to any root."""
    text = str(identifier)
    name = f"{text}.{ext}" if ext else text
    return Path(shard(text)) / name


def safe_relative(rel_path: str | Path) -> Path:
    """Validate a user-relative path: no absolute paths, no ``..``."""
    p = PurePosixPath(str(rel_path).replace("\\", "/"))
    if p.is_absolute() or ".." in p.parts:
        raise ValueError(f"Invalid relative path: {rel_path!r}")
    return Path(*p.parts) if p.parts else Path()


class PathResolver:
    """Maps typed identifiers to filesystem paths under an explicit root.

    Parameters
    ----------
    data_root:
        Directory holding one subtree per build mode plus ``base/``.
    """

    def __init__(self, data_root: Path) -> None:
        self._root = Path(data_root)

    @property
    def data_root(self) -> Path:
        return self._root

    # ------------------------------------------------------------------
    # Roots
    # ------------------------------------------------------------------

    def family_root(self, family: ArtifactFamily, mode: BuildMode) -> Path:
        return self._root / mode.name / ArtifactFamily(family).value

    def base_root(self) -> Path:
        return self._root / "base"

    # ------------------------------------------------------------------
    # Generic resolution
    # ------------------------------------------------------------------

    def resolve(
        self,
        family: ArtifactFamily,
        mode: BuildMode,
        identifier: Identifier,
        ext: str | None = None,
    ) -> Path:
        """``family_root / shard(id) / id[.ext]``."""
        return self.family_root(family, mode) / sharded_name(identifier, ext)

    def shard_dir(
        self, family: ArtifactFamily, mode: BuildMode, identifier: Identifier
    ) -> Path:
        return self.family_root(family, mode) / shard(identifier)

    # ------------------------------------------------------------------
    # Program bundle
    # ------------------------------------------------------------------

    def source_file(self, mode: BuildMode, program_id: ProgramId) -> Path:
        return self.resolve(ArtifactFamily.SOURCE, mode, program_id, "hs")

    def source_xml(self, mode: BuildMode, program_id: ProgramId) -> Path:
        return self.resolve(ArtifactFamily.SOURCE, mode, program_id, "xml")

    def target_file(self, mode: BuildMode, program_id: ProgramId) -> Path:
        return self.resolve(ArtifactFamily.BUILD, mode, program_id, "js")

    def result_file(self, mode: BuildMode, program_id: ProgramId) -> Path:
        """Compiler diagnostics for the program."""
        return self.resolve(ArtifactFamily.BUILD, mode, program_id, "err.txt")

    def base_version_file(self, mode: BuildMode, program_id: ProgramId) -> Path:
        """Pin of the base library version the target was linked against."""
        return self.resolve(ArtifactFamily.BUILD, mode, program_id, "basever")

    def auxiliary_files(self, mode: BuildMode, program_id: ProgramId) -> list[Path]:
        base = self.resolve(ArtifactFamily.BUILD, mode, program_id)
        return [base.parent / (base.name + suffix) for suffix in AUXILIARY_SUFFIXES]

    def build_outputs(self, mode: BuildMode, program_id: ProgramId) -> list[Path]:
        """Every build-root file the compiler may produce for ``program_id``."""
        return [
            self.target_file(mode, program_id),
            self.result_file(mode, program_id),
            self.base_version_file(mode, program_id),
            *self.auxiliary_files(mode, program_id),
        ]

    # ------------------------------------------------------------------
    # Base library
    # ------------------------------------------------------------------

    def base_code_file(self, version: str) -> Path:
        return self.base_root() / _version_dir(version) / "base.js"

    def base_symbol_file(self, version: str) -> Path:
        return self.base_root() / _version_dir(version) / "base.symbs"

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------

    def deploy_link(self, mode: BuildMode, deploy_id: DeployId) -> Path:
        return self.resolve(ArtifactFamily.DEPLOY, mode, deploy_id)

    def share_link(self, mode: BuildMode, share_id: ShareId) -> Path:
        return self.resolve(ArtifactFamily.SHARE, mode, share_id)

    # ------------------------------------------------------------------
    # User project trees
    # ------------------------------------------------------------------

    def user_project_dir(self, mode: BuildMode, user: UserId) -> Path:
        return self.family_root(ArtifactFamily.PROJECTS, mode) / user.value

    def user_path(self, mode: BuildMode, user: UserId, rel_path: str | Path = "") -> Path:
        return self.user_project_dir(mode, user) / safe_relative(rel_path)

    def project_file(
        self,
        mode: BuildMode,
        user: UserId,
        rel_path: str | Path,
        project_id: ProjectId,
    ) -> Path:
        return self.user_path(mode, user, rel_path) / sharded_name(project_id, PROJECT_EXT)

    def dir_path(
        self,
        mode: BuildMode,
        user: UserId,
        rel_path: str | Path,
        dir_id: DirId,
    ) -> Path:
        return self.user_path(mode, user, rel_path) / sharded_name(dir_id)

    def dir_marker(
        self,
        mode: BuildMode,
        user: UserId,
        rel_path: str | Path,
        dir_id: DirId,
    ) -> Path:
        return self.dir_path(mode, user, rel_path, dir_id) / DIR_MARKER


def _version_dir(version: str) -> str:
    if not version or "/" in version or "\\" in version or version in (".", ".."):
        raise ValueError(f"Invalid base version: {version!r}")
    return version
