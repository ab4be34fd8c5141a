"""Link files — one-hop indirection from a public handle to another identifier.

A link file's whole content is the UTF-8 text of the target identifier.
There is no envelope or version field. Link ids are freshly derived per
action, so the only overwrite that happens in practice rewrites identical
content.
"""

from __future__ import annotations

import logging
from pathlib import Path

from codeshelf.core.fsops import atomic_write, ensure_dir
from codeshelf.core.paths import ArtifactFamily, PathResolver
from codeshelf.models.identifiers import (
    BuildMode,
    DeployId,
    Identifier,
    IdT,
    ProgramId,
    ShareId,
)

logger = logging.getLogger(__name__)


class LinkNotFoundError(FileNotFoundError):
    """Raised when a link file does not exist."""


class LinkStore:
    """Reads and writes link files under the resolver's family roots.

    Parameters
    ----------
    resolver:
        Path resolver carrying the data root.
    """

    def __init__(self, resolver: PathResolver) -> None:
        self._resolver = resolver

    # ------------------------------------------------------------------
    # Generic
    # ------------------------------------------------------------------

    def link_path(
        self, family: ArtifactFamily, mode: BuildMode, link_id: Identifier
    ) -> Path:
        return self._resolver.resolve(family, mode, link_id)

    def write_link(
        self,
        family: ArtifactFamily,
        mode: BuildMode,
        link_id: Identifier,
        target: Identifier | str,
    ) -> Path:
        """Point ``link_id`` at ``target``, creating the shard directory."""
        path = self.link_path(family, mode, link_id)
        ensure_dir(path.parent)
        atomic_write(path, str(target).encode("utf-8"))
        logger.debug("Wrote link %s -> %s", link_id, target)
        return path

    def read_link_text(
        self, family: ArtifactFamily, mode: BuildMode, link_id: Identifier
    ) -> str:
        """Return the raw target text of a link.

        Raises
        ------
        LinkNotFoundError
            If the link file does not exist.
        OSError
            For any other read failure.
        """
        path = self.link_path(family, mode, link_id)
        try:
            data = path.read_bytes()
        except FileNotFoundError as exc:
            raise LinkNotFoundError(f"No link for {link_id} at {path}") from exc
        return data.decode("utf-8")

    def resolve_link(
        self,
        family: ArtifactFamily,
        mode: BuildMode,
        link_id: Identifier,
        target_type: type[IdT],
    ) -> IdT:
        """Read a link and decode its content as ``target_type``."""
        return target_type.parse(self.read_link_text(family, mode, link_id))

    def find_link(
        self,
        family: ArtifactFamily,
        mode: BuildMode,
        link_id: Identifier,
        target_type: type[IdT],
    ) -> IdT | None:
        """Like ``resolve_link`` but returns ``None`` for a missing link."""
        try:
            return self.resolve_link(family, mode, link_id, target_type)
        except LinkNotFoundError:
            return None

    # ------------------------------------------------------------------
    # Deploy links: DeployId -> ProgramId
    # ------------------------------------------------------------------

    def write_deploy_link(
        self, mode: BuildMode, deploy_id: DeployId, program_id: ProgramId
    ) -> Path:
        return self.write_link(ArtifactFamily.DEPLOY, mode, deploy_id, program_id)

    def resolve_deploy_id(self, mode: BuildMode, deploy_id: DeployId) -> ProgramId:
        return self.resolve_link(ArtifactFamily.DEPLOY, mode, deploy_id, ProgramId)

    # ------------------------------------------------------------------
    # Share links: ShareId -> user folder path
    # ------------------------------------------------------------------

    def write_share_link(self, mode: BuildMode, share_id: ShareId, folder: str) -> Path:
        """Point a share handle at a folder path inside the projects root."""
        return self.write_link(ArtifactFamily.SHARE, mode, share_id, folder)

    def resolve_share_link(self, mode: BuildMode, share_id: ShareId) -> str:
        return self.read_link_text(ArtifactFamily.SHARE, mode, share_id)
