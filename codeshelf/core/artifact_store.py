"""Content-addressed program store and deploy links.

Storage layout: {data_root}/{mode}/user/{id[0:3]}/{id}.hs
Sources are immutable once stored: the id is derived from the bytes, so a
second write of the same source is a no-op.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

from codeshelf.core.fsops import (
    atomic_write,
    ensure_dir,
    remove_dir_if_exists,
    remove_file_if_exists,
)
from codeshelf.core.hasher import HashProvider, source_to_deploy_id, source_to_program_id
from codeshelf.core.links import LinkStore
from codeshelf.core.paths import PathResolver
from codeshelf.models.identifiers import BuildMode, DeployId, ProgramId

logger = logging.getLogger(__name__)


class ArtifactIntegrityError(RuntimeError):
    """Raised when a stored source's hash does not match its address."""


class ProgramStore:
    """Stores submitted sources under their content address.

    Parameters
    ----------
    resolver:
        Path resolver carrying the data root.
    provider:
        Hash provider for derived ids. ``None`` uses the default.
    """

    def __init__(self, resolver: PathResolver, provider: HashProvider | None = None) -> None:
        self._resolver = resolver
        self._provider = provider
        self._links = LinkStore(resolver)

    @property
    def links(self) -> LinkStore:
        return self._links

    # ------------------------------------------------------------------
    # Store
    # ------------------------------------------------------------------

    def store_source(self, mode: BuildMode, source: bytes) -> ProgramId:
        """Store ``source`` and return its ProgramId.

        If the source already exists, verifies integrity instead of
        rewriting it.
        """
        program_id = source_to_program_id(source, self._provider)
        path = self._resolver.source_file(mode, program_id)

        if path.exists():
            if not self.verify(mode, program_id):
                raise ArtifactIntegrityError(
                    f"Existing source at {program_id} failed integrity check"
                )
        else:
            ensure_dir(path.parent)
            atomic_write(path, source)
            logger.debug("Stored %d bytes as %s", len(source), program_id)

        return program_id

    # ------------------------------------------------------------------
    # Retrieve
    # ------------------------------------------------------------------

    def read_source(self, mode: BuildMode, program_id: ProgramId) -> bytes:
        path = self._resolver.source_file(mode, program_id)
        if not path.exists():
            raise FileNotFoundError(f"Source not found: {program_id}")
        return path.read_bytes()

    def exists(self, mode: BuildMode, program_id: ProgramId) -> bool:
        return self._resolver.source_file(mode, program_id).exists()

    def verify(self, mode: BuildMode, program_id: ProgramId) -> bool:
        """Re-hash stored source and compare against its ProgramId."""
        path = self._resolver.source_file(mode, program_id)
        if not path.exists():
            return False
        return source_to_program_id(path.read_bytes(), self._provider) == program_id

    # ------------------------------------------------------------------
    # Deploy
    # ------------------------------------------------------------------

    def deploy(
        self, mode: BuildMode, source: bytes, nonce: str | None = None
    ) -> tuple[DeployId, ProgramId]:
        """Store ``source`` and publish a fresh deploy handle for it.

        Every call without ``nonce`` yields a new DeployId. Passing the same
        ``nonce`` for the same source reproduces the same DeployId.
        """
        program_id = self.store_source(mode, source)
        deploy_id = source_to_deploy_id(
            source, uuid.uuid4().hex if nonce is None else nonce, self._provider
        )
        self._links.write_deploy_link(mode, deploy_id, program_id)
        logger.info("Deployed %s as %s", program_id, deploy_id)
        return deploy_id, program_id

    def resolve_deploy(self, mode: BuildMode, deploy_id: DeployId) -> ProgramId:
        return self._links.resolve_deploy_id(mode, deploy_id)

    # ------------------------------------------------------------------
    # Build outputs
    # ------------------------------------------------------------------

    def clear_build(self, mode: BuildMode, program_id: ProgramId) -> None:
        """Remove every compiler output for ``program_id``. Missing files are fine."""
        for path in self._resolver.build_outputs(mode, program_id):
            remove_file_if_exists(path)
        target = self._resolver.target_file(mode, program_id)
        remove_dir_if_exists(target.parent / f"{program_id}.jsexe")

    def build_exists(self, mode: BuildMode, program_id: ProgramId) -> bool:
        return self._resolver.target_file(mode, program_id).exists()

    def source_path(self, mode: BuildMode, program_id: ProgramId) -> Path:
        return self._resolver.source_file(mode, program_id)
