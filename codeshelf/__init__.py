"""Codeshelf: content-addressed, sharded storage for a hosted code-execution service.

Turns submitted sources and names into typed, URL-safe identifiers, lays
them out under three-character shard directories per build mode, and keeps
link files, per-user project trees and build-staleness checksums on top of
that layout.
"""

__version__ = "0.1.0"
__description__ = "Content-addressed, sharded storage for hosted programs"

from codeshelf.core.artifact_store import ProgramStore
from codeshelf.core.links import LinkStore
from codeshelf.core.paths import ArtifactFamily, PathResolver
from codeshelf.core.project_tree import ProjectTree

__all__ = [
    "ArtifactFamily",
    "LinkStore",
    "PathResolver",
    "ProgramStore",
    "ProjectTree",
    "__version__",
]
