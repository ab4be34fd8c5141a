"""Codeshelf data models — all Pydantic v2, all frozen (immutable)."""

from codeshelf.models.identifiers import (
    BuildMode,
    DeployId,
    DirId,
    Identifier,
    InvalidIdentifierError,
    ProgramId,
    ProjectId,
    ShareId,
    UserId,
)
from codeshelf.models.project import Project

__all__ = [
    # namespaces
    "BuildMode",
    "UserId",
    # identifiers
    "Identifier",
    "InvalidIdentifierError",
    "ProgramId",
    "DeployId",
    "ProjectId",
    "DirId",
    "ShareId",
    # documents
    "Project",
]
