"""Project document schema.

The editor owns this format; the store only reads ``name`` when listing a
user's projects. Unknown fields are tolerated so editor-side additions do
not hide projects from listings.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class Project(BaseModel):
    """A saved, user-owned project file (``<ProjectId>.cw``)."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str
    source: str = ""
    history: Any = None
