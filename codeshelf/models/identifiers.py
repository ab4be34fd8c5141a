"""Typed identifiers and namespace values — all Pydantic v2, all frozen.

Every identifier family is its own model, so a ``DeployId`` never compares
equal to (or type-checks as) a ``ProgramId`` even when the text matches.
"""

from __future__ import annotations

import re
from typing import ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

_ID_BODY = re.compile(r"^[A-Za-z0-9_-]+$")


class InvalidIdentifierError(ValueError):
    """Raised when text cannot be used as an identifier, mode or user id."""


def _check_path_component(value: str, what: str) -> str:
    if not value:
        raise ValueError(f"{what} must be non-empty")
    if "/" in value or "\\" in value or "\x00" in value:
        raise ValueError(f"{what} must not contain path separators: {value!r}")
    if value in (".", ".."):
        raise ValueError(f"{what} must not be {value!r}")
    return value


class BuildMode(BaseModel):
    """Namespace tag selecting a root directory tree (e.g. a language variant)."""

    model_config = ConfigDict(frozen=True)

    name: str

    @field_validator("name")
    @classmethod
    def _valid_component(cls, v: str) -> str:
        return _check_path_component(v, "Build mode")

    def __str__(self) -> str:
        return self.name


class UserId(BaseModel):
    """Externally-owned user handle. Only used to root a project tree."""

    model_config = ConfigDict(frozen=True)

    value: str

    @field_validator("value")
    @classmethod
    def _valid_component(cls, v: str) -> str:
        return _check_path_component(v, "User id")

    def __str__(self) -> str:
        return self.value


class Identifier(BaseModel):
    """``<tag><base64url digest>`` text, validated against the family tag."""

    model_config = ConfigDict(frozen=True)

    TAG: ClassVar[str] = ""
    # Tags accepted when reading ids minted before a tag change.
    ACCEPTED_TAGS: ClassVar[tuple[str, ...]] = ()

    text: str

    @field_validator("text")
    @classmethod
    def _valid_text(cls, v: str) -> str:
        tags = (cls.TAG, *cls.ACCEPTED_TAGS)
        if len(v) < 3:
            raise ValueError(f"Identifier too short: {v!r}")
        if v[0] not in tags:
            raise ValueError(
                f"{cls.__name__} must start with one of {tags}, got {v!r}"
            )
        if not _ID_BODY.match(v[1:]):
            raise ValueError(f"Identifier is not URL-safe base64: {v!r}")
        return v

    @classmethod
    def parse(cls: type[IdT], text: str) -> IdT:
        """Build an identifier from raw text, raising ``InvalidIdentifierError``."""
        try:
            return cls(text=text)
        except ValidationError as exc:
            raise InvalidIdentifierError(
                f"Invalid {cls.__name__}: {text!r}"
            ) from exc

    def __str__(self) -> str:
        return self.text


IdT = TypeVar("IdT", bound=Identifier)


class ProgramId(Identifier):
    """Content address of submitted source."""

    TAG: ClassVar[str] = "P"


class DeployId(Identifier):
    """Public deploy handle linking to a ProgramId."""

    TAG: ClassVar[str] = "L"
    ACCEPTED_TAGS: ClassVar[tuple[str, ...]] = ("D",)


class ProjectId(Identifier):
    """Name address of a user project."""

    TAG: ClassVar[str] = "S"


class DirId(Identifier):
    """Name address of a user folder."""

    TAG: ClassVar[str] = "D"


class ShareId(Identifier):
    """Public share handle linking to a user folder."""

    TAG: ClassVar[str] = "H"
