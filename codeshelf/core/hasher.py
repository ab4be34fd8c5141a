"""Identifier hashing — web-safe, typed fingerprints of content and names.

An identifier is a single type-tag character followed by the unpadded,
URL-safe base64 encoding of a 16-byte digest::

    P<22 base64url chars>

Digests are non-cryptographic fingerprints. They are stable and
collision-resistant for honest inputs only and must never gate access.
The algorithm sits behind ``HashProvider`` so it can be strengthened
without touching callers.
"""

from __future__ import annotations

import base64
import hashlib
from typing import Protocol

from codeshelf.models.identifiers import (
    DeployId,
    DirId,
    ProgramId,
    ProjectId,
    ShareId,
)

DEPLOY_SALT = b"DEPLOY_ID"
SHARE_SALT = b"SHARE_ID"

DIGEST_SIZE = 16


class HashContext(Protocol):
    """Incremental hash context (the hashlib object interface)."""

    def update(self, data: bytes, /) -> None: ...

    def digest(self) -> bytes: ...


class HashProvider(Protocol):
    """Factory for incremental hash contexts producing 16-byte digests."""

    @property
    def name(self) -> str: ...

    def new(self) -> HashContext: ...


class Md5Provider:
    """MD5 fingerprints. Matches every identifier already on disk."""

    name = "md5"

    def new(self) -> HashContext:
        return hashlib.md5(usedforsecurity=False)


class _TruncatedSha256:
    def __init__(self) -> None:
        self._ctx = hashlib.sha256()

    def update(self, data: bytes, /) -> None:
        self._ctx.update(data)

    def digest(self) -> bytes:
        return self._ctx.digest()[:DIGEST_SIZE]


class Sha256Provider:
    """SHA-256 truncated to 16 bytes, keeping identifier length unchanged."""

    name = "sha256"

    def new(self) -> HashContext:
        return _TruncatedSha256()


_PROVIDERS: dict[str, HashProvider] = {
    "md5": Md5Provider(),
    "sha256": Sha256Provider(),
}

_default_provider: HashProvider = _PROVIDERS["md5"]


def get_provider(name: str) -> HashProvider:
    """Look up a registered hash provider by name."""
    try:
        return _PROVIDERS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown hash algorithm {name!r}; "
            f"expected one of {sorted(_PROVIDERS)}"
        ) from None


def set_default_provider(provider: HashProvider | str) -> None:
    """Replace the provider used when callers do not pass one."""
    global _default_provider
    if isinstance(provider, str):
        provider = get_provider(provider)
    _default_provider = provider


def default_provider() -> HashProvider:
    return _default_provider


def web_safe_b64(digest: bytes) -> str:
    """Base64-encode ``digest`` for use in paths and URLs.

    ``+`` becomes ``-``, ``/`` becomes ``_`` and ``=`` padding is dropped.
    """
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def digest_bytes(data: bytes, provider: HashProvider | None = None) -> bytes:
    """Return the raw digest of ``data``."""
    ctx = (provider or _default_provider).new()
    ctx.update(data)
    return ctx.digest()


def hash_to_id(tag: str, data: bytes, provider: HashProvider | None = None) -> str:
    """Hash ``data`` into ``<tag><web-safe digest>``."""
    if len(tag) != 1:
        raise ValueError(f"Identifier tag must be one character, got {tag!r}")
    return tag + web_safe_b64(digest_bytes(data, provider))


# ---------------------------------------------------------------------------
# Family derivations
# ---------------------------------------------------------------------------


def source_to_program_id(
    source: bytes, provider: HashProvider | None = None
) -> ProgramId:
    """Content-address submitted source bytes."""
    return ProgramId(text=hash_to_id(ProgramId.TAG, source, provider))


def source_to_deploy_id(
    source: bytes,
    nonce: str = "",
    provider: HashProvider | None = None,
) -> DeployId:
    """Derive a deploy handle from salted source bytes.

    The fixed salt keeps deploy ids disjoint from program ids for the same
    source. ``nonce`` distinguishes separate deploy actions of identical
    content; the same ``nonce`` and ``source`` always give the same id.
    """
    payload = DEPLOY_SALT + nonce.encode("utf-8") + source
    return DeployId(text=hash_to_id(DeployId.TAG, payload, provider))


def name_to_project_id(name: str, provider: HashProvider | None = None) -> ProjectId:
    """Address a project by its name, not its content."""
    return ProjectId(text=hash_to_id(ProjectId.TAG, name.encode("utf-8"), provider))


def name_to_dir_id(name: str, provider: HashProvider | None = None) -> DirId:
    """Address a user folder by its display name."""
    return DirId(text=hash_to_id(DirId.TAG, name.encode("utf-8"), provider))


def path_to_share_id(path: str, provider: HashProvider | None = None) -> ShareId:
    """Derive a share handle for a user folder path."""
    payload = SHARE_SALT + path.encode("utf-8")
    return ShareId(text=hash_to_id(ShareId.TAG, payload, provider))
