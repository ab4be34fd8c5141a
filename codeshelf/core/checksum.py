"""Whole-subtree checksums for build staleness detection.

The digest folds every regular file under a directory through one
incremental hash context. Files are visited in lexicographic order of their
relative POSIX paths, so the result does not depend on how the filesystem
happens to enumerate entries. Each file is framed as::

    <relative path> NUL <size as 8-byte big-endian> <bytes>

so adding, removing or renaming a file (empty ones included) and moving
bytes across a file boundary all change the digest.

There is no isolation: hashing a tree that is still being written gives an
arbitrary answer. Only checksum quiescent trees.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from codeshelf.core.hasher import HashProvider, default_provider, web_safe_b64

logger = logging.getLogger(__name__)

CHECKSUM_TAG = "F"

_READ_CHUNK = 1 << 16


def list_files_recursive(path: Path) -> list[Path]:
    """Every regular file under ``path``, sorted by relative path.

    A path that is not a directory is returned as the only element.
    """
    root = Path(path)
    if not root.is_dir():
        return [root]
    files = [p for p in root.rglob("*") if p.is_file()]
    return sorted(files, key=lambda p: p.relative_to(root).as_posix())


def dir_checksum(path: Path, provider: HashProvider | None = None) -> str:
    """Return ``F<web-safe digest>`` over the subtree at ``path``."""
    root = Path(path)
    ctx = (provider or default_provider()).new()
    files = list_files_recursive(root)
    for file in files:
        rel = file.relative_to(root).as_posix() if file != root else file.name
        with file.open("rb") as fh:
            size = os.fstat(fh.fileno()).st_size
            ctx.update(rel.encode("utf-8") + b"\x00" + size.to_bytes(8, "big"))
            while chunk := fh.read(_READ_CHUNK):
                ctx.update(chunk)
    checksum = CHECKSUM_TAG + web_safe_b64(ctx.digest())
    logger.debug("Checksummed %d files under %s: %s", len(files), root, checksum)
    return checksum


def is_stale(path: Path, recorded: str | None, provider: HashProvider | None = None) -> bool:
    """Whether build output recorded as ``recorded`` no longer matches ``path``.

    A missing tree or a missing recorded checksum counts as stale.
    """
    if recorded is None or not Path(path).exists():
        return True
    return dir_checksum(path, provider) != recorded
