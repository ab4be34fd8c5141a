"""Idempotent filesystem primitives shared by every store component.

"Ensure" operations succeed when the target already exists, including when
another process created it between our check and our create. Removal
operations treat an already-absent target as success and let every other
``OSError`` reach the caller untouched.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

# Process umask, read once. NamedTemporaryFile creates files as 0600; atomic
# writes are widened to what a plain open() would have produced.
_UMASK = os.umask(0)
os.umask(_UMASK)
DEFAULT_FILE_MODE = 0o666 & ~_UMASK


def ensure_dir(path: Path, recursive: bool = True) -> Path:
    """Create ``path`` if missing.

    With ``recursive=False`` a missing parent raises ``FileNotFoundError``.
    """
    path = Path(path)
    path.mkdir(parents=recursive, exist_ok=True)
    return path


def atomic_write(path: Path, content: bytes, mode: int | None = None) -> None:
    """Write a file via temp file + rename so readers never see partial data.

    The parent directory must exist. The temp file lives beside the target
    so the rename stays on one filesystem. The file gets permission bits
    ``mode``, or ``0666`` minus the process umask when ``mode`` is ``None``.
    """
    path = Path(path)
    with tempfile.NamedTemporaryFile(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(content)
            tmp.flush()
            os.fchmod(tmp.fileno(), DEFAULT_FILE_MODE if mode is None else mode)
            os.fsync(tmp.fileno())
            tmp_path.replace(path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
    logger.debug("Atomically wrote %d bytes to %s", len(content), path)


def remove_file_if_exists(path: Path) -> None:
    """Delete a file; a missing file is not an error."""
    try:
        Path(path).unlink()
    except FileNotFoundError:
        return
    logger.debug("Removed file %s", path)


def remove_dir_if_exists(path: Path) -> None:
    """Delete a directory tree; a missing tree is not an error."""
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return
    logger.info("Removed directory tree %s", path)


def copy_dir_if_exists(src: Path, dst: Path) -> bool:
    """Copy the tree at ``src`` into ``dst`` when ``src`` exists.

    Existing files under ``dst`` are overwritten. Returns ``True`` if a copy
    was made.
    """
    src = Path(src)
    if not src.is_dir():
        return False
    shutil.copytree(src, dst, dirs_exist_ok=True)
    logger.debug("Copied %s -> %s", src, dst)
    return True
