"""One-shot migration of legacy flat user trees into the sharded layout.

Legacy trees kept every project file directly in the user's root::

    {user_root}/Sabc....cw      ->   {user_root}/Sab/Sabc....cw

Each run moves whatever still matches the legacy pattern, so repeating it
converges to a no-op. A run scans and then renames without holding any
lock: callers must not migrate the same user root from two places at once.
"""

from __future__ import annotations

import logging
from pathlib import Path

from codeshelf.core.fsops import ensure_dir
from codeshelf.core.paths import SHARD_WIDTH

logger = logging.getLogger(__name__)

LEGACY_SUFFIX = ".cw"


def legacy_entries(user_root: Path, suffix: str = LEGACY_SUFFIX) -> list[Path]:
    """Top-level entries of ``user_root`` still in the flat layout."""
    return sorted(
        entry for entry in Path(user_root).iterdir()
        if entry.name.endswith(suffix) and len(entry.name) > SHARD_WIDTH
    )


def migrate_user(user_root: Path, suffix: str = LEGACY_SUFFIX) -> list[Path]:
    """Move each legacy entry into its shard directory.

    Returns the new locations of the moved entries (empty when the tree is
    already migrated).
    """
    root = Path(user_root)
    moved: list[Path] = []
    for entry in legacy_entries(root, suffix):
        shard_dir = ensure_dir(root / entry.name[:SHARD_WIDTH], recursive=False)
        target = shard_dir / entry.name
        entry.rename(target)
        moved.append(target)
    if moved:
        logger.info("Migrated %d legacy entries under %s", len(moved), root)
    return moved


def migrate_all(projects_root: Path, suffix: str = LEGACY_SUFFIX) -> dict[str, int]:
    """Migrate every user directory under a mode's projects root, serially.

    Returns a mapping of user directory name to number of entries moved.
    """
    root = Path(projects_root)
    if not root.is_dir():
        return {}
    report: dict[str, int] = {}
    for user_root in sorted(p for p in root.iterdir() if p.is_dir()):
        report[user_root.name] = len(migrate_user(user_root, suffix))
    return report
