"""Tests for whole-subtree checksums."""

from __future__ import annotations

import base64
import hashlib
from pathlib import Path

import pytest

from codeshelf.core.checksum import dir_checksum, is_stale, list_files_recursive
from codeshelf.core.hasher import Sha256Provider


def _tree(root: Path, files: dict[str, bytes]) -> Path:
    for rel, data in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
    return root


SAMPLE = {
    "b.txt": b"bravo",
    "a.txt": b"alpha",
    "sub/c.txt": b"charlie",
    "sub/deeper/d.bin": b"\x00\x01\x02",
}


class TestListFiles:
    def test_sorted_relative_order(self, tmp_path: Path):
        root = _tree(tmp_path / "t", SAMPLE)
        rels = [p.relative_to(root).as_posix() for p in list_files_recursive(root)]
        assert rels == ["a.txt", "b.txt", "sub/c.txt", "sub/deeper/d.bin"]

    def test_directories_excluded(self, tmp_path: Path):
        root = _tree(tmp_path / "t", SAMPLE)
        (root / "empty").mkdir()
        assert all(p.is_file() for p in list_files_recursive(root))

    def test_single_file(self, tmp_path: Path):
        f = tmp_path / "one.txt"
        f.write_bytes(b"x")
        assert list_files_recursive(f) == [f]


class TestDirChecksum:
    def test_prefixed_with_f(self, tmp_path: Path):
        assert dir_checksum(_tree(tmp_path / "t", SAMPLE)).startswith("F")

    def test_matches_sorted_framed_files(self, tmp_path: Path):
        root = _tree(tmp_path / "t", SAMPLE)
        ctx = hashlib.md5()
        for rel in ("a.txt", "b.txt", "sub/c.txt", "sub/deeper/d.bin"):
            data = SAMPLE[rel]
            ctx.update(rel.encode() + b"\x00" + len(data).to_bytes(8, "big") + data)
        digest = ctx.digest()
        expected = "F" + base64.urlsafe_b64encode(digest).decode().rstrip("=")
        assert dir_checksum(root) == expected

    def test_identical_trees_identical_digest(self, tmp_path: Path):
        a = _tree(tmp_path / "a", SAMPLE)
        b = _tree(tmp_path / "b", dict(reversed(list(SAMPLE.items()))))
        assert dir_checksum(a) == dir_checksum(b)

    def test_changed_content_changes_digest(self, tmp_path: Path):
        root = _tree(tmp_path / "t", SAMPLE)
        before = dir_checksum(root)
        (root / "sub" / "c.txt").write_bytes(b"CHARLIE")
        assert dir_checksum(root) != before

    def test_added_file_changes_digest(self, tmp_path: Path):
        root = _tree(tmp_path / "t", SAMPLE)
        before = dir_checksum(root)
        (root / "z.txt").write_bytes(b"zulu")
        assert dir_checksum(root) != before

    def test_removed_file_changes_digest(self, tmp_path: Path):
        root = _tree(tmp_path / "t", SAMPLE)
        before = dir_checksum(root)
        (root / "a.txt").unlink()
        assert dir_checksum(root) != before

    def test_renamed_file_changes_digest(self, tmp_path: Path):
        root = _tree(tmp_path / "t", {"a.txt": b"same"})
        before = dir_checksum(root)
        (root / "a.txt").rename(root / "b.txt")
        assert dir_checksum(root) != before

    def test_added_empty_file_changes_digest(self, tmp_path: Path):
        root = _tree(tmp_path / "t", SAMPLE)
        before = dir_checksum(root)
        (root / "empty.txt").write_bytes(b"")
        assert dir_checksum(root) != before

    def test_removed_empty_file_changes_digest(self, tmp_path: Path):
        root = _tree(tmp_path / "t", {**SAMPLE, "empty.txt": b""})
        before = dir_checksum(root)
        (root / "empty.txt").unlink()
        assert dir_checksum(root) != before

    def test_boundary_shift_changes_digest(self, tmp_path: Path):
        left = _tree(tmp_path / "left", {"x": b"ab", "y": b"c"})
        right = _tree(tmp_path / "right", {"x": b"a", "y": b"bc"})
        assert dir_checksum(left) != dir_checksum(right)

    def test_provider_is_pluggable(self, tmp_path: Path):
        root = _tree(tmp_path / "t", SAMPLE)
        assert dir_checksum(root) != dir_checksum(root, Sha256Provider())

    def test_empty_tree(self, tmp_path: Path):
        root = tmp_path / "empty"
        root.mkdir()
        digest = hashlib.md5(b"").digest()
        assert dir_checksum(root) == "F" + base64.urlsafe_b64encode(digest).decode().rstrip("=")


class TestIsStale:
    def test_fresh(self, tmp_path: Path):
        root = _tree(tmp_path / "t", SAMPLE)
        assert is_stale(root, dir_checksum(root)) is False

    def test_modified(self, tmp_path: Path):
        root = _tree(tmp_path / "t", SAMPLE)
        recorded = dir_checksum(root)
        (root / "a.txt").write_bytes(b"ALPHA")
        assert is_stale(root, recorded) is True

    @pytest.mark.parametrize("recorded", [None, "Fwhatever"])
    def test_missing_tree_is_stale(self, tmp_path: Path, recorded):
        assert is_stale(tmp_path / "absent", recorded) is True
