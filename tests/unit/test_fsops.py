"""Tests for idempotent directory creation and missing-is-success removal."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from codeshelf.core.fsops import (
    DEFAULT_FILE_MODE,
    atomic_write,
    copy_dir_if_exists,
    ensure_dir,
    remove_dir_if_exists,
    remove_file_if_exists,
)


class TestEnsureDir:
    def test_creates_recursively(self, tmp_path: Path):
        target = tmp_path / "a" / "b" / "c"
        assert ensure_dir(target) == target
        assert target.is_dir()

    def test_twice_is_fine(self, tmp_path: Path):
        target = tmp_path / "x"
        ensure_dir(target)
        ensure_dir(target)
        assert target.is_dir()

    def test_non_recursive_requires_parent(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            ensure_dir(tmp_path / "missing" / "child", recursive=False)

    def test_non_recursive_existing_is_fine(self, tmp_path: Path):
        ensure_dir(tmp_path / "y", recursive=False)
        ensure_dir(tmp_path / "y", recursive=False)
        assert (tmp_path / "y").is_dir()


class TestRemoveFile:
    def test_removes_existing(self, tmp_path: Path):
        f = tmp_path / "f.txt"
        f.write_text("x")
        remove_file_if_exists(f)
        assert not f.exists()

    def test_missing_is_success(self, tmp_path: Path):
        remove_file_if_exists(tmp_path / "nope.txt")

    def test_other_errors_propagate(self, tmp_path: Path):
        # A directory is not a file
        d = tmp_path / "dir"
        d.mkdir()
        with pytest.raises(OSError):
            remove_file_if_exists(d)


class TestRemoveDir:
    def test_removes_tree(self, tmp_path: Path):
        d = tmp_path / "tree"
        (d / "sub").mkdir(parents=True)
        (d / "sub" / "f").write_text("x")
        remove_dir_if_exists(d)
        assert not d.exists()

    def test_missing_is_success(self, tmp_path: Path):
        remove_dir_if_exists(tmp_path / "nope")


class TestCopyDir:
    def test_copies_when_present(self, tmp_path: Path):
        src = tmp_path / "src"
        (src / "n").mkdir(parents=True)
        (src / "n" / "f.txt").write_text("hello")
        dst = tmp_path / "dst"
        assert copy_dir_if_exists(src, dst) is True
        assert (dst / "n" / "f.txt").read_text() == "hello"

    def test_missing_source_is_noop(self, tmp_path: Path):
        assert copy_dir_if_exists(tmp_path / "none", tmp_path / "dst") is False
        assert not (tmp_path / "dst").exists()


class TestAtomicWrite:
    def test_writes_content(self, tmp_path: Path):
        target = tmp_path / "f.bin"
        atomic_write(target, b"payload")
        assert target.read_bytes() == b"payload"

    def test_replaces_existing(self, tmp_path: Path):
        target = tmp_path / "f.bin"
        target.write_bytes(b"old")
        atomic_write(target, b"new")
        assert target.read_bytes() == b"new"

    def test_leaves_no_temp_files(self, tmp_path: Path):
        atomic_write(tmp_path / "f.bin", b"x")
        assert [p.name for p in tmp_path.iterdir()] == ["f.bin"]

    def test_missing_parent(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            atomic_write(tmp_path / "absent" / "f.bin", b"x")

    def test_mode_matches_plain_write(self, tmp_path: Path):
        plain = tmp_path / "plain.bin"
        plain.write_bytes(b"x")
        target = tmp_path / "atomic.bin"
        atomic_write(target, b"x")
        assert stat.S_IMODE(target.stat().st_mode) == stat.S_IMODE(plain.stat().st_mode)
        assert stat.S_IMODE(target.stat().st_mode) == DEFAULT_FILE_MODE

    def test_explicit_mode(self, tmp_path: Path):
        target = tmp_path / "f.bin"
        atomic_write(target, b"x", mode=0o640)
        assert stat.S_IMODE(target.stat().st_mode) == 0o640
