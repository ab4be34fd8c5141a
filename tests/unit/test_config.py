"""Tests for store config — env-driven settings."""

from __future__ import annotations

from pathlib import Path

from codeshelf.config import StoreConfig


class TestStoreConfig:
    def test_defaults(self, monkeypatch):
        for var in ("CODESHELF_DATA_ROOT", "CODESHELF_DEFAULT_MODE", "CODESHELF_LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)
        config = StoreConfig(_env_file=None)
        assert config.log_level == "INFO"
        assert config.data_root == Path("data")
        assert config.default_mode == "codeworld"
        assert config.hash_algorithm == "md5"
        assert config.legacy_project_suffix == ".cw"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("CODESHELF_DATA_ROOT", "/srv/store")
        monkeypatch.setenv("CODESHELF_DEFAULT_MODE", "haskell")
        config = StoreConfig(_env_file=None)
        assert config.data_root == Path("/srv/store")
        assert config.default_mode == "haskell"

    def test_only_store_settings(self):
        assert set(StoreConfig.model_fields) == {
            "log_level",
            "data_root",
            "default_mode",
            "hash_algorithm",
            "legacy_project_suffix",
        }
