"""Store configuration — env-driven.

Reads from a .env file and CODESHELF_* environment variables. Library
components never read this directly: roots and modes are passed in
explicitly, and the CLI uses these values as its defaults.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreConfig(BaseSettings):
    """Configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export CODESHELF_DATA_ROOT=/srv/codeworld/data
        export CODESHELF_DEFAULT_MODE=haskell
        export CODESHELF_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CODESHELF_",
        env_file_encoding="utf-8",
    )

    # Logging
    log_level: str = "INFO"

    # Storage
    data_root: Path = Path("data")
    default_mode: str = "codeworld"

    # Identifier hashing ("md5" or "sha256")
    hash_algorithm: str = "md5"

    # Suffix of project files in legacy flat user trees
    legacy_project_suffix: str = ".cw"


# Module-level singleton: import as `from codeshelf.config import config`
config = StoreConfig()
