"""Shared defaults for CLI commands, filled from ``codeshelf.config``."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from codeshelf.config import config
from codeshelf.core.paths import PathResolver
from codeshelf.models.identifiers import BuildMode

console = Console()


def resolver_for(data_root: Path | None) -> PathResolver:
    return PathResolver(data_root if data_root is not None else config.data_root)


def mode_for(mode: str | None) -> BuildMode:
    try:
        return BuildMode(name=mode or config.default_mode)
    except ValueError as exc:
        console.print(f"[bold red]Invalid build mode:[/bold red] {mode!r}")
        raise typer.Exit(code=1) from exc


DATA_ROOT_OPTION = typer.Option(
    None,
    "--data-root",
    "-r",
    help="Store root directory (defaults to CODESHELF_DATA_ROOT).",
)

MODE_OPTION = typer.Option(
    None,
    "--mode",
    "-m",
    help="Build mode namespace (defaults to CODESHELF_DEFAULT_MODE).",
)
