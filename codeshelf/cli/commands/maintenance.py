"""``codeshelf checksum`` and ``codeshelf migrate`` — build and tree maintenance."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from codeshelf.cli.commands._options import (
    DATA_ROOT_OPTION,
    MODE_OPTION,
    console,
    mode_for,
    resolver_for,
)
from codeshelf.config import config
from codeshelf.core.checksum import dir_checksum
from codeshelf.core.migration import migrate_all, migrate_user
from codeshelf.core.paths import ArtifactFamily


def checksum_cmd(
    directory: Path = typer.Argument(..., help="Directory tree to fingerprint."),
    expected: str = typer.Option(
        None,
        "--expected",
        "-e",
        help="Previously recorded checksum; exit 1 if the tree is stale.",
    ),
) -> None:
    """Print the checksum of a directory tree."""
    if not directory.exists():
        console.print(f"[bold red]Not found:[/bold red] {directory}")
        raise typer.Exit(code=1)
    checksum = dir_checksum(directory)
    console.print(checksum)
    if expected is not None and checksum != expected:
        console.print("[yellow]Stale:[/yellow] checksum differs from the recorded value.")
        raise typer.Exit(code=1)


def migrate_cmd(
    user_root: Path = typer.Argument(
        None,
        help="Legacy user directory. Omit with --all to migrate every user.",
    ),
    all_users: bool = typer.Option(
        False,
        "--all",
        help="Migrate every user under the mode's projects root.",
    ),
    suffix: str = typer.Option(
        None,
        "--suffix",
        help="Legacy project file suffix (defaults to CODESHELF_LEGACY_PROJECT_SUFFIX).",
    ),
    mode: str = MODE_OPTION,
    data_root: Path = DATA_ROOT_OPTION,
) -> None:
    """Move legacy flat project files into shard directories.

    Run once per user, and never concurrently against the same user.
    """
    suffix = suffix or config.legacy_project_suffix

    if all_users:
        root = resolver_for(data_root).family_root(ArtifactFamily.PROJECTS, mode_for(mode))
        report = migrate_all(root, suffix)
        table = Table(title=f"Migration of {root}")
        table.add_column("User", style="cyan")
        table.add_column("Moved", justify="right")
        for user, moved in report.items():
            table.add_row(user, str(moved))
        console.print(table)
        return

    if user_root is None or not user_root.is_dir():
        console.print(f"[bold red]User directory not found:[/bold red] {user_root}")
        raise typer.Exit(code=1)

    moved = migrate_user(user_root, suffix)
    if not moved:
        console.print("[dim]Nothing to migrate.[/dim]")
        return
    for path in moved:
        console.print(f"  {path}")
    console.print(f"[green]Moved {len(moved)} entries.[/green]")
