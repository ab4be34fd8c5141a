"""``codeshelf projects USER`` — list a user's folders and projects."""

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
from codeshelf.core.project_tree import ProjectTree
from codeshelf.models.identifiers import UserId


def projects_cmd(
    user: str = typer.Argument(..., help="User id owning the tree."),
    path: str = typer.Option("", "--path", "-p", help="Folder path inside the tree."),
    mode: str = MODE_OPTION,
    data_root: Path = DATA_ROOT_OPTION,
) -> None:
    """List folders and projects in a user's tree."""
    tree = ProjectTree(resolver_for(data_root))
    build_mode = mode_for(mode)
    try:
        user_id = UserId(value=user)
        folders = tree.list_dirs(build_mode, user_id, path)
        projects = tree.list_projects(build_mode, user_id, path)
    except ValueError as exc:
        console.print(f"[bold red]Invalid argument:[/bold red] {exc}")
        raise typer.Exit(code=1)
    except FileNotFoundError as exc:
        console.print(f"[bold red]Not found:[/bold red] {exc.filename or exc}")
        raise typer.Exit(code=1)

    if not folders and not projects:
        console.print("[dim]No folders or projects.[/dim]")
        return

    table = Table(title=f"{user}/{path}" if path else user)
    table.add_column("Kind", style="cyan")
    table.add_column("Name")
    for name in folders:
        table.add_row("folder", name)
    for name in projects:
        table.add_row("project", name)
    console.print(table)
