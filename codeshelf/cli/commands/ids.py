"""``codeshelf id`` and ``codeshelf path`` — derive and locate identifiers."""

from __future__ import annotations

from enum import Enum
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
from codeshelf.core.hasher import (
    name_to_dir_id,
    name_to_project_id,
    path_to_share_id,
    source_to_deploy_id,
    source_to_program_id,
)
from codeshelf.models.identifiers import (
    DeployId,
    Identifier,
    InvalidIdentifierError,
    ProgramId,
    ShareId,
)


class IdFamily(str, Enum):
    program = "program"
    deploy = "deploy"
    project = "project"
    dir = "dir"
    share = "share"


def _derive(family: IdFamily, value: str, nonce: str) -> Identifier:
    if family in (IdFamily.program, IdFamily.deploy):
        source = Path(value).read_bytes()
        if family is IdFamily.program:
            return source_to_program_id(source)
        return source_to_deploy_id(source, nonce)
    if family is IdFamily.project:
        return name_to_project_id(value)
    if family is IdFamily.dir:
        return name_to_dir_id(value)
    return path_to_share_id(value)


def id_cmd(
    value: str = typer.Argument(
        ...,
        help="Source file (program, deploy) or name (project, dir, share).",
    ),
    family: IdFamily = typer.Option(
        IdFamily.program,
        "--family",
        "-f",
        help="Identifier family to derive.",
    ),
    nonce: str = typer.Option(
        "",
        "--nonce",
        help="Deploy action nonce (deploy family only).",
    ),
) -> None:
    """Print the identifier derived from a source file or a name."""
    try:
        identifier = _derive(family, value, nonce)
    except FileNotFoundError:
        console.print(f"[bold red]File not found:[/bold red] {value}")
        raise typer.Exit(code=1)
    console.print(str(identifier))


def path_cmd(
    identifier: str = typer.Argument(..., help="A program, deploy or share id."),
    mode: str = MODE_OPTION,
    data_root: Path = DATA_ROOT_OPTION,
) -> None:
    """Show where the files for an identifier live."""
    resolver = resolver_for(data_root)
    build_mode = mode_for(mode)

    rows: list[tuple[str, Path]]
    try:
        if identifier.startswith(ProgramId.TAG):
            pid = ProgramId.parse(identifier)
            rows = [
                ("source", resolver.source_file(build_mode, pid)),
                ("target", resolver.target_file(build_mode, pid)),
                ("diagnostics", resolver.result_file(build_mode, pid)),
                ("base version", resolver.base_version_file(build_mode, pid)),
            ]
        elif identifier.startswith(ShareId.TAG):
            rows = [("share link", resolver.share_link(build_mode, ShareId.parse(identifier)))]
        elif identifier.startswith(DeployId.TAG):
            rows = [("deploy link", resolver.deploy_link(build_mode, DeployId.parse(identifier)))]
        elif identifier[:1] in DeployId.ACCEPTED_TAGS:
            # Shares its tag with folder ids, which have no store-level path
            rows = [(
                f"deploy link (legacy {identifier[0]} tag)",
                resolver.deploy_link(build_mode, DeployId.parse(identifier)),
            )]
        else:
            raise InvalidIdentifierError(
                f"{identifier!r} is not a program, deploy or share id"
            )
    except InvalidIdentifierError as exc:
        console.print(f"[bold red]{exc}[/bold red]")
        raise typer.Exit(code=1)

    table = Table(title=identifier)
    table.add_column("Artifact", style="cyan")
    table.add_column("Path")
    table.add_column("Exists", justify="center")
    for label, path in rows:
        exists = "[green]Yes[/green]" if path.exists() else "[dim]No[/dim]"
        table.add_row(label, str(path), exists)
    console.print(table)
