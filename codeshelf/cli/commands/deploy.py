"""``codeshelf deploy`` and ``codeshelf resolve`` — publish and follow deploy links."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.panel import Panel

from codeshelf.cli.commands._options import (
    DATA_ROOT_OPTION,
    MODE_OPTION,
    console,
    mode_for,
    resolver_for,
)
from codeshelf.core.artifact_store import ProgramStore
from codeshelf.core.links import LinkNotFoundError
from codeshelf.models.identifiers import DeployId, InvalidIdentifierError


def deploy_cmd(
    source_file: Path = typer.Argument(..., help="Source file to deploy."),
    mode: str = MODE_OPTION,
    data_root: Path = DATA_ROOT_OPTION,
) -> None:
    """Store a source file and publish a new deploy link for it."""
    if not source_file.is_file():
        console.print(f"[bold red]Source not found:[/bold red] {source_file}")
        raise typer.Exit(code=1)

    store = ProgramStore(resolver_for(data_root))
    deploy_id, program_id = store.deploy(mode_for(mode), source_file.read_bytes())

    console.print(
        Panel(
            "\n".join([
                f"[bold]Program ID:[/bold] {program_id}",
                f"[bold]Deploy ID:[/bold]  {deploy_id}",
            ]),
            title="[bold green]Deployed[/bold green]",
            border_style="green",
        )
    )
    # Plain id last for scripting
    console.print(str(deploy_id))


def resolve_cmd(
    deploy_id: str = typer.Argument(..., help="Deploy id to resolve."),
    mode: str = MODE_OPTION,
    data_root: Path = DATA_ROOT_OPTION,
) -> None:
    """Print the program id a deploy link points to."""
    store = ProgramStore(resolver_for(data_root))
    try:
        program_id = store.resolve_deploy(mode_for(mode), DeployId.parse(deploy_id))
    except (InvalidIdentifierError, LinkNotFoundError) as exc:
        console.print(f"[bold red]Cannot resolve {deploy_id}:[/bold red] {exc}")
        raise typer.Exit(code=1)
    console.print(str(program_id))
