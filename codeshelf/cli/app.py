"""Main Typer application — imports and registers all CLI commands.

Entry point: ``codeshelf`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer

from codeshelf.cli.commands.deploy import deploy_cmd, resolve_cmd
from codeshelf.cli.commands.ids import id_cmd, path_cmd
from codeshelf.cli.commands.maintenance import checksum_cmd, migrate_cmd
from codeshelf.cli.commands.projects import projects_cmd
from codeshelf.config import config
from codeshelf.core.hasher import set_default_provider

app = typer.Typer(
    name="codeshelf",
    help="Codeshelf: content-addressed, sharded storage for hosted programs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def _configure() -> None:
    """Apply logging and hashing settings from the environment."""
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    set_default_provider(config.hash_algorithm)


# Register subcommands
app.command(name="id", help="Derive an identifier from a source file or name.")(id_cmd)
app.command(name="path", help="Show the storage paths for an identifier.")(path_cmd)
app.command(name="deploy", help="Store a source and publish a deploy link.")(deploy_cmd)
app.command(name="resolve", help="Resolve a deploy id to its program id.")(resolve_cmd)
app.command(name="checksum", help="Fingerprint a directory tree.")(checksum_cmd)
app.command(name="migrate", help="Shard legacy flat user trees.")(migrate_cmd)
app.command(name="projects", help="List a user's folders and projects.")(projects_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
