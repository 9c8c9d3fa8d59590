"""CLI command for writing the default repository configuration."""

from pathlib import Path
from typing import Optional

import typer

from hunkstage.git import GitError
from hunkstage.user_config import DEFAULT_CONFIG, get_config_file, save_config
from hunkstage.cli.utils import resolve_repo_root


def init_command(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing .hunkstage/config.yaml",
    ),
    repo: Optional[Path] = typer.Option(
        None,
        "--repo",
        help="Repository to operate on (default: current directory)",
    ),
) -> None:
    """Write .hunkstage/config.yaml with the default settings."""
    try:
        repo_root = resolve_repo_root(repo)
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    config_file = get_config_file(repo_root)
    if config_file.exists() and not force:
        typer.echo(f"Configuration already exists at {config_file}. Use --force to overwrite.")
        raise typer.Exit(0)

    save_config(repo_root, DEFAULT_CONFIG)
    typer.echo(f"Wrote default configuration to {config_file}")
