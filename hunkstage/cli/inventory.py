"""CLI command for listing the hunks of the current changes."""

from pathlib import Path
from typing import Optional

import typer

from hunkstage.compose import capture_snapshot, format_inventory
from hunkstage.git import DiffStrategy, GitError
from hunkstage.logging_utils import configure_logging
from hunkstage.user_config import load_config
from hunkstage.cli.utils import parse_choice, resolve_repo_root


def inventory_command(
    diff: Optional[str] = typer.Option(
        None,
        "--diff",
        help="What to compare (workdir, unstaged, staged)",
    ),
    context_lines: Optional[int] = typer.Option(
        None,
        "--context-lines",
        "-U",
        min=0,
        help="Context lines around each change",
    ),
    max_lines: int = typer.Option(
        5,
        "--max-lines",
        help="Changed lines shown per hunk",
    ),
    repo: Optional[Path] = typer.Option(
        None,
        "--repo",
        help="Repository to operate on (default: current directory)",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase log output (-v info, -vv debug)",
    ),
) -> None:
    """Show the captured hunks and their "<path>:<index>" ids."""
    configure_logging(verbose)

    try:
        repo_root = resolve_repo_root(repo)
        config = load_config(repo_root)
        strategy = parse_choice(diff, DiffStrategy, config.diff_strategy, "diff strategy")

        snapshot = capture_snapshot(
            repo_root,
            strategy=strategy,
            context_lines=context_lines if context_lines is not None else config.context_lines,
            ignore_patterns=config.ignore,
        )
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if snapshot.is_empty:
        typer.echo("No changes found.")
        return

    typer.echo(format_inventory(snapshot, max_snippet_lines=max_lines))
