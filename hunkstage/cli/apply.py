"""CLI command for applying a commit plan."""

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from hunkstage.compose import (
    CommitPlan,
    PlanResult,
    StagingCoordinator,
    StagingStrategy,
    capture_snapshot,
    validate_plan,
)
from hunkstage.git import DiffStrategy, GitError
from hunkstage.logging_utils import configure_logging
from hunkstage.user_config import load_config
from hunkstage.cli.utils import parse_choice, resolve_repo_root


def apply_command(
    plan_file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="JSON commit plan: {\"commits\": [{\"message\": ..., \"hunk_ids\"|\"files\": [...]}]}",
    ),
    diff: Optional[str] = typer.Option(
        None,
        "--diff",
        help="What the plan was made against (workdir, unstaged, staged)",
    ),
    staging: Optional[str] = typer.Option(
        None,
        "--staging",
        help="Staging strategy (hunks, atomic, one-file, all-files)",
    ),
    context_lines: Optional[int] = typer.Option(
        None,
        "--context-lines",
        "-U",
        min=0,
        help="Context lines around each change",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Validate the plan against the current changes without committing",
    ),
    keep_going: bool = typer.Option(
        False,
        "--keep-going",
        help="Continue with later commits after a failed one",
    ),
    rollback: Optional[bool] = typer.Option(
        None,
        "--rollback/--no-rollback",
        help="Restore the index when a commit fails",
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
    """Stage and commit the changes of the working tree as the plan describes."""
    configure_logging(verbose)

    try:
        plan = CommitPlan.model_validate_json(plan_file.read_text())
    except (OSError, ValidationError) as e:
        typer.echo(f"Invalid plan file {plan_file}: {e}", err=True)
        raise typer.Exit(1)

    try:
        repo_root = resolve_repo_root(repo)
        config = load_config(repo_root)
        diff_strategy = parse_choice(diff, DiffStrategy, config.diff_strategy, "diff strategy")
        staging_strategy = parse_choice(
            staging, StagingStrategy, config.staging_strategy, "staging strategy"
        )
        context = context_lines if context_lines is not None else config.context_lines

        snapshot = capture_snapshot(
            repo_root,
            strategy=diff_strategy,
            context_lines=context,
            ignore_patterns=config.ignore,
        )
        if snapshot.is_empty:
            typer.echo("No changes found.")
            raise typer.Exit(1)

        errors = validate_plan(plan, snapshot, staging_strategy)
        if errors:
            typer.echo("Plan validation failed:", err=True)
            for error in errors:
                typer.echo(f"  - {error}", err=True)
            raise typer.Exit(1)

        for warning in snapshot.warnings + plan.warnings:
            typer.echo(f"Warning: {warning}")

        if dry_run:
            typer.echo(f"Plan is valid: {len(plan.commits)} commit(s).")
            return

        coordinator = StagingCoordinator(
            repo_root,
            snapshot,
            strategy=staging_strategy,
            context_lines=context,
            rollback_on_failure=config.rollback_on_failure if rollback is None else rollback,
            strict_matching=config.strict_matching,
        )
        result = coordinator.run(plan, stop_on_error=not keep_going)
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    _print_result(result, len(plan.commits))

    if not result.succeeded:
        raise typer.Exit(1)


def _print_result(result: PlanResult, planned: int) -> None:
    for commit_result in result.results:
        subject = commit_result.message.strip().splitlines()[0]
        if commit_result.succeeded:
            typer.echo(f"[{commit_result.number}] {commit_result.commit_id[:12]} {subject}")
        else:
            typer.echo(f"[{commit_result.number}] FAILED {subject}", err=True)
            typer.echo(f"    {commit_result.error}", err=True)

    skipped = planned - len(result.results)
    if skipped:
        typer.echo(f"{skipped} commit(s) not attempted.", err=True)

    if result.leftovers or result.unapplied_files:
        typer.echo("Not applied:")
        for hunk_id in result.leftovers:
            typer.echo(f"  {hunk_id}")
        for path in result.unapplied_files:
            typer.echo(f"  {path}")
