"""Shared helpers for hunkstage CLI commands."""

from enum import Enum
from pathlib import Path
from typing import Optional, TypeVar

import typer

from hunkstage.git import get_repo_root

E = TypeVar("E", bound=Enum)


def parse_choice(value: Optional[str], enum_cls: type[E], default: E, option: str) -> E:
    """Turn an option value into an enum member, exiting on invalid input."""
    if value is None:
        return default
    try:
        return enum_cls(value.lower())
    except ValueError:
        valid = ", ".join(m.value for m in enum_cls)
        typer.echo(f"Invalid {option}: {value}", err=True)
        typer.echo(f"Valid values: {valid}", err=True)
        raise typer.Exit(1)


def resolve_repo_root(repo: Optional[Path]) -> Path:
    """Repository root for the --repo option (the cwd when omitted)."""
    return get_repo_root(repo)
