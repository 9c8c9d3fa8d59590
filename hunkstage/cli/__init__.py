"""CLI entry point for hunkstage.

This module provides the main CLI application that combines all commands
into a single unified interface.
"""

import typer

from hunkstage.cli.apply import apply_command
from hunkstage.cli.init import init_command
from hunkstage.cli.inventory import inventory_command

# Main application
app = typer.Typer(
    name="hunkstage",
    help="hunkstage: split working tree changes into a stack of commits",
    add_completion=False,
    no_args_is_help=True,
)

app.command("init")(init_command)
app.command("inventory")(inventory_command)
app.command("apply")(apply_command)


__all__ = [
    "app",
    "apply_command",
    "init_command",
    "inventory_command",
]
