"""Hunk inventory utilities for hunkstage compose module.

Contains functions for building and formatting hunk inventories:
- build_hunk_inventory: Build a mapping of hunk ids to Hunk objects
- format_inventory: Format the snapshot as a readable hunk listing
"""

from hunkstage.compose.models import DiffSnapshot, Hunk, HunkId


def build_hunk_inventory(snapshot: DiffSnapshot) -> dict[str, Hunk]:
    """Build a mapping of "<path>:<index>" ids to Hunk objects.

    Args:
        snapshot: The captured snapshot

    Returns:
        Dictionary mapping hunk id to Hunk
    """
    inventory: dict[str, Hunk] = {}
    for file_diff in snapshot.files:
        for hunk in file_diff.hunks:
            inventory[str(HunkId(file_diff.path, hunk.index))] = hunk
    return inventory


def format_inventory(snapshot: DiffSnapshot, max_snippet_lines: int = 5) -> str:
    """Format the hunk inventory of a snapshot.

    Args:
        snapshot: The captured snapshot
        max_snippet_lines: Maximum lines to show per hunk snippet

    Returns:
        Formatted listing, one block per file
    """
    lines = ["[HUNK INVENTORY]"]

    for file_diff in snapshot.files:
        lines.append(f"\nFile: {file_diff.path}")
        if file_diff.untracked:
            lines.append("  (untracked file)")
        elif file_diff.is_new_file:
            lines.append("  (new file)")
        elif file_diff.is_deleted_file:
            lines.append("  (deleted file)")
        if file_diff.is_binary:
            lines.append("  (binary, staged as a whole)")

        for hunk in file_diff.hunks:
            lines.append(f"\n  Hunk {HunkId(file_diff.path, hunk.index)}:")
            lines.append(f"    {hunk.header}")
            snippet = hunk.snippet(max_snippet_lines)
            for snippet_line in snippet.split("\n"):
                lines.append(f"    {snippet_line}")

    for warning in snapshot.warnings:
        lines.append(f"\nWarning: {warning}")

    return "\n".join(lines)
