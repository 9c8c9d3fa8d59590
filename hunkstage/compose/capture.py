"""Snapshot capture for hunkstage compose module.

Contains:
- capture_snapshot: Capture the addressable diff snapshot for a run
- capture_file_hunks: Re-derive the current hunks of a single file
- build_untracked_file_diff: Diff an untracked file against an empty buffer
"""

import logging
from pathlib import Path
from typing import Optional

from hunkstage.compose.models import (
    DiffLine,
    DiffLinePosition,
    DiffLineType,
    DiffSnapshot,
    FileDiff,
    Hunk,
    HunkHeader,
)
from hunkstage.compose.parser import parse_unified_diff
from hunkstage.compose.reconstruct import split_lines
from hunkstage.git import (
    DEFAULT_CONTEXT_LINES,
    DiffStrategy,
    _should_exclude_file,
    get_diff_text,
    get_untracked_files,
)

logger = logging.getLogger(__name__)


def capture_snapshot(
    repo_root: Path,
    strategy: DiffStrategy = DiffStrategy.WORKDIR,
    paths: Optional[list[str]] = None,
    context_lines: int = DEFAULT_CONTEXT_LINES,
    include_untracked: bool = True,
    ignore_patterns: Optional[list[str]] = None,
) -> DiffSnapshot:
    """Capture the current changes as an addressable snapshot.

    Args:
        repo_root: The root directory of the git repository.
        strategy: Which two repository states to compare.
        paths: Restrict the capture to these paths.
        context_lines: Context width; hunk-level staging re-derives hunks
            with the same width so boundaries line up.
        include_untracked: Whether to add untracked files (not for STAGED).
        ignore_patterns: Glob patterns of paths to leave out.

    Returns:
        The captured DiffSnapshot.

    Raises:
        GitError: If git cannot produce the diff.
    """
    ignore_patterns = ignore_patterns or []

    diff_text = get_diff_text(repo_root, strategy, paths=paths, context_lines=context_lines)
    file_diffs, warnings = parse_unified_diff(diff_text)

    if include_untracked and strategy.includes_untracked:
        seen = {f.path for f in file_diffs}
        for path in get_untracked_files(repo_root, paths=paths):
            if path not in seen:
                file_diffs.append(build_untracked_file_diff(repo_root, path, warnings))

    kept = []
    for file_diff in file_diffs:
        if _should_exclude_file(file_diff.path, ignore_patterns):
            logger.debug("Ignoring %s", file_diff.path)
            continue
        kept.append(file_diff)

    logger.info(
        "Captured %d file(s), %d hunk(s) with strategy %s",
        len(kept),
        sum(len(f.hunks) for f in kept),
        strategy.value,
    )
    return DiffSnapshot(files=kept, strategy=strategy, warnings=warnings)


def build_untracked_file_diff(repo_root: Path, path: str, warnings: list[str]) -> FileDiff:
    """Diff an untracked file against an empty buffer.

    The result is a single hunk in which every line is an addition.
    Files that are not UTF-8 text are kept as binary, with no hunks.
    """
    file_path = repo_root / path
    try:
        if file_path.is_symlink():
            data = str(file_path.readlink()).encode("utf-8")
        else:
            data = file_path.read_bytes()
        content = None if b"\0" in data else data.decode("utf-8")
    except (OSError, UnicodeDecodeError):
        content = None

    if content is None:
        warnings.append(f"Binary file cannot be split into hunks: {path}")
        return FileDiff(path=path, untracked=True, is_new_file=True, is_binary=True)

    lines = split_lines(content)
    hunk = Hunk(
        index=0,
        header=HunkHeader(old_start=0, old_lines=0, new_start=1 if lines else 0, new_lines=len(lines)),
        lines=[
            DiffLine(
                content=line,
                line_type=DiffLineType.ADD,
                position=DiffLinePosition(new_lineno=lineno),
            )
            for lineno, line in enumerate(lines, start=1)
        ],
    )
    return FileDiff(
        path=path,
        hunks=[hunk] if lines else [],
        untracked=True,
        is_new_file=True,
    )


def capture_file_hunks(
    repo_root: Path, path: str, context_lines: int = DEFAULT_CONTEXT_LINES
) -> list[Hunk]:
    """Re-derive the current hunks of one file, index vs working tree.

    Selection is always relative to the indexed blob, so this is the diff
    the reconstruction replays regardless of the snapshot's strategy.

    Raises:
        GitError: If git cannot produce the diff.
    """
    diff_text = get_diff_text(
        repo_root, DiffStrategy.UNSTAGED, paths=[path], context_lines=context_lines
    )
    file_diffs, _ = parse_unified_diff(diff_text)
    for file_diff in file_diffs:
        if file_diff.path == path:
            return file_diff.hunks
    return []
