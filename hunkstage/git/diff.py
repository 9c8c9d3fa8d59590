"""Git diff utilities.

Contains:
- DiffStrategy: Which two states of the repository a diff compares
- get_diff_text: Get unified diff text for a comparison strategy
- get_empty_tree: Get the id of the empty tree object
- _should_exclude_file: Check if a file should be excluded based on patterns
- DEFAULT_DIFF_EXCLUDE_PATTERNS: Default patterns for files to exclude from capture
"""

import fnmatch
from enum import Enum
from pathlib import Path
from typing import Optional

from hunkstage.git.commit import get_head
from hunkstage.git.runner import _run_git_bytes, _run_git_command


# Default files left out of a captured snapshot.
# These are typically auto-generated and are never split line by line.
# Note: This list is used as fallback; actual patterns come from .hunkstage/config.yaml
DEFAULT_DIFF_EXCLUDE_PATTERNS = [
    "poetry.lock",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "Cargo.lock",
    "Gemfile.lock",
    "composer.lock",
    "go.sum",
]

DEFAULT_CONTEXT_LINES = 3

# Flags that keep the output stable regardless of the user's git config
_DIFF_FLAGS = [
    "--no-color",
    "--no-ext-diff",
    "--no-textconv",
    "--no-renames",
    "--src-prefix=a/",
    "--dst-prefix=b/",
]


class DiffStrategy(Enum):
    """Comparison strategies for capturing a diff."""

    WORKDIR = "workdir"  # HEAD tree vs working tree
    UNSTAGED = "unstaged"  # index vs working tree
    STAGED = "staged"  # HEAD tree vs index

    @property
    def includes_untracked(self) -> bool:
        return self is not DiffStrategy.STAGED


def _should_exclude_file(filename: str, patterns: list[str]) -> bool:
    """Check if a file should be excluded based on patterns.

    Supports glob patterns like *.lock, build/*, etc.

    Args:
        filename: The file path to check.
        patterns: List of patterns to match against.

    Returns:
        True if the file should be excluded.
    """
    for pattern in patterns:
        # Handle exact matches
        if filename == pattern:
            return True
        # Handle glob patterns
        if fnmatch.fnmatch(filename, pattern):
            return True
        # Handle patterns that might match the basename
        if fnmatch.fnmatch(Path(filename).name, pattern):
            return True
    return False


def get_empty_tree(repo_root: Optional[Path] = None) -> str:
    """Get the object id of the empty tree for this repository's hash format."""
    return _run_git_command(
        ["hash-object", "-t", "tree", "--stdin"], repo_root=repo_root, input_text=""
    )


def _base_tree(repo_root: Optional[Path]) -> str:
    """HEAD, or the empty tree on an unborn branch."""
    head = get_head(repo_root)
    return head if head else get_empty_tree(repo_root)


def get_diff_text(
    repo_root: Optional[Path],
    strategy: DiffStrategy,
    paths: Optional[list[str]] = None,
    context_lines: int = DEFAULT_CONTEXT_LINES,
) -> str:
    """Get the unified diff for a comparison strategy.

    Args:
        repo_root: The root directory of the git repository.
        strategy: Which two repository states to compare.
        paths: Restrict the diff to these paths (None means the whole tree).
        context_lines: Number of unchanged context lines around each change.

    Returns:
        The raw diff text, line endings preserved.

    Raises:
        GitError: If git cannot produce the diff.
    """
    if paths is not None and not paths:
        return ""

    args = ["--literal-pathspecs", "-c", "core.quotepath=false", "diff", *_DIFF_FLAGS, f"-U{context_lines}"]
    if strategy is DiffStrategy.STAGED:
        args += ["--cached", _base_tree(repo_root)]
    elif strategy is DiffStrategy.WORKDIR:
        args.append(_base_tree(repo_root))

    args.append("--")
    if paths:
        args.extend(paths)

    output = _run_git_bytes(args, repo_root=repo_root)
    return output.decode("utf-8", errors="replace")
