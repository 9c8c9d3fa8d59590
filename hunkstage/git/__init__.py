"""Git backend module for hunkstage.

This package provides the version-control collaborator with:
- exceptions: GitError
- runner: _run_git_command, _run_git_bytes, get_repo_root
- diff: DiffStrategy, get_diff_text, get_empty_tree, _should_exclude_file,
        DEFAULT_DIFF_EXCLUDE_PATTERNS, DEFAULT_CONTEXT_LINES
- status: get_untracked_files
- index: read_indexed_blob, get_index_mode, write_blob, update_index_entry,
         stage_path, unstage_path,
         write_tree, read_tree
- commit: get_head, get_head_tree, create_commit
"""

# Exceptions
from hunkstage.git.exceptions import (
    GitError,
)

# Runner utilities
from hunkstage.git.runner import (
    _run_git_bytes,
    _run_git_command,
    get_repo_root,
)

# Index and object store
from hunkstage.git.index import (
    get_index_mode,
    read_indexed_blob,
    read_tree,
    stage_path,
    update_index_entry,
    unstage_path,
    write_blob,
    write_tree,
)

# Commit creation
from hunkstage.git.commit import (
    create_commit,
    get_head,
    get_head_tree,
)

# Diff utilities
from hunkstage.git.diff import (
    DEFAULT_CONTEXT_LINES,
    DEFAULT_DIFF_EXCLUDE_PATTERNS,
    DiffStrategy,
    _should_exclude_file,
    get_diff_text,
    get_empty_tree,
)

# Status utilities
from hunkstage.git.status import (
    get_untracked_files,
)


__all__ = [
    # Exceptions
    "GitError",
    # Runner
    "_run_git_bytes",
    "_run_git_command",
    "get_repo_root",
    # Index
    "get_index_mode",
    "read_indexed_blob",
    "read_tree",
    "stage_path",
    "update_index_entry",
    "unstage_path",
    "write_blob",
    "write_tree",
    # Commit
    "create_commit",
    "get_head",
    "get_head_tree",
    # Diff
    "DEFAULT_CONTEXT_LINES",
    "DEFAULT_DIFF_EXCLUDE_PATTERNS",
    "DiffStrategy",
    "_should_exclude_file",
    "get_diff_text",
    "get_empty_tree",
    # Status
    "get_untracked_files",
]
