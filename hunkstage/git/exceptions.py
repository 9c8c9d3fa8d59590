"""Git-related exception classes.

Contains all exception classes for git backend operations:
- GitError: Raised when a git command cannot be run or fails
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass
