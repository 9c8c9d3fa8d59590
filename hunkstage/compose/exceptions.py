"""Staging-related exception classes.

Contains all exception classes raised while applying a commit plan:
- StagingError: Base exception carrying the path and hunk id involved
- InvalidHunkIdError: A hunk id string is not "<path>:<index>"
- UnknownPathError: The plan references a path absent from the snapshot
- NoMatchingHunkError: A requested hunk has no counterpart in the current diff
- AmbiguousHunkMatchError: Several current hunks match under strict matching
- EmptySelectionError: A hunk-mode commit resolved to no changed lines
- ReconstructionError: The current diff does not fit the indexed content
- BackendError: A git operation failed while staging a path
- CommitExecutionError: The commit itself could not be created
"""

from typing import Optional


class StagingError(Exception):
    """Base exception for errors while staging or committing a plan entry."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        hunk_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.path = path
        self.hunk_id = hunk_id


class InvalidHunkIdError(StagingError, ValueError):
    """Raised when a hunk id string cannot be parsed."""

    def __init__(self, value: str, reason: str):
        super().__init__(f"Invalid hunk id {value!r}: {reason}")
        self.value = value


class UnknownPathError(StagingError):
    """Raised when a plan references a path that was not captured."""

    def __init__(self, path: str):
        super().__init__(f"Path not present in the captured snapshot: {path}", path=path)


class NoMatchingHunkError(StagingError):
    """Raised when content matching fails for a requested hunk."""

    def __init__(self, path: str, hunk_index: int, reason: str = "no matching hunk in the current diff"):
        super().__init__(f"{path}:{hunk_index}: {reason}", path=path, hunk_id=f"{path}:{hunk_index}")
        self.hunk_index = hunk_index


class AmbiguousHunkMatchError(NoMatchingHunkError):
    """Raised under strict matching when more than one current hunk matches."""

    def __init__(self, path: str, hunk_index: int, candidates: list[int]):
        super().__init__(
            path,
            hunk_index,
            reason=f"ambiguous match, current hunks {candidates} have identical changes",
        )
        self.candidates = candidates


class EmptySelectionError(StagingError):
    """Raised when a hunk-mode commit selects no added or deleted lines."""

    def __init__(self, path: str):
        super().__init__(f"No added or deleted lines selected for {path}", path=path)


class ReconstructionError(StagingError):
    """Raised when hunks cannot be replayed onto the indexed content."""

    pass


class BackendError(StagingError):
    """Raised when git fails while staging a path."""

    pass


class CommitExecutionError(StagingError):
    """Raised when a commit cannot be created after staging."""

    pass
