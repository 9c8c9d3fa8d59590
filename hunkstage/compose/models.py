"""Data models for hunkstage compose module.

Contains:
- DiffLineType, DiffLinePosition, DiffLine: A single row of a hunk
- HunkHeader, Hunk: A contiguous block of a diff
- FileDiff: Diff for a single file containing multiple hunks
- DiffSnapshot: The captured snapshot database consumed by a plan run
- HunkId: Stable "<path>:<index>" identifier of a captured hunk
- StagingStrategy: How the commits of a plan are staged
- PlannedCommit, CommitPlan: The commit plan handed to the engine
- CommitState, CommitResult, PlanResult: Outcome of applying a plan
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator

from hunkstage.compose.exceptions import InvalidHunkIdError, StagingError
from hunkstage.git.diff import DiffStrategy


class DiffLineType(Enum):
    """Origin of a diff line."""

    UNCHANGED = " "
    HEADER = "@"
    ADD = "+"
    DELETE = "-"
    EOF_NEWLINE = "\\"  # "\ No newline at end of file"

    @property
    def is_change(self) -> bool:
        return self in (DiffLineType.ADD, DiffLineType.DELETE)


@dataclass(frozen=True)
class DiffLinePosition:
    """Line numbers of a diff line on the old and new side.

    A side is None when the line does not exist there: an added line has no
    old_lineno, a deleted line has no new_lineno.
    """

    old_lineno: Optional[int] = None
    new_lineno: Optional[int] = None


@dataclass
class DiffLine:
    """A single line of a hunk."""

    content: str  # trailing newline / carriage return trimmed
    line_type: DiffLineType
    position: DiffLinePosition = field(default_factory=DiffLinePosition)


@dataclass(frozen=True)
class HunkHeader:
    """The four integers anchoring a hunk, plus git's section heading."""

    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    section: str = ""

    def __str__(self) -> str:
        header = f"@@ -{self.old_start},{self.old_lines} +{self.new_start},{self.new_lines} @@"
        return f"{header} {self.section}" if self.section else header


@dataclass
class Hunk:
    """A contiguous block of a diff."""

    index: int  # zero-based position within the file at capture time
    header: HunkHeader
    lines: list[DiffLine] = field(default_factory=list)

    def changes(self) -> list[DiffLine]:
        """Added and deleted lines, in order."""
        return [ln for ln in self.lines if ln.line_type.is_change]

    def change_key(self) -> list[tuple[DiffLineType, str]]:
        """The sequence two hunks must share to be considered the same change.

        Context lines are left out because they can shift between captures.
        """
        return [(ln.line_type, ln.content) for ln in self.changes()]

    def positions(self) -> set[DiffLinePosition]:
        """Positions of the added and deleted lines."""
        return {ln.position for ln in self.changes()}

    def snippet(self, max_lines: int = 5) -> str:
        """Get a snippet of the hunk content for display."""
        content_lines = [f"{ln.line_type.value}{ln.content}" for ln in self.changes()]
        if len(content_lines) <= max_lines:
            return "\n".join(content_lines)
        return "\n".join(content_lines[:max_lines]) + f"\n... ({len(content_lines) - max_lines} more lines)"


@dataclass
class FileDiff:
    """Diff for a single file containing multiple hunks."""

    path: str
    hunks: list[Hunk] = field(default_factory=list)
    untracked: bool = False  # no prior version, diffed against an empty buffer
    is_new_file: bool = False
    is_deleted_file: bool = False
    is_binary: bool = False

    @property
    def line_count(self) -> int:
        return sum(len(h.lines) for h in self.hunks)

    @property
    def stages_whole(self) -> bool:
        """Whether hunk selection is meaningless and the path is staged whole.

        True for files with no prior version, files being removed and binary
        files.
        """
        return self.untracked or self.is_new_file or self.is_deleted_file or self.is_binary

    def get_hunk(self, index: int) -> Optional[Hunk]:
        for hunk in self.hunks:
            if hunk.index == index:
                return hunk
        return None


@dataclass(frozen=True)
class HunkId:
    """Stable identifier of a hunk: "<path>:<index>"."""

    path: str
    index: int

    def __str__(self) -> str:
        return f"{self.path}:{self.index}"

    @classmethod
    def parse(cls, value: str) -> "HunkId":
        """Parse a "<path>:<index>" string.

        The path may itself contain colons; the index follows the last one.

        Raises:
            InvalidHunkIdError: If the separator, path or index is malformed.
        """
        path, sep, index = value.rpartition(":")
        if not sep:
            raise InvalidHunkIdError(value, "missing ':' separator")
        if not path:
            raise InvalidHunkIdError(value, "missing path")
        if not (index.isascii() and index.isdigit()):
            raise InvalidHunkIdError(value, f"index {index!r} is not a non-negative integer")
        return cls(path=path, index=int(index))


@dataclass
class DiffSnapshot:
    """The captured changes of one run, consumed as commits are applied.

    Paths are unique. Hunks keep their capture-time index after others are
    removed, so "<path>:<index>" ids stay valid for the whole run.
    """

    files: list[FileDiff] = field(default_factory=list)
    strategy: DiffStrategy = DiffStrategy.WORKDIR
    warnings: list[str] = field(default_factory=list)

    def __post_init__(self):
        seen: set[str] = set()
        for file_diff in self.files:
            if file_diff.path in seen:
                raise ValueError(f"Duplicate path in snapshot: {file_diff.path}")
            seen.add(file_diff.path)

    @property
    def is_empty(self) -> bool:
        return not self.files

    def paths(self) -> list[str]:
        return [f.path for f in self.files]

    def get_file(self, path: str) -> Optional[FileDiff]:
        for file_diff in self.files:
            if file_diff.path == path:
                return file_diff
        return None

    def remove_file(self, path: str) -> Optional[FileDiff]:
        """Drop a whole file from the snapshot and return it."""
        for i, file_diff in enumerate(self.files):
            if file_diff.path == path:
                return self.files.pop(i)
        return None

    def consume_hunks(self, path: str, indices: set[int]) -> None:
        """Remove consumed hunks; the file goes once none of its hunks remain."""
        file_diff = self.get_file(path)
        if file_diff is None:
            return
        file_diff.hunks = [h for h in file_diff.hunks if h.index not in indices]
        if not file_diff.hunks:
            self.remove_file(path)

    def remaining_hunk_ids(self) -> list[HunkId]:
        return [HunkId(f.path, h.index) for f in self.files for h in f.hunks]

    def unapplied_files(self) -> list[str]:
        """Remaining files that have no addressable hunks (binary, mode-only)."""
        return [f.path for f in self.files if not f.hunks]


class StagingStrategy(Enum):
    """How the commits of a plan are staged."""

    HUNKS = "hunks"
    ATOMIC_COMMITS = "atomic"  # a group of whole files per commit
    ONE_FILE_PER_COMMIT = "one-file"
    ALL_FILES_ONE_COMMIT = "all-files"

    @property
    def stages_files(self) -> bool:
        return self in (StagingStrategy.ATOMIC_COMMITS, StagingStrategy.ONE_FILE_PER_COMMIT)


class PlannedCommit(BaseModel):
    """A single commit in the plan."""

    message: str
    files: list[str] = []
    hunk_ids: list[str] = []

    @field_validator("message")
    @classmethod
    def message_not_empty(cls, v: str) -> str:
        """Messages arrive fully composed and are kept as given."""
        if not v.strip():
            raise ValueError("commit message must not be empty")
        return v


class CommitPlan(BaseModel):
    """The ordered list of commits to create."""

    warnings: list[str] = []
    commits: list[PlannedCommit] = []


class CommitState(Enum):
    """Lifecycle of one commit while a plan is applied."""

    PENDING = "pending"
    STAGED = "staged"
    COMMITTED = "committed"
    FAILED = "failed"


@dataclass
class CommitResult:
    """Outcome of applying one planned commit."""

    number: int  # 1-based position in the plan
    message: str
    state: CommitState = CommitState.PENDING
    commit_id: Optional[str] = None
    error: Optional[StagingError] = None

    @property
    def succeeded(self) -> bool:
        return self.state is CommitState.COMMITTED

    @property
    def path(self) -> Optional[str]:
        return self.error.path if self.error else None

    @property
    def hunk_id(self) -> Optional[str]:
        return self.error.hunk_id if self.error else None


@dataclass
class PlanResult:
    """Outcome of applying a whole plan."""

    results: list[CommitResult] = field(default_factory=list)
    leftovers: list[HunkId] = field(default_factory=list)
    unapplied_files: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return all(r.succeeded for r in self.results)

    @property
    def commit_ids(self) -> list[str]:
        return [r.commit_id for r in self.results if r.commit_id]
