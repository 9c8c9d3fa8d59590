"""Executor utilities for hunkstage compose module.

Contains:
- IndexSnapshot: Saved index tree used to roll back a failed commit
- create_index_snapshot: Record the current index as a tree
- restore_index_snapshot: Put a recorded index tree back
- StagingCoordinator: Applies a commit plan against the live repository
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from hunkstage.compose.capture import capture_file_hunks
from hunkstage.compose.exceptions import (
    BackendError,
    CommitExecutionError,
    EmptySelectionError,
    NoMatchingHunkError,
    ReconstructionError,
    StagingError,
    UnknownPathError,
)
from hunkstage.compose.matcher import match_hunks
from hunkstage.compose.models import (
    CommitPlan,
    CommitResult,
    CommitState,
    DiffLinePosition,
    DiffSnapshot,
    FileDiff,
    HunkId,
    PlannedCommit,
    PlanResult,
    StagingStrategy,
)
from hunkstage.compose.reconstruct import detect_newline, reconstruct
from hunkstage.compose.validation import PlanValidationError
from hunkstage.git import (
    DEFAULT_CONTEXT_LINES,
    DiffStrategy,
    GitError,
    create_commit,
    get_empty_tree,
    get_head_tree,
    get_index_mode,
    read_indexed_blob,
    read_tree,
    stage_path,
    update_index_entry,
    write_blob,
    write_tree,
)

logger = logging.getLogger(__name__)


@dataclass
class IndexSnapshot:
    """Snapshot of the index before a commit attempt."""

    tree: str


def create_index_snapshot(repo_root: Path) -> IndexSnapshot:
    """Record the current index as a tree object.

    Args:
        repo_root: Repository root path

    Returns:
        IndexSnapshot holding the tree id
    """
    return IndexSnapshot(tree=write_tree(repo_root))


def restore_index_snapshot(repo_root: Path, snapshot: IndexSnapshot) -> None:
    """Replace the index with a recorded tree; the working tree is untouched.

    Args:
        repo_root: Repository root path
        snapshot: The snapshot to restore from
    """
    read_tree(repo_root, snapshot.tree)


class StagingCoordinator:
    """Applies the commits of a plan, in order, against the live repository.

    The coordinator is the sole owner of the snapshot for one plan run. Hunks
    and files are removed from it as the commits that stage them are created,
    so a later commit cannot reuse them and whatever remains at the end is
    reported as not applied.

    A failure aborts the current commit only. Index writes it already made
    stay in place unless rollback_on_failure is set.
    """

    def __init__(
        self,
        repo_root: Path,
        snapshot: DiffSnapshot,
        strategy: StagingStrategy = StagingStrategy.HUNKS,
        context_lines: int = DEFAULT_CONTEXT_LINES,
        rollback_on_failure: bool = False,
        strict_matching: bool = False,
    ):
        if snapshot.strategy is DiffStrategy.STAGED and strategy is not StagingStrategy.ALL_FILES_ONE_COMMIT:
            raise PlanValidationError(
                "A staged-only snapshot can only be committed with the all-files strategy"
            )
        self.repo_root = repo_root
        self.strategy = strategy
        self.context_lines = context_lines
        self.rollback_on_failure = rollback_on_failure
        self.strict_matching = strict_matching
        self._snapshot = snapshot

    @property
    def snapshot(self) -> DiffSnapshot:
        return self._snapshot

    def leftovers(self) -> list[HunkId]:
        """Hunks no commit has applied yet."""
        return self._snapshot.remaining_hunk_ids()

    def run(self, plan: CommitPlan, stop_on_error: bool = True) -> PlanResult:
        """Apply every commit of the plan, strictly in plan order.

        Args:
            plan: The commit plan
            stop_on_error: Stop at the first failed commit; later commits
                usually build on the earlier ones.

        Returns:
            PlanResult with one CommitResult per attempted commit and the
            hunks and files still unapplied.
        """
        result = PlanResult()

        for number, commit in enumerate(plan.commits, start=1):
            commit_result = self.apply_commit(commit, number)
            result.results.append(commit_result)
            if not commit_result.succeeded and stop_on_error:
                logger.warning("Stopping after failed commit %d", number)
                break

        result.leftovers = self.leftovers()
        result.unapplied_files = self._snapshot.unapplied_files()
        if result.leftovers or result.unapplied_files:
            logger.info(
                "%d hunk(s) and %d file(s) not applied",
                len(result.leftovers),
                len(result.unapplied_files),
            )
        return result

    def apply_commit(self, commit: PlannedCommit, number: int = 1) -> CommitResult:
        """Stage one planned commit and create it.

        Args:
            commit: The planned commit
            number: 1-based position of the commit in the plan

        Returns:
            CommitResult; on failure its error names the path and hunk involved
        """
        result = CommitResult(number=number, message=commit.message)
        saved = None

        try:
            if self.rollback_on_failure:
                saved = self._guard(lambda: create_index_snapshot(self.repo_root))

            pending = self._stage(commit)
            result.state = CommitState.STAGED
            logger.debug("Commit %d staged", number)

            result.commit_id = self._commit(commit, number)
            for consume in pending:
                consume()
            result.state = CommitState.COMMITTED
            logger.info("Created commit %d: %s", number, result.commit_id)
        except StagingError as e:
            result.state = CommitState.FAILED
            result.error = e
            logger.error("Commit %d failed: %s", number, e)
            if saved is not None:
                self._rollback(saved)

        return result

    def _rollback(self, saved: IndexSnapshot) -> None:
        try:
            restore_index_snapshot(self.repo_root, saved)
            logger.info("Restored index to %s", saved.tree)
        except GitError as e:
            logger.error("Could not restore the index: %s", e)

    def _guard(self, operation: Callable, path: Optional[str] = None):
        """Run a git operation, re-raising GitError as BackendError."""
        try:
            return operation()
        except GitError as e:
            raise BackendError(str(e), path=path) from e

    def _commit(self, commit: PlannedCommit, number: int) -> str:
        try:
            head_tree = get_head_tree(self.repo_root) or get_empty_tree(self.repo_root)
            if write_tree(self.repo_root) == head_tree:
                raise CommitExecutionError(f"No changes staged for commit {number}")
            return create_commit(self.repo_root, commit.message)
        except GitError as e:
            raise CommitExecutionError(f"Failed to create commit {number}: {e}") from e

    def _stage(self, commit: PlannedCommit) -> list[Callable[[], None]]:
        """Stage the commit's changes.

        Returns:
            Snapshot updates to apply once the commit exists.
        """
        if self.strategy is StagingStrategy.ALL_FILES_ONE_COMMIT:
            return self._stage_everything()
        if self.strategy.stages_files:
            return [self._stage_whole_file(path) for path in commit.files]
        return self._stage_hunk_ids(commit.hunk_ids)

    def _stage_everything(self) -> list[Callable[[], None]]:
        # A staged-only snapshot is committed exactly as it sits in the index
        if self._snapshot.strategy is not DiffStrategy.STAGED:
            for path in self._snapshot.paths():
                self._guard(lambda: stage_path(self.repo_root, path), path=path)
        return [self._snapshot.files.clear]

    def _stage_whole_file(self, path: str) -> Callable[[], None]:
        if self._snapshot.get_file(path) is None:
            raise UnknownPathError(path)
        self._guard(lambda: stage_path(self.repo_root, path), path=path)
        logger.debug("Staged whole file %s", path)
        return lambda: self._snapshot.remove_file(path)

    def _stage_hunk_ids(self, raw_ids: list[str]) -> list[Callable[[], None]]:
        by_path: dict[str, list[int]] = {}
        for raw_id in raw_ids:
            hunk_id = HunkId.parse(raw_id)
            indices = by_path.setdefault(hunk_id.path, [])
            if hunk_id.index not in indices:
                indices.append(hunk_id.index)

        pending = []
        for path, indices in by_path.items():
            file_diff = self._snapshot.get_file(path)
            if file_diff is None:
                raise UnknownPathError(path)
            if file_diff.stages_whole:
                pending.append(self._stage_whole_file(path))
            else:
                pending.append(self._stage_hunks(file_diff, indices))
        return pending

    def _stage_hunks(self, file_diff: FileDiff, indices: list[int]) -> Callable[[], None]:
        """Stage only the lines of the requested captured hunks of one file."""
        path = file_diff.path

        requested = []
        for index in indices:
            hunk = file_diff.get_hunk(index)
            if hunk is None:
                raise NoMatchingHunkError(path, index, reason="hunk was not captured or is already committed")
            requested.append(hunk)

        current = self._guard(
            lambda: capture_file_hunks(self.repo_root, path, self.context_lines), path=path
        )
        matched = match_hunks(path, requested, current, strict=self.strict_matching)

        selected: set[DiffLinePosition] = set()
        for i in matched:
            selected |= current[i].positions()
        if not selected:
            raise EmptySelectionError(path)

        mode = self._guard(lambda: get_index_mode(self.repo_root, path), path=path)
        if mode is None:
            raise BackendError(f"{path} has no index entry; only indexed files support line staging", path=path)

        raw = self._guard(lambda: read_indexed_blob(self.repo_root, path), path=path)
        try:
            old_content = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise ReconstructionError(f"Indexed content of {path} is not UTF-8 text", path=path)

        try:
            new_content = reconstruct(old_content, current, selected, newline=detect_newline(old_content))
        except ReconstructionError as e:
            e.path = e.path or path
            raise

        blob_id = self._guard(lambda: write_blob(self.repo_root, new_content.encode("utf-8")), path=path)
        self._guard(lambda: update_index_entry(self.repo_root, path, blob_id, mode), path=path)
        logger.debug("Staged %d line(s) of %s from hunks %s", len(selected), path, indices)

        consumed = set(indices)
        return lambda: self._snapshot.consume_hunks(path, consumed)
