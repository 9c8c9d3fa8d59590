"""Tests for hunkstage.compose.validation module."""

import pytest

from hunkstage.compose import (
    CommitPlan,
    DiffLine,
    DiffLinePosition,
    DiffLineType,
    DiffSnapshot,
    FileDiff,
    Hunk,
    HunkHeader,
    PlannedCommit,
    StagingStrategy,
    validate_plan,
)
from hunkstage.git import DiffStrategy


def _hunk(index, text):
    return Hunk(
        index=index,
        header=HunkHeader(index + 1, 0, index + 1, 1),
        lines=[DiffLine(text, DiffLineType.ADD, DiffLinePosition(new_lineno=index + 1))],
    )


@pytest.fixture
def snapshot():
    """A modified file with two hunks, an untracked file and a binary file."""
    return DiffSnapshot(
        files=[
            FileDiff(path="a.py", hunks=[_hunk(0, "x"), _hunk(1, "y")]),
            FileDiff(path="new.py", hunks=[_hunk(0, "z")], untracked=True, is_new_file=True),
            FileDiff(path="logo.png", is_binary=True),
        ]
    )


def _plan(*hunk_id_lists):
    return CommitPlan(
        commits=[PlannedCommit(message=f"Commit {i}", hunk_ids=ids) for i, ids in enumerate(hunk_id_lists, 1)]
    )


def _file_plan(*file_lists):
    return CommitPlan(
        commits=[PlannedCommit(message=f"Commit {i}", files=files) for i, files in enumerate(file_lists, 1)]
    )


class TestValidateHunkPlan:
    """Tests for validate_plan with the hunks strategy."""

    def test_valid_plan(self, snapshot):
        """Test that a plan covering everything is valid."""
        plan = _plan(["a.py:0", "new.py:0"], ["a.py:1", "logo.png:0"])

        assert validate_plan(plan, snapshot, StagingStrategy.HUNKS) == []
        assert plan.warnings == []

    def test_empty_plan(self, snapshot):
        """Test that a plan needs commits."""
        assert "Plan has no commits" in validate_plan(CommitPlan(), snapshot, StagingStrategy.HUNKS)

    def test_commit_without_hunks(self, snapshot):
        """Test that every commit needs hunks."""
        errors = validate_plan(_plan(["a.py:0"], []), snapshot, StagingStrategy.HUNKS)
        assert "Commit 2 has no hunks" in errors

    def test_invalid_hunk_id(self, snapshot):
        """Test that malformed ids are reported."""
        errors = validate_plan(_plan(["a.py"]), snapshot, StagingStrategy.HUNKS)
        assert any("Invalid hunk id" in e for e in errors)

    def test_non_ascii_digit_index(self, snapshot):
        """Test that only ASCII digits form an index."""
        errors = validate_plan(_plan(["a.py:\u00b2", "a.py:\u0661"]), snapshot, StagingStrategy.HUNKS)
        assert len([e for e in errors if "Invalid hunk id" in e]) == 2

    def test_unknown_file(self, snapshot):
        """Test that ids of uncaptured files are reported."""
        errors = validate_plan(_plan(["b.py:0"]), snapshot, StagingStrategy.HUNKS)
        assert "Commit 1 references unknown file: b.py" in errors

    def test_unknown_hunk(self, snapshot):
        """Test that out-of-range indices are reported."""
        errors = validate_plan(_plan(["a.py:7"]), snapshot, StagingStrategy.HUNKS)
        assert "Commit 1 references unknown hunk: a.py:7" in errors

    def test_duplicate_hunk(self, snapshot):
        """Test that a hunk may be claimed once."""
        errors = validate_plan(_plan(["a.py:0"], ["a.py:0"]), snapshot, StagingStrategy.HUNKS)
        assert "Hunk a.py:0 is used in multiple commits" in errors

    def test_whole_file_in_two_commits(self, snapshot):
        """Test that a whole-file change cannot be split between commits."""
        errors = validate_plan(_plan(["new.py:0"], ["new.py:0"]), snapshot, StagingStrategy.HUNKS)
        assert "File new.py is used in multiple commits" in errors

    def test_files_in_hunk_mode(self, snapshot):
        """Test that file lists are rejected in hunk mode."""
        plan = CommitPlan(commits=[PlannedCommit(message="m", files=["a.py"], hunk_ids=["a.py:0"])])
        errors = validate_plan(plan, snapshot, StagingStrategy.HUNKS)
        assert any("lists files" in e for e in errors)

    def test_unassigned_changes_are_warnings(self, snapshot):
        """Test that leaving changes out is allowed but noted."""
        plan = _plan(["a.py:0"])

        assert validate_plan(plan, snapshot, StagingStrategy.HUNKS) == []
        assert len(plan.warnings) == 1
        assert "a.py:1" in plan.warnings[0]
        assert "new.py:0" in plan.warnings[0]
        assert "logo.png" in plan.warnings[0]

    def test_staged_snapshot(self, snapshot):
        """Test that staged snapshots cannot be split."""
        snapshot.strategy = DiffStrategy.STAGED
        errors = validate_plan(_plan(["a.py:0"]), snapshot, StagingStrategy.HUNKS)
        assert any("staged-only" in e for e in errors)


class TestValidateFilePlan:
    """Tests for validate_plan with the whole-file strategies."""

    def test_valid_atomic_plan(self, snapshot):
        """Test a plan grouping files."""
        plan = _file_plan(["a.py", "new.py"], ["logo.png"])
        assert validate_plan(plan, snapshot, StagingStrategy.ATOMIC_COMMITS) == []

    def test_hunk_ids_rejected(self, snapshot):
        """Test that hunk ids are rejected in file modes."""
        plan = CommitPlan(commits=[PlannedCommit(message="m", hunk_ids=["a.py:0"])])
        errors = validate_plan(plan, snapshot, StagingStrategy.ATOMIC_COMMITS)
        assert any("lists hunk ids" in e for e in errors)
        assert "Commit 1 has no files" in errors

    def test_one_file_per_commit(self, snapshot):
        """Test that the one-file strategy allows a single path per commit."""
        errors = validate_plan(_file_plan(["a.py", "new.py"]), snapshot, StagingStrategy.ONE_FILE_PER_COMMIT)
        assert "Commit 1 lists 2 files, expected one" in errors

    def test_duplicate_and_unknown_files(self, snapshot):
        """Test path bookkeeping across commits."""
        errors = validate_plan(_file_plan(["a.py"], ["a.py", "ghost.py"]), snapshot, StagingStrategy.ATOMIC_COMMITS)
        assert "File a.py is used in multiple commits" in errors
        assert "Commit 2 references unknown file: ghost.py" in errors

    def test_all_files_single_commit(self, snapshot):
        """Test that the all-files strategy takes exactly one commit."""
        assert validate_plan(_file_plan([]), snapshot, StagingStrategy.ALL_FILES_ONE_COMMIT) == []
        errors = validate_plan(_file_plan([], []), snapshot, StagingStrategy.ALL_FILES_ONE_COMMIT)
        assert any("exactly one" in e for e in errors)
