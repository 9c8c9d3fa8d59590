"""Tests for hunkstage.compose.capture module."""

from hunkstage.compose import (
    DiffLinePosition,
    DiffLineType,
    capture_file_hunks,
    capture_snapshot,
)
from hunkstage.git import DiffStrategy


class TestCaptureSnapshot:
    """Tests for capture_snapshot function."""

    def test_clean_repo_is_empty(self, temp_repo):
        """Test that a clean working tree has nothing to capture."""
        assert capture_snapshot(temp_repo).is_empty

    def test_modified_file(self, temp_repo):
        """Test capturing a tracked modification."""
        (temp_repo / "README.md").write_text("# Test Repo\nmore\n")

        snapshot = capture_snapshot(temp_repo)

        file_diff = snapshot.get_file("README.md")
        assert not file_diff.stages_whole
        assert len(file_diff.hunks) == 1
        assert [ln.content for ln in file_diff.hunks[0].changes()] == ["more"]
        assert snapshot.strategy is DiffStrategy.WORKDIR

    def test_untracked_file(self, temp_repo):
        """Test that an untracked file becomes one all-addition hunk."""
        (temp_repo / "new.txt").write_text("x\ny\n")

        snapshot = capture_snapshot(temp_repo)

        file_diff = snapshot.get_file("new.txt")
        assert file_diff.untracked
        assert file_diff.is_new_file
        hunk = file_diff.hunks[0]
        assert (hunk.header.old_start, hunk.header.old_lines) == (0, 0)
        assert (hunk.header.new_start, hunk.header.new_lines) == (1, 2)
        assert [ln.line_type for ln in hunk.lines] == [DiffLineType.ADD, DiffLineType.ADD]
        assert [ln.position for ln in hunk.lines] == [
            DiffLinePosition(new_lineno=1),
            DiffLinePosition(new_lineno=2),
        ]

    def test_empty_untracked_file(self, temp_repo):
        """Test that an empty untracked file is kept without hunks."""
        (temp_repo / "empty.txt").write_text("")

        snapshot = capture_snapshot(temp_repo)

        assert snapshot.get_file("empty.txt").hunks == []
        assert snapshot.unapplied_files() == ["empty.txt"]

    def test_binary_untracked_file(self, temp_repo):
        """Test that an untracked binary file has no hunks and a warning."""
        (temp_repo / "blob.bin").write_bytes(b"\x00\x01\x02")

        snapshot = capture_snapshot(temp_repo)

        file_diff = snapshot.get_file("blob.bin")
        assert file_diff.is_binary
        assert file_diff.hunks == []
        assert any("blob.bin" in w for w in snapshot.warnings)

    def test_untracked_can_be_left_out(self, temp_repo):
        """Test include_untracked=False."""
        (temp_repo / "new.txt").write_text("x\n")

        assert capture_snapshot(temp_repo, include_untracked=False).is_empty

    def test_staged_strategy(self, temp_repo, git):
        """Test that the staged strategy shows the index only."""
        (temp_repo / "README.md").write_text("# Test Repo\nstaged\n")
        git(temp_repo, "add", "README.md")
        (temp_repo / "new.txt").write_text("x\n")

        snapshot = capture_snapshot(temp_repo, strategy=DiffStrategy.STAGED)

        assert snapshot.paths() == ["README.md"]

    def test_unstaged_strategy(self, temp_repo, git):
        """Test that the unstaged strategy leaves staged edits out."""
        (temp_repo / "README.md").write_text("# Test Repo\nstaged\n")
        git(temp_repo, "add", "README.md")

        snapshot = capture_snapshot(temp_repo, strategy=DiffStrategy.UNSTAGED)

        assert snapshot.is_empty

    def test_deleted_file(self, temp_repo):
        """Test that a removed tracked file is flagged."""
        (temp_repo / "README.md").unlink()

        file_diff = capture_snapshot(temp_repo).get_file("README.md")

        assert file_diff.is_deleted_file
        assert file_diff.stages_whole

    def test_ignore_patterns(self, temp_repo):
        """Test that ignored paths are left out."""
        (temp_repo / "poetry.lock").write_text("lock\n")
        (temp_repo / "new.txt").write_text("x\n")

        snapshot = capture_snapshot(temp_repo, ignore_patterns=["*.lock"])

        assert snapshot.paths() == ["new.txt"]

    def test_restricted_to_paths(self, temp_repo):
        """Test capturing a subset of paths."""
        (temp_repo / "README.md").write_text("changed\n")
        (temp_repo / "new.txt").write_text("x\n")

        snapshot = capture_snapshot(temp_repo, paths=["new.txt"])

        assert snapshot.paths() == ["new.txt"]

    def test_context_lines(self, temp_repo, git):
        """Test that the context width decides hunk boundaries."""
        (temp_repo / "a.txt").write_text("".join(f"{i}\n" for i in range(1, 11)))
        git(temp_repo, "add", "a.txt")
        git(temp_repo, "commit", "-m", "Add a.txt")
        (temp_repo / "a.txt").write_text(
            "".join(f"{i}\n" for i in range(1, 11)).replace("2\n", "two\n").replace("6\n", "six\n")
        )

        assert len(capture_snapshot(temp_repo, context_lines=3).get_file("a.txt").hunks) == 1
        assert len(capture_snapshot(temp_repo, context_lines=0).get_file("a.txt").hunks) == 2


class TestCaptureFileHunks:
    """Tests for capture_file_hunks function."""

    def test_diffs_against_index(self, temp_repo, git):
        """Test that hunks are derived relative to the index."""
        (temp_repo / "README.md").write_text("# Test Repo\nstaged\n")
        git(temp_repo, "add", "README.md")
        (temp_repo / "README.md").write_text("# Test Repo\nstaged\nunstaged\n")

        hunks = capture_file_hunks(temp_repo, "README.md")

        assert len(hunks) == 1
        assert [ln.content for ln in hunks[0].changes()] == ["unstaged"]

    def test_unchanged_file(self, temp_repo):
        """Test that an unchanged file has no hunks."""
        assert capture_file_hunks(temp_repo, "README.md") == []
