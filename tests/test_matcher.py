"""Tests for hunkstage.compose.matcher module."""

import pytest

from hunkstage.compose import (
    AmbiguousHunkMatchError,
    DiffLine,
    DiffLinePosition,
    DiffLineType,
    Hunk,
    HunkHeader,
    NoMatchingHunkError,
    match_hunk,
    match_hunks,
)


def _hunk(index, old_start, *rows):
    """Build a hunk from " x", "-x" and "+x" rows starting at old_start."""
    lines = []
    old_no = new_no = old_start
    for row in rows:
        tag, text = row[0], row[1:]
        if tag == "+":
            lines.append(DiffLine(text, DiffLineType.ADD, DiffLinePosition(new_lineno=new_no)))
            new_no += 1
        elif tag == "-":
            lines.append(DiffLine(text, DiffLineType.DELETE, DiffLinePosition(old_lineno=old_no)))
            old_no += 1
        else:
            lines.append(DiffLine(text, DiffLineType.UNCHANGED, DiffLinePosition(old_no, new_no)))
            old_no += 1
            new_no += 1
    header = HunkHeader(old_start, old_no - old_start, old_start, new_no - old_start)
    return Hunk(index=index, header=header, lines=lines)


class TestMatchHunk:
    """Tests for match_hunk function."""

    def test_matches_despite_moved_lines(self):
        """Test that line numbers and context do not take part in matching."""
        captured = _hunk(0, 40, " ctx", "-old", "+new")
        current = [_hunk(0, 2, " other", "-x", "+y"), _hunk(1, 12, " different", "-old", "+new")]

        assert match_hunk(captured, current, set()) == 1

    def test_first_match_wins(self):
        """Test that the earliest identical candidate is chosen."""
        captured = _hunk(0, 1, "+dup")
        current = [_hunk(0, 1, "+dup"), _hunk(1, 9, "+dup")]

        assert match_hunk(captured, current, set()) == 0

    def test_skips_already_used(self):
        """Test that a used candidate is not matched again."""
        captured = _hunk(0, 1, "+dup")
        current = [_hunk(0, 1, "+dup"), _hunk(1, 9, "+dup")]

        assert match_hunk(captured, current, {0}) == 1
        assert match_hunk(captured, current, {0, 1}) is None

    def test_no_match(self):
        """Test that differing changes do not match."""
        assert match_hunk(_hunk(0, 1, "+a"), [_hunk(0, 1, "+b")], set()) is None


class TestMatchHunks:
    """Tests for match_hunks function."""

    def test_identical_hunks_get_distinct_candidates(self):
        """Test that two identical requests use two different candidates."""
        requested = [_hunk(0, 1, "+dup"), _hunk(3, 9, "+dup")]
        current = [_hunk(0, 1, "+dup"), _hunk(1, 9, "+dup")]

        assert match_hunks("a.py", requested, current) == [0, 1]

    def test_missing_hunk_raises(self):
        """Test the error for a hunk whose content changed."""
        with pytest.raises(NoMatchingHunkError) as exc_info:
            match_hunks("a.py", [_hunk(2, 1, "+gone")], [_hunk(0, 1, "+other")])

        assert exc_info.value.path == "a.py"
        assert exc_info.value.hunk_id == "a.py:2"

    def test_strict_rejects_ambiguous_match(self):
        """Test that strict matching refuses to guess between duplicates."""
        requested = [_hunk(0, 1, "+dup")]
        current = [_hunk(0, 1, "+dup"), _hunk(1, 9, "+dup")]

        with pytest.raises(AmbiguousHunkMatchError) as exc_info:
            match_hunks("a.py", requested, current, strict=True)
        assert exc_info.value.candidates == [0, 1]

    def test_strict_accepts_when_all_duplicates_requested(self):
        """Test that strict matching is fine when every duplicate is wanted."""
        requested = [_hunk(0, 1, "+dup"), _hunk(1, 9, "+dup")]
        current = [_hunk(0, 1, "+dup"), _hunk(1, 9, "+dup")]

        assert match_hunks("a.py", requested, current, strict=True) == [0, 1]
