"""Tests for hunkstage.compose.inventory module."""

from hunkstage.compose import (
    build_hunk_inventory,
    format_inventory,
    parse_unified_diff,
    DiffSnapshot,
)


def _snapshot(diff):
    files, warnings = parse_unified_diff(diff)
    return DiffSnapshot(files=files, warnings=warnings)


class TestBuildHunkInventory:
    """Tests for build_hunk_inventory function."""

    def test_keys_are_hunk_ids(self, sample_diff):
        """Test that every hunk is keyed by path and index."""
        inventory = build_hunk_inventory(_snapshot(sample_diff))

        assert list(inventory) == ["src/main.py:0", "src/main.py:1", "src/new.py:0", "old.txt:0"]
        assert inventory["src/main.py:1"].index == 1


class TestFormatInventory:
    """Tests for format_inventory function."""

    def test_lists_files_and_hunks(self, sample_diff):
        """Test the listing layout."""
        output = format_inventory(_snapshot(sample_diff))

        assert output.startswith("[HUNK INVENTORY]")
        assert "File: src/main.py" in output
        assert "Hunk src/main.py:1:" in output
        assert "@@ -20,3 +21,3 @@ def helper():" in output
        assert "+    y = 3" in output

    def test_notes_file_kinds(self, sample_diff):
        """Test the notes for new, deleted and binary files."""
        output = format_inventory(_snapshot(sample_diff))

        assert "(new file)" in output
        assert "(deleted file)" in output
        assert "(binary, staged as a whole)" in output
        assert "Warning: Binary file cannot be split into hunks: logo.png" in output

    def test_snippet_limit(self, sample_diff):
        """Test that long hunks are shortened."""
        output = format_inventory(_snapshot(sample_diff), max_snippet_lines=1)
        assert "more lines" in output
