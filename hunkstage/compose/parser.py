"""Diff parser for hunkstage compose module.

Contains functions for parsing unified diff output:
- parse_unified_diff: Parse unified diff output from git diff
- parse_hunk_header: Parse a "@@ -a,b +c,d @@" line
- _parse_file_block: Parse a single file block from the diff
- _parse_hunks: Parse hunks, numbering every line on the old and new side
"""

import re
from typing import Optional

from hunkstage.compose.models import (
    DiffLine,
    DiffLinePosition,
    DiffLineType,
    FileDiff,
    Hunk,
    HunkHeader,
)

# Format: @@ -old_start,old_len +new_start,new_len @@ optional section heading
_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@ ?(.*)$")
_DIFF_GIT_RE = re.compile(r"^diff --git a/(.*) b/(.*)$")


def parse_unified_diff(diff_output: str) -> tuple[list[FileDiff], list[str]]:
    """Parse unified diff output from 'git diff'.

    Args:
        diff_output: Raw output from git diff

    Returns:
        Tuple of (list of FileDiff objects, list of warning messages)
    """
    files: list[FileDiff] = []
    warnings: list[str] = []

    if not diff_output.strip():
        return files, warnings

    # Each file starts with 'diff --git a/... b/...'
    file_blocks = re.split(r"(?=^diff --git )", diff_output, flags=re.MULTILINE)

    for block in file_blocks:
        if not block.startswith("diff --git"):
            continue

        file_diff = _parse_file_block(block.split("\n"), warnings)
        if file_diff:
            files.append(file_diff)

    return files, warnings


def parse_hunk_header(line: str) -> Optional[HunkHeader]:
    """Parse a hunk header line; omitted line counts default to 1."""
    match = _HUNK_HEADER_RE.match(line.rstrip("\r"))
    if not match:
        return None
    return HunkHeader(
        old_start=int(match.group(1)),
        old_lines=int(match.group(2)) if match.group(2) is not None else 1,
        new_start=int(match.group(3)),
        new_lines=int(match.group(4)) if match.group(4) is not None else 1,
        section=match.group(5).strip(),
    )


def _unquote_path(path: str) -> str:
    """Undo git's C-style quoting of unusual path names."""
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        # Octal escapes encode raw UTF-8 bytes
        return path[1:-1].encode("utf-8").decode("unicode_escape").encode(
            "latin-1"
        ).decode("utf-8", errors="replace")
    return path


def _strip_prefix(path: str, prefix: str) -> str:
    path = _unquote_path(path.rstrip("\r").rstrip("\t"))
    return path[len(prefix):] if path.startswith(prefix) else path


def _parse_file_block(lines: list[str], warnings: list[str]) -> Optional[FileDiff]:
    """Parse a single file block from the diff.

    Args:
        lines: Lines of the file block
        warnings: List to append warnings to

    Returns:
        FileDiff object or None if the block is not a file diff
    """
    if not lines or not lines[0].startswith("diff --git"):
        return None

    old_path: Optional[str] = None
    new_path: Optional[str] = None
    is_binary = False
    is_new_file = False
    is_deleted_file = False
    hunk_start_idx = len(lines)

    for i, line in enumerate(lines[1:], start=1):
        if line.startswith("@@"):
            hunk_start_idx = i
            break
        if line.startswith("new file mode"):
            is_new_file = True
        elif line.startswith("deleted file mode"):
            is_deleted_file = True
        elif line.startswith("--- "):
            if line[4:].rstrip("\r") != "/dev/null":
                old_path = _strip_prefix(line[4:], "a/")
        elif line.startswith("+++ "):
            if line[4:].rstrip("\r") != "/dev/null":
                new_path = _strip_prefix(line[4:], "b/")
        elif "GIT binary patch" in line or line.startswith("Binary files"):
            is_binary = True

    file_path = new_path or old_path or _path_from_diff_git(lines[0])
    if not file_path:
        warnings.append(f"Could not read file path from: {lines[0]}")
        return None

    if is_binary:
        warnings.append(f"Binary file cannot be split into hunks: {file_path}")
        return FileDiff(
            path=file_path,
            is_binary=True,
            is_new_file=is_new_file,
            is_deleted_file=is_deleted_file,
        )

    return FileDiff(
        path=file_path,
        hunks=_parse_hunks(lines[hunk_start_idx:]),
        is_new_file=is_new_file,
        is_deleted_file=is_deleted_file,
    )


def _path_from_diff_git(line: str) -> Optional[str]:
    """Fallback for blocks without ---/+++ lines (mode changes, empty files)."""
    line = line.rstrip("\r")
    quoted = re.match(r'^diff --git ("(?:[^"\\]|\\.)*"|\S+) ("(?:[^"\\]|\\.)*"|\S+)$', line)
    if quoted and (quoted.group(1).startswith('"') or quoted.group(2).startswith('"')):
        return _strip_prefix(quoted.group(2), "b/")
    match = _DIFF_GIT_RE.match(line)
    if not match:
        return None
    return match.group(2)


def _parse_hunks(lines: list[str]) -> list[Hunk]:
    """Parse hunks from the hunk portion of a file diff.

    Every line gets its old/new line numbers; a side is None when the line
    does not exist there. Hunk indices start at 0 for each file.

    Args:
        lines: Lines starting from first @@

    Returns:
        List of Hunk objects
    """
    hunks: list[Hunk] = []
    current: Optional[Hunk] = None
    old_no = new_no = 0
    old_left = new_left = 0

    for raw in lines:
        if raw.startswith("@@"):
            header = parse_hunk_header(raw)
            if header is None:
                current = None
                continue
            current = Hunk(index=len(hunks), header=header)
            hunks.append(current)
            old_no, new_no = header.old_start, header.new_start
            old_left, new_left = header.old_lines, header.new_lines
            continue

        if current is None:
            continue

        if raw.startswith("\\"):
            current.lines.append(DiffLine(content="", line_type=DiffLineType.EOF_NEWLINE))
            continue

        if old_left <= 0 and new_left <= 0:
            continue

        tag = raw[:1]
        content = raw[1:].rstrip("\r\n")

        if tag == "+":
            position = DiffLinePosition(new_lineno=new_no)
            line_type = DiffLineType.ADD
            new_no += 1
            new_left -= 1
        elif tag == "-":
            position = DiffLinePosition(old_lineno=old_no)
            line_type = DiffLineType.DELETE
            old_no += 1
            old_left -= 1
        elif tag in (" ", ""):
            # An empty row is a context line whose trailing space was stripped
            position = DiffLinePosition(old_lineno=old_no, new_lineno=new_no)
            line_type = DiffLineType.UNCHANGED
            old_no += 1
            new_no += 1
            old_left -= 1
            new_left -= 1
        else:
            continue

        current.lines.append(DiffLine(content=content, line_type=line_type, position=position))

    return hunks
