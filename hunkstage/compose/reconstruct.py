"""Selection replay for hunkstage compose module.

Contains:
- reconstruct: Build a file version holding only the selected diff lines
- split_lines: Split content into lines without terminators
- detect_newline: Detect the line terminator a file mostly uses
"""

from typing import Iterable, Optional

from hunkstage.compose.exceptions import ReconstructionError
from hunkstage.compose.models import DiffLinePosition, DiffLineType, Hunk


def split_lines(content: str) -> list[str]:
    """Split content on "\\n", trimming one trailing "\\r" from each line.

    A final terminator does not produce an empty last line.
    """
    return [text for text, _ in _split_terminated(content)]


def _split_terminated(content: str) -> list[tuple[str, str]]:
    """Split content into (text, terminator) pairs.

    The terminator is "\\r\\n" or "\\n", or "" for an unterminated last line.
    """
    if not content:
        return []
    pieces = content.split("\n")
    last = pieces.pop()
    pairs = [(p[:-1], "\r\n") if p.endswith("\r") else (p, "\n") for p in pieces]
    if last:
        pairs.append((last, ""))
    return pairs


def detect_newline(content: str) -> str:
    """Return "\\r\\n" if most lines of content end with it, else "\\n"."""
    crlf = content.count("\r\n")
    return "\r\n" if crlf > content.count("\n") - crlf else "\n"


class _NewFromOldContent:
    """Output buffer plus a cursor into the old file's lines.

    Old lines are copied with their own terminators; added lines get newline.
    """

    def __init__(self, old_content: str, newline: str = "\n"):
        self.old_lines = _split_terminated(old_content)
        self.newline = newline
        self.lines: list[tuple[str, str]] = []
        self.old_index = 0

    def add_line(self, content: str) -> None:
        self._append((content, self.newline))

    def skip_old_line(self, expected: str) -> None:
        self._check_old_line(expected)
        self.old_index += 1

    def add_old_line(self, expected: Optional[str] = None) -> None:
        if expected is not None:
            self._check_old_line(expected)
        elif self.old_index >= len(self.old_lines):
            raise ReconstructionError(
                f"Hunk reaches past the end of the indexed content ({len(self.old_lines)} lines)"
            )
        self._append(self.old_lines[self.old_index])
        self.old_index += 1

    def catch_up(self, hunk_start: int) -> None:
        """Copy untouched old lines up to, not including, 1-based line hunk_start."""
        while hunk_start > self.old_index + 1:
            self.add_old_line()

    def finish(self) -> str:
        for line in self.old_lines[self.old_index:]:
            self._append(line)
        if not self.lines:
            return ""
        text, terminator = self.lines[-1]
        self.lines[-1] = (text, terminator or self.newline)
        return "".join(text + terminator for text, terminator in self.lines)

    def _append(self, line: tuple[str, str]) -> None:
        # A formerly last line that gains a successor needs a terminator
        if self.lines and not self.lines[-1][1]:
            self.lines[-1] = (self.lines[-1][0], self.newline)
        self.lines.append(line)

    def _check_old_line(self, expected: str) -> None:
        if self.old_index >= len(self.old_lines):
            raise ReconstructionError(
                f"Hunk reaches past the end of the indexed content ({len(self.old_lines)} lines)"
            )
        if self.old_lines[self.old_index][0].rstrip("\r") != expected:
            raise ReconstructionError(
                f"Indexed content does not match the diff at line {self.old_index + 1}"
            )


def reconstruct(
    old_content: str,
    hunks: list[Hunk],
    selected: Iterable[DiffLinePosition],
    newline: str = "\n",
) -> str:
    """Build the new content of a file holding only the selected lines.

    Replays the hunks over the old content with a line cursor. Selected
    additions are written and selected deletions take effect; every other old
    line is kept and unselected additions are dropped. Untouched lines before
    the first hunk with a selection are copied verbatim, as is everything
    after the last hunk.

    Args:
        old_content: The content currently in the index.
        hunks: The file's hunks, freshly derived against old_content.
        selected: Positions of the added/deleted lines to apply.
        newline: Terminator for added lines; old lines keep their own.

    Returns:
        The new file content, ending with a single terminator unless empty.

    Raises:
        ReconstructionError: If the hunks do not fit old_content.
    """
    selected = set(selected)
    builder = _NewFromOldContent(old_content, newline)
    first_hunk_encountered = False

    for hunk in sorted(hunks, key=lambda h: h.header.old_start):
        if not first_hunk_encountered:
            first_hunk_encountered = any(ln.position in selected for ln in hunk.changes())
        if not first_hunk_encountered:
            continue

        # A pure insertion's old_start names the line it follows
        header = hunk.header
        builder.catch_up(header.old_start if header.old_lines else header.old_start + 1)

        for line in hunk.lines:
            if line.line_type is DiffLineType.EOF_NEWLINE:
                # Marks the previous line as unterminated; writes nothing
                continue

            if line.position in selected:
                if line.line_type is DiffLineType.ADD:
                    builder.add_line(line.content)
                elif line.line_type is DiffLineType.DELETE:
                    builder.skip_old_line(line.content)
                else:
                    builder.add_old_line(line.content)
            elif line.line_type is not DiffLineType.ADD:
                builder.add_old_line(line.content)

    return builder.finish()
