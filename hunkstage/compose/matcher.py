"""Content-based hunk matching for hunkstage compose module.

Line numbers captured at the start of a run go stale once earlier commits
stage part of a file, so a captured hunk is found again in the freshly
derived diff by its added and deleted lines instead.

Contains:
- match_hunk: Find the first unused current hunk with the same changes
- match_hunks: Match several captured hunks of one file without reuse
"""

from typing import Optional

from hunkstage.compose.exceptions import AmbiguousHunkMatchError, NoMatchingHunkError
from hunkstage.compose.models import Hunk


def match_hunk(
    target: Hunk, candidates: list[Hunk], already_used: set[int]
) -> Optional[int]:
    """Find the candidate whose added/deleted lines equal the target's.

    First match wins: candidates are scanned in order and indices in
    already_used are skipped.

    Args:
        target: A hunk from the captured snapshot.
        candidates: The file's current hunks.
        already_used: Candidate positions matched earlier in this pass.

    Returns:
        Position of the matching candidate in candidates, or None.
    """
    key = target.change_key()
    for i, candidate in enumerate(candidates):
        if i in already_used:
            continue
        if candidate.change_key() == key:
            return i
    return None


def match_hunks(
    path: str,
    requested: list[Hunk],
    candidates: list[Hunk],
    strict: bool = False,
) -> list[int]:
    """Match captured hunks of one file against its current hunks.

    A current hunk is never assigned to two captured hunks.

    Args:
        path: The file both hunk lists belong to.
        requested: Captured hunks to find, in plan order.
        candidates: The file's current hunks.
        strict: Fail instead of picking the first when several unused
            candidates carry identical changes.

    Returns:
        Positions in candidates, one per requested hunk.

    Raises:
        NoMatchingHunkError: If a requested hunk has no unused match.
        AmbiguousHunkMatchError: Under strict matching, on duplicate matches.
    """
    already_used: set[int] = set()
    matched: list[int] = []

    for hunk in requested:
        found = match_hunk(hunk, candidates, already_used)
        if found is None:
            raise NoMatchingHunkError(path, hunk.index)

        if strict:
            # Identical candidates are fine only if identical requests use them all up
            key = hunk.change_key()
            wanted = sum(1 for h in requested if h.change_key() == key)
            same = [i for i, c in enumerate(candidates) if c.change_key() == key]
            if len(same) > wanted:
                raise AmbiguousHunkMatchError(path, hunk.index, same)

        already_used.add(found)
        matched.append(found)

    return matched
