"""Index and object store utilities.

Contains:
- read_indexed_blob: Read the content currently staged for a path
- get_index_mode: Get the file mode of a path's index entry
- write_blob: Write content into the object store
- update_index_entry: Point a path's index entry at a blob
- stage_path: Stage a whole path (addition, modification or deletion)
- unstage_path: Reset a path's index entry to HEAD
- write_tree: Write the index as a tree object
- read_tree: Replace the index with the content of a tree
"""

from pathlib import Path
from typing import Optional

from hunkstage.git.exceptions import GitError
from hunkstage.git.runner import _run_git_bytes, _run_git_command


def read_indexed_blob(repo_root: Optional[Path], path: str) -> bytes:
    """Read the content of the blob currently staged for a path.

    Raises:
        GitError: If the path has no index entry.
    """
    return _run_git_bytes(["cat-file", "blob", f":{path}"], repo_root=repo_root)


def get_index_mode(repo_root: Optional[Path], path: str) -> Optional[str]:
    """Get the file mode of a path's stage-0 index entry.

    Returns:
        The mode (e.g. "100644"), or None if the path is not in the index.
    """
    output = _run_git_command(
        ["--literal-pathspecs", "ls-files", "-s", "-z", "--", path],
        repo_root=repo_root,
        strip=False,
    )
    for entry in output.split("\0"):
        if not entry:
            continue
        meta, _, entry_path = entry.partition("\t")
        mode, _, stage = meta.split(" ")
        if entry_path == path and stage == "0":
            return mode
    return None


def write_blob(repo_root: Optional[Path], content: bytes) -> str:
    """Write content into the object store as a blob.

    Returns:
        The blob id.
    """
    output = _run_git_bytes(
        ["hash-object", "-w", "--no-filters", "--stdin"],
        repo_root=repo_root,
        input_bytes=content,
    )
    return output.decode("ascii").strip()


def update_index_entry(
    repo_root: Optional[Path], path: str, blob_id: str, mode: str = "100644"
) -> None:
    """Point the index entry for a path at a blob."""
    _run_git_command(
        ["update-index", "--add", "--cacheinfo", mode, blob_id, path],
        repo_root=repo_root,
    )


def stage_path(repo_root: Optional[Path], path: str) -> None:
    """Stage the working tree state of a whole path.

    Additions, modifications and deletions are all recorded.
    """
    _run_git_command(["--literal-pathspecs", "add", "-A", "--", path], repo_root=repo_root)


def unstage_path(repo_root: Optional[Path], path: str) -> None:
    """Reset the index entry of a path to its HEAD version.

    On an unborn branch the path is removed from the index instead. The
    working tree is left alone either way.
    """
    try:
        _run_git_command(["rev-parse", "--verify", "-q", "HEAD"], repo_root=repo_root)
    except GitError:
        _run_git_command(
            ["--literal-pathspecs", "rm", "--cached", "-q", "--ignore-unmatch", "--", path],
            repo_root=repo_root,
        )
        return
    _run_git_command(["--literal-pathspecs", "reset", "-q", "--", path], repo_root=repo_root)


def write_tree(repo_root: Optional[Path]) -> str:
    """Write the current index as a tree object and return its id."""
    return _run_git_command(["write-tree"], repo_root=repo_root)


def read_tree(repo_root: Optional[Path], tree: str) -> None:
    """Replace the index with the content of a tree, leaving the working tree alone."""
    _run_git_command(["read-tree", tree], repo_root=repo_root)
