"""Commit creation utilities.

Contains:
- get_head: Get the commit HEAD points at, if any
- get_head_tree: Get the tree of the HEAD commit, if any
- create_commit: Create a commit from the current index
"""

from pathlib import Path
from typing import Optional

from hunkstage.git.exceptions import GitError
from hunkstage.git.index import write_tree
from hunkstage.git.runner import _run_git_command


def get_head(repo_root: Optional[Path] = None) -> Optional[str]:
    """Get the commit id HEAD points at.

    Returns:
        The commit id, or None on an unborn branch.
    """
    try:
        return _run_git_command(["rev-parse", "--verify", "-q", "HEAD^{commit}"], repo_root=repo_root) or None
    except GitError:
        return None


def get_head_tree(repo_root: Optional[Path] = None) -> Optional[str]:
    """Get the tree id of the HEAD commit, or None on an unborn branch."""
    head = get_head(repo_root)
    if head is None:
        return None
    return _run_git_command(["rev-parse", f"{head}^{{tree}}"], repo_root=repo_root)


def create_commit(repo_root: Optional[Path], message: str) -> str:
    """Create a commit from the current index and advance HEAD to it.

    The parent is the current HEAD, or none for the first commit on an
    unborn branch.

    Args:
        repo_root: The root directory of the git repository.
        message: The full commit message.

    Returns:
        The id of the new commit.

    Raises:
        GitError: If the tree, the commit or the ref update fails.
    """
    if not message.endswith("\n"):
        message += "\n"

    tree = write_tree(repo_root)
    parent = get_head(repo_root)

    args = ["commit-tree", tree]
    if parent:
        args += ["-p", parent]
    args += ["-F", "-"]
    commit_id = _run_git_command(args, repo_root=repo_root, input_text=message)

    subject = message.strip().splitlines()[0] if message.strip() else ""
    update_args = ["update-ref", "-m", f"hunkstage: {subject}", "HEAD", commit_id]
    if parent:
        update_args.append(parent)
    _run_git_command(update_args, repo_root=repo_root)

    return commit_id
