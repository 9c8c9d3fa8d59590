"""Git status utilities.

Contains:
- get_untracked_files: List untracked, non-ignored files
"""

from pathlib import Path
from typing import Optional

from hunkstage.git.runner import _run_git_command


def get_untracked_files(
    repo_root: Optional[Path], paths: Optional[list[str]] = None
) -> list[str]:
    """List untracked files, honoring .gitignore and the exclude files.

    Args:
        repo_root: The root directory of the git repository.
        paths: Restrict the listing to these paths.

    Returns:
        Repository-relative paths of untracked files.
    """
    if paths is not None and not paths:
        return []
    args = ["--literal-pathspecs", "ls-files", "--others", "--exclude-standard", "-z", "--"]
    if paths:
        args.extend(paths)
    output = _run_git_command(args, repo_root=repo_root, strip=False)
    return [p for p in output.split("\0") if p]
