"""Git command runner and repository utilities.

Contains:
- _run_git_command: Run a git command and return its text output
- _run_git_bytes: Run a git command and return its raw output
- get_repo_root: Get the root directory of a git repository
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from hunkstage.git.exceptions import GitError

logger = logging.getLogger(__name__)


def _git_argv(args: list[str], repo_root: Optional[Path]) -> list[str]:
    argv = ["git"]
    if repo_root is not None:
        argv += ["-C", str(repo_root)]
    return argv + args


def _run_git_command(
    args: list[str],
    repo_root: Optional[Path] = None,
    strip: bool = True,
    input_text: Optional[str] = None,
) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        repo_root: Repository to run the command in (defaults to the cwd).
        strip: Whether to strip surrounding whitespace from stdout.
        input_text: Optional text fed to the command's stdin.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
    """
    logger.debug("git %s", " ".join(args))
    try:
        result = subprocess.run(
            _git_argv(args, repo_root),
            capture_output=True,
            text=True,
            check=True,
            input=input_text,
        )
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: git {' '.join(args)}\n{(e.stderr or '').strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")
    return result.stdout.strip() if strip else result.stdout


def _run_git_bytes(
    args: list[str],
    repo_root: Optional[Path] = None,
    input_bytes: Optional[bytes] = None,
) -> bytes:
    """Run a git command and return its raw stdout.

    Used wherever line endings and trailing newlines must survive untouched:
    blob contents and diff text.

    Args:
        args: List of arguments to pass to git.
        repo_root: Repository to run the command in (defaults to the cwd).
        input_bytes: Optional bytes fed to the command's stdin.

    Returns:
        The stdout of the git command as bytes.

    Raises:
        GitError: If the command fails.
    """
    logger.debug("git %s", " ".join(args))
    try:
        result = subprocess.run(
            _git_argv(args, repo_root),
            capture_output=True,
            check=True,
            input=input_bytes,
        )
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.decode("utf-8", errors="replace") if e.stderr else ""
        raise GitError(f"Git command failed: git {' '.join(args)}\n{stderr.strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")
    return result.stdout


def get_repo_root(path: Optional[Path] = None) -> Path:
    """Get the root directory of a git repository.

    Args:
        path: Directory inside the repository (defaults to the cwd).

    Returns:
        Path to the repository root.

    Raises:
        GitError: If not in a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], repo_root=path)
        return Path(root)
    except GitError:
        raise GitError("Not in a git repository. Please run this command from within a git repo.")
