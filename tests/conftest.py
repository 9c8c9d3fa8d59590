"""Shared test fixtures and configuration."""

import subprocess
import tempfile
from pathlib import Path

import pytest


def run_git(repo_dir: Path, *args: str) -> str:
    """Run a git command in repo_dir and return its stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo_dir,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def _init_repo(repo_dir: Path) -> None:
    repo_dir.mkdir()
    run_git(repo_dir, "init")
    run_git(repo_dir, "config", "user.email", "test@example.com")
    run_git(repo_dir, "config", "user.name", "Test User")
    run_git(repo_dir, "config", "core.autocrlf", "false")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_repo(tmp_path):
    """Create a temporary git repository with an initial commit."""
    repo_dir = tmp_path / "test_repo"
    _init_repo(repo_dir)

    # Create initial commit
    (repo_dir / "README.md").write_text("# Test Repo\n")
    run_git(repo_dir, "add", "README.md")
    run_git(repo_dir, "commit", "-m", "Initial commit")

    return repo_dir


@pytest.fixture
def empty_repo(tmp_path):
    """Create a temporary git repository on an unborn branch."""
    repo_dir = tmp_path / "empty_repo"
    _init_repo(repo_dir)
    return repo_dir


@pytest.fixture
def sample_diff():
    """Sample unified diff touching four files."""
    return """diff --git a/src/main.py b/src/main.py
index abc123..def456 100644
--- a/src/main.py
+++ b/src/main.py
@@ -1,5 +1,6 @@ import os
 import os
+import sys
 
 def main():
-    print("hello")
+    print("hello world")
     return 0
@@ -20,3 +21,3 @@ def helper():
     x = 1
-    y = 2
+    y = 3
     return x + y
diff --git a/src/new.py b/src/new.py
new file mode 100644
index 0000000..1234567
--- /dev/null
+++ b/src/new.py
@@ -0,0 +1,2 @@
+def new():
+    pass
diff --git a/old.txt b/old.txt
deleted file mode 100644
index 1234567..0000000
--- a/old.txt
+++ /dev/null
@@ -1 +0,0 @@
-gone
diff --git a/logo.png b/logo.png
index 1111111..2222222 100644
Binary files a/logo.png and b/logo.png differ
"""


@pytest.fixture
def git():
    """Run git commands in a test repository: git(repo_dir, *args)."""
    return run_git
