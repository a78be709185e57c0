"""Pytest configuration for markstrip tests."""

import logging
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

# Ensure src/markstrip is importable
src_path = str(Path(__file__).parent.parent / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)


def _git(cwd, *args):
    return subprocess.run(["git", *args], cwd=cwd, capture_output=True, check=True)


@pytest.fixture
def git():
    """Run a git command in a directory, failing the test on error."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    return _git


@pytest.fixture
def git_workspace(tmp_path, monkeypatch, git):
    """Create a temporary git repository with an initial commit."""
    # keep discovery from wandering into an enclosing repository
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "config", "user.email", "test@test.com")
    git(repo, "config", "user.name", "Test")
    git(repo, "config", "commit.gpgsign", "false")
    (repo / "init.txt").write_text("initial\n")
    git(repo, "add", ".")
    git(repo, "commit", "-m", "init", "-q")
    return repo


@pytest.fixture(autouse=True)
def reset_markstrip_logging():
    """Drop handlers bound to captured streams once a test is done."""
    yield
    logger = logging.getLogger("markstrip")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
