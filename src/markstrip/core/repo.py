# Markstrip
# Copyright (C) 2025 Phoenix Link (Pty) Ltd. All Rights Reserved.
#
# This file is part of Markstrip.
#
# Markstrip is dual-licensed:
#
# 1. Open Source: GNU Affero General Public License v3.0 (AGPL-3.0)
#    You may use, modify, and distribute this file under AGPL-3.0.
#    See LICENSE for the full text.
#
# 2. Commercial: Available from Phoenix Link (Pty) Ltd
#    For proprietary use, SaaS deployment, or enterprise licensing.
#    See LICENSE-ENTERPRISE.md or contact info@phoenixlink.co.za
#
# Contributions require a signed CLA. See COPYRIGHT.md and CLA.md.
"""
Markstrip -- Git Repository Access

Two things are needed from git:
    1. ROOT:    the working-tree toplevel enclosing the start directory
    2. IGNORE:  whether a relative path is excluded by the repo's ignore rules

Ignore rules are evaluated by git itself (.gitignore files at every level,
.git/info/exclude, core.excludesFile). A path matching those rules counts as
ignored even if it is tracked.
"""

import logging
import os
import subprocess
from pathlib import Path, PurePath

from markstrip.core.errors import BareRepository, IgnoreCheckFailure, RepoDiscoveryFailure

logger = logging.getLogger("markstrip.repo")

GIT_DIR_NAME = ".git"


# ---------------------------------------------------------------------------
# GIT HELPERS
# ---------------------------------------------------------------------------


def _run_git(cwd: str, *args: str, check: bool = True) -> subprocess.CompletedProcess:
    """Run a git command in ``cwd``."""
    cmd = ["git"] + list(args)
    return subprocess.run(
        cmd,
        cwd=cwd,
        capture_output=True,
        check=check,
        timeout=60,
    )


def _stderr(result: subprocess.CompletedProcess) -> str:
    return result.stderr.decode("utf-8", errors="replace").strip()


def _split_z(raw: bytes) -> list[str]:
    """Split NUL-separated git output into paths."""
    return [os.fsdecode(p) for p in raw.split(b"\0") if p]


# ---------------------------------------------------------------------------
# ROOT DISCOVERY
# ---------------------------------------------------------------------------


def find_repo_root(start: str | Path = ".") -> Path:
    """Return the working-tree root of the repository enclosing ``start``.

    Raises:
        RepoDiscoveryFailure: git is missing or ``start`` is not in a repository.
        BareRepository: the repository has no working tree.
    """
    start_dir = str(Path(start).resolve())
    try:
        bare = _run_git(start_dir, "rev-parse", "--is-bare-repository", check=False)
    except (OSError, subprocess.SubprocessError) as e:
        raise RepoDiscoveryFailure(start_dir, str(e)) from e
    if bare.returncode != 0:
        raise RepoDiscoveryFailure(start_dir, _stderr(bare) or "not a git repository")
    if bare.stdout.strip() == b"true":
        git_dir = _run_git(start_dir, "rev-parse", "--absolute-git-dir", check=False)
        raise BareRepository(os.fsdecode(git_dir.stdout.strip()) or start_dir)

    try:
        top = _run_git(start_dir, "rev-parse", "--show-toplevel", check=False)
    except (OSError, subprocess.SubprocessError) as e:
        raise RepoDiscoveryFailure(start_dir, str(e)) from e
    if top.returncode != 0 or not top.stdout.strip():
        raise RepoDiscoveryFailure(start_dir, _stderr(top) or "no working tree")
    root = Path(os.fsdecode(top.stdout.strip()))
    logger.debug("Repository root: %s", root)
    return root


# ---------------------------------------------------------------------------
# IGNORE INDEX
# ---------------------------------------------------------------------------


class GitIgnoreIndex:
    """
    Snapshot of every path git considers ignored under a working tree.

    Usage:
        is_ignored = GitIgnoreIndex.load(root)
        is_ignored("build/out.js")   # -> True
    """

    def __init__(self, root: str | Path, ignored: frozenset[str] = frozenset()):
        self.root = Path(root)
        self._ignored = ignored

    @classmethod
    def load(cls, root: str | Path) -> "GitIgnoreIndex":
        """Ask git once for all ignored paths, untracked and tracked alike."""
        root = Path(root)
        ignored: set[str] = set()
        for scope in ("--others", "--cached"):
            try:
                result = _run_git(
                    str(root), "ls-files", "-z", scope, "--ignored", "--exclude-standard",
                    check=False,
                )
            except (OSError, subprocess.SubprocessError) as e:
                raise IgnoreCheckFailure(root, str(e)) from e
            if result.returncode != 0:
                raise IgnoreCheckFailure(root, _stderr(result) or f"git exited {result.returncode}")
            ignored.update(_split_z(result.stdout))
        logger.debug("Loaded %d ignored path(s) under %s", len(ignored), root)
        return cls(root, frozenset(ignored))

    def is_ignored(self, relative_path: str | PurePath) -> bool:
        parts = PurePath(relative_path).parts
        if "/".join(parts) in self._ignored:
            return True
        # ignored nested repositories are listed once, as "dir/"
        return any("/".join(parts[:k]) + "/" in self._ignored for k in range(1, len(parts)))

    __call__ = is_ignored

    def __len__(self) -> int:
        return len(self._ignored)
