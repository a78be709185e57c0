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
"""File selection: walk the tree, drop ignored and excluded files, keep included ones.

Precedence for every regular file under the root:

    ignored by git  >  matches an exclude  >  matches an include (or no includes given)

The .git directory is never entered. Patterns see the forward-slash path
relative to the root, never the absolute path.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from markstrip.core.errors import TraversalFailure
from markstrip.core.patterns import compile_patterns, matches_any
from markstrip.core.repo import GIT_DIR_NAME

logger = logging.getLogger("markstrip.selector")

IgnorePredicate = Callable[[str], bool]


@dataclass(frozen=True)
class CandidateFile:
    """A selected file: absolute path plus its root-relative match path."""

    path: Path
    relative: str


def _walk_files(root: Path) -> Iterator[Path]:
    """Yield regular files under ``root`` in sorted order, skipping .git."""

    def _onerror(err: OSError) -> None:
        raise TraversalFailure(err.filename or root, err.strerror or str(err)) from err

    for dirpath, dirnames, filenames in os.walk(root, onerror=_onerror):
        dirnames[:] = sorted(d for d in dirnames if d != GIT_DIR_NAME)
        for name in sorted(filenames):
            # worktrees and submodules carry a .git file instead
            if name == GIT_DIR_NAME:
                continue
            path = Path(dirpath) / name
            if path.is_dir():
                continue
            yield path


def select_files(
    root: str | Path,
    include: Iterable[str],
    exclude: Iterable[str],
    is_ignored: IgnorePredicate,
) -> list[CandidateFile]:
    """Return the files under ``root`` that should be processed, in walk order.

    Raises:
        InvalidPattern: before any traversal, for the first bad glob.
        TraversalFailure: when a directory cannot be read.
    """
    root = Path(root)
    include_patterns = compile_patterns(include)
    exclude_patterns = compile_patterns(exclude)

    selected: list[CandidateFile] = []
    for path in _walk_files(root):
        relative = path.relative_to(root)
        if not relative.parts:
            continue
        native = str(relative)
        if is_ignored(native):
            continue
        rel = native.replace("\\", "/")
        if matches_any(exclude_patterns, rel):
            logger.debug("Excluded: %s", rel)
            continue
        if include_patterns and not matches_any(include_patterns, rel):
            continue
        selected.append(CandidateFile(path=path, relative=rel))
    return selected
