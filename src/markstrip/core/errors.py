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
Markstrip -- Error taxonomy.

Fatal (abort the run, non-zero exit):
    RepoDiscoveryFailure   git repository could not be located
    BareRepository         repository has no working tree to scan
    TraversalFailure       directory walk failed
    IgnoreCheckFailure     git could not evaluate ignore rules
    InvalidPattern         include/exclude glob did not compile

Per-file (reported, run continues):
    ReadFailure / DecodeFailure / WriteFailure
"""

from __future__ import annotations

from pathlib import Path


class MarkstripError(Exception):
    """Base class for every error raised by Markstrip."""


# ---------------------------------------------------------------------------
# Fatal
# ---------------------------------------------------------------------------


class RepoDiscoveryFailure(MarkstripError):
    """Raised when no git repository encloses the start directory."""

    def __init__(self, start: Path | str, reason: str):
        self.start = str(start)
        self.reason = reason
        super().__init__(f"Failed to discover git repository from {self.start}: {reason}")


class BareRepository(MarkstripError):
    """Raised when the discovered repository has no working tree."""

    def __init__(self, git_dir: Path | str):
        self.git_dir = str(git_dir)
        super().__init__(f"Cannot find toplevel: {self.git_dir} is a bare repository")


class TraversalFailure(MarkstripError):
    """Raised when the directory walk cannot continue."""

    def __init__(self, path: Path | str, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"File system walk error at {self.path}: {reason}")


class IgnoreCheckFailure(TraversalFailure):
    """Raised when git cannot answer an ignore query for the tree."""

    def __init__(self, root: Path | str, reason: str):
        super().__init__(root, f"ignore check failed: {reason}")


class InvalidPattern(MarkstripError):
    """Raised when an include/exclude glob does not compile."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid glob pattern {pattern!r}: {reason}")


# ---------------------------------------------------------------------------
# Per-file
# ---------------------------------------------------------------------------


class FileFailure(MarkstripError):
    """A failure confined to a single file."""

    operation = "process"

    def __init__(self, path: Path | str, reason: str = ""):
        self.path = str(path)
        self.reason = reason
        msg = f"Failed to {self.operation} file {self.path}"
        super().__init__(f"{msg}: {reason}" if reason else msg)


class ReadFailure(FileFailure):
    operation = "read"


class DecodeFailure(FileFailure):
    operation = "decode"

    def __init__(self, path: Path | str, reason: str = ""):
        super().__init__(path, reason or "content is not valid UTF-8")


class WriteFailure(FileFailure):
    operation = "write"
