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
"""Per-file orchestration: read, clean, write back if modified.

Each file is read whole, cleaned, and written whole or not at all before
the next file starts. Read, decode and write failures are recorded on the
file's outcome and never stop the run.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from markstrip.core.cleaner import MARKER, clean
from markstrip.core.errors import DecodeFailure, FileFailure, ReadFailure, WriteFailure
from markstrip.core.languages import language_tag
from markstrip.core.logging import RunLogger, get_run_logger
from markstrip.core.selector import CandidateFile

CLEANED = "cleaned"
UNCHANGED = "unchanged"
FAILED = "failed"


@dataclass
class FileOutcome:
    """What happened to one file."""

    path: Path
    status: str
    error: FileFailure | None = None

    @property
    def ok(self) -> bool:
        return self.status != FAILED


@dataclass
class RunReport:
    """Outcomes of a whole run, in processing order."""

    outcomes: list[FileOutcome] = field(default_factory=list)

    def _count(self, status: str) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def cleaned(self) -> int:
        return self._count(CLEANED)

    @property
    def unchanged(self) -> int:
        return self._count(UNCHANGED)

    @property
    def failed(self) -> int:
        return self._count(FAILED)

    @property
    def total(self) -> int:
        return len(self.outcomes)


def process_file(path: str | Path, marker: str = MARKER, dry_run: bool = False) -> bool:
    """Clean one file in place. Returns True if it was (or would be) modified.

    Raises:
        ReadFailure, DecodeFailure, WriteFailure
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ReadFailure(path, e.strerror or str(e)) from e
    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeFailure(path) from e

    cleaned, modified = clean(content, language_tag(path), marker)
    if modified and not dry_run:
        try:
            path.write_bytes(cleaned.encode("utf-8"))
        except OSError as e:
            raise WriteFailure(path, e.strerror or str(e)) from e
    return modified


def run(
    candidates: Iterable[CandidateFile],
    marker: str = MARKER,
    dry_run: bool = False,
    log: RunLogger | None = None,
) -> RunReport:
    """Process every candidate in order; per-file failures are logged and skipped."""
    log = log or get_run_logger()
    report = RunReport()
    for candidate in candidates:
        try:
            modified = process_file(candidate.path, marker=marker, dry_run=dry_run)
        except FileFailure as e:
            log.file_failed(str(candidate.path), str(e))
            report.outcomes.append(FileOutcome(candidate.path, FAILED, error=e))
            continue
        if modified:
            log.cleaned(str(candidate.path), dry_run=dry_run)
            report.outcomes.append(FileOutcome(candidate.path, CLEANED))
        else:
            log.debug("Runner", "Unchanged", file=str(candidate.path))
            report.outcomes.append(FileOutcome(candidate.path, UNCHANGED))
    log.done(cleaned=report.cleaned, unchanged=report.unchanged, failed=report.failed)
    return report
