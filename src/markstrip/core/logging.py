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
Markstrip -- Run Logger

Every status line of a run goes through the ``markstrip`` logger: the
found-count, one line per cleaned file, one per failed file, and the
completion notice. By default they land on stderr; a rotating log file
can be added through configuration.

FORMAT:
    TIMESTAMP | LEVEL | COMPONENT | MESSAGE | {structured fields}

USAGE:
    from markstrip.core.logging import configure_logging, get_run_logger
    configure_logging("INFO", log_file=None)
    log = get_run_logger()
    log.found(12)
    log.cleaned("src/app.py")
"""

import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path

# =============================================================================
# CONSTANTS
# =============================================================================

ROOT_LOGGER_NAME = "markstrip"
MAX_LOG_FILE_BYTES = 5 * 1024 * 1024  # 5 MB per file
LOG_BACKUP_COUNT = 3


# =============================================================================
# CUSTOM FORMATTER -- human-readable + structured
# =============================================================================


class MarkstripLogFormatter(logging.Formatter):
    """
    Format: TIMESTAMP | LEVEL | COMPONENT | MESSAGE | {structured fields}

    Example:
    2026-02-09T17:30:45.123Z | INFO  | Runner       | Cleaned | file="src/app.tsx"
    2026-02-09T17:30:45.130Z | ERROR | Runner       | Error processing file | file="a.py" error="..."
    """

    LEVEL_WIDTH = 5
    COMPONENT_WIDTH = 12

    def format(self, record: logging.LogRecord) -> str:
        now = datetime.fromtimestamp(record.created, timezone.utc)
        ts = now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"

        level = getattr(record, "run_level", record.levelname)
        component = getattr(record, "component", None) or record.name.rsplit(".", 1)[-1].title()
        message = record.getMessage()

        fields = getattr(record, "fields", {})
        field_str = ""
        if fields:
            parts = []
            for k, v in fields.items():
                if isinstance(v, str):
                    parts.append(f'{k}="{v}"')
                elif isinstance(v, float):
                    parts.append(f"{k}={v:.3f}")
                else:
                    parts.append(f"{k}={v}")
            field_str = " | " + " ".join(parts)

        return (
            f"{ts} | {level:<{self.LEVEL_WIDTH}} | "
            f"{component:<{self.COMPONENT_WIDTH}} | {message}{field_str}"
        )


def configure_logging(level: str = "INFO", log_file: str | Path | None = None) -> logging.Logger:
    """Attach stderr (and optionally file) handlers to the ``markstrip`` logger.

    Safe to call more than once; previous handlers are replaced.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(MarkstripLogFormatter())
    logger.addHandler(stderr_handler)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            str(path),
            maxBytes=MAX_LOG_FILE_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(MarkstripLogFormatter())
        logger.addHandler(file_handler)

    return logger


# =============================================================================
# RUN LOGGER
# =============================================================================


class RunLogger:
    """Component-tagged status events for a single cleaning run."""

    def __init__(self, name: str = ROOT_LOGGER_NAME + ".run"):
        self._logger = logging.getLogger(name)

    def _log(self, level: int, run_level: str, component: str, message: str, **fields):
        """Core log method."""
        if not self._logger.isEnabledFor(level):
            return
        record = self._logger.makeRecord(
            name=self._logger.name,
            level=level,
            fn="",
            lno=0,
            msg=message,
            args=(),
            exc_info=None,
        )
        record.component = component
        record.run_level = run_level
        record.fields = fields
        self._logger.handle(record)

    # =========================================================================
    # PUBLIC API -- Detail
    # =========================================================================

    def debug(self, component: str, message: str, **fields):
        self._log(logging.DEBUG, "DEBUG", component, message, **fields)

    # =========================================================================
    # PUBLIC API -- Run events
    # =========================================================================

    def found(self, count: int, **fields):
        """Log how many files the selector produced."""
        self._log(logging.INFO, "FOUND", "Selector", f"Found {count} files to process...", **fields)

    def no_files(self, **fields):
        self._log(logging.INFO, "FOUND", "Selector", "No files found matching criteria.", **fields)

    def cleaned(self, file_path: str, dry_run: bool = False, **fields):
        """Log a file whose marker comments were stripped (or would be)."""
        fields.update(file=file_path)
        message = "Would clean" if dry_run else "Cleaned"
        self._log(logging.INFO, "CLEAN", "Runner", message, **fields)

    def file_failed(self, file_path: str, error: str, **fields):
        fields.update(file=file_path, error=error)
        self._log(logging.ERROR, "ERROR", "Runner", "Error processing file", **fields)

    def done(self, cleaned: int = 0, unchanged: int = 0, failed: int = 0, **fields):
        fields.update(cleaned=cleaned, unchanged=unchanged, failed=failed)
        self._log(logging.INFO, "DONE", "Runner", "Done.", **fields)

    def fatal(self, operation: str, error: str, **fields):
        """Log an error that ends the run."""
        fields.update(error=error)
        self._log(logging.ERROR, "FATAL", "CLI", f"Error {operation}", **fields)


# =============================================================================
# SINGLETON
# =============================================================================

_run_logger: RunLogger | None = None


def get_run_logger() -> RunLogger:
    """Get or create the global RunLogger."""
    global _run_logger
    if _run_logger is None:
        _run_logger = RunLogger()
    return _run_logger
