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
Markstrip CLI -- Main entry point.

Usage:
    markstrip                          # default include set, whole repo
    markstrip -i "*.py" "web/**"       # only these globs
    markstrip -e "vendor/**"           # skip these globs
    markstrip --dry-run                # report, do not write
    markstrip --version

Exit status is 1 when the repository cannot be found or file selection
fails; 0 otherwise, even if individual files could not be processed.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from markstrip import __version__
from markstrip.config import default_config_path, load_config
from markstrip.core.errors import MarkstripError
from markstrip.core.logging import configure_logging, get_run_logger
from markstrip.core.repo import GitIgnoreIndex, find_repo_root
from markstrip.core.runner import run
from markstrip.core.selector import select_files


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="markstrip",
        description="Strip marker-flagged comments from the files of a git working tree.",
    )
    parser.add_argument(
        "-i",
        "--include",
        nargs="+",
        metavar="PATTERN",
        default=None,
        help='Glob patterns to include (e.g. "*.rs" "src/**")',
    )
    parser.add_argument(
        "-e",
        "--exclude",
        nargs="+",
        metavar="PATTERN",
        default=None,
        help='Glob patterns to exclude (e.g. "target/*" "*.log")',
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a config file (default: <repo>/.markstrip.yaml)",
    )
    parser.add_argument(
        "--path",
        default=".",
        help="Directory to start repository discovery from (default: .)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report files that would be cleaned without writing them",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--version", action="version", version=f"markstrip {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    log = get_run_logger()

    try:
        root = find_repo_root(args.path)
    except MarkstripError as e:
        log.fatal("finding git root", str(e))
        return 1

    if args.config and not Path(args.config).is_file():
        log.fatal("loading config", f"no such file: {args.config}")
        return 1
    config = load_config(args.config or default_config_path(root))
    config = config.merged(include=args.include, exclude=args.exclude)
    if config.log_file:
        log_file = Path(config.log_file).expanduser()
        if not log_file.is_absolute():
            log_file = root / log_file
        configure_logging(args.log_level, log_file)

    try:
        is_ignored = GitIgnoreIndex.load(root)
        files = select_files(root, config.include, config.exclude, is_ignored)
    except MarkstripError as e:
        log.fatal("listing files", str(e))
        return 1

    if not files:
        log.no_files()
        return 0

    log.found(len(files), root=str(root))
    run(files, marker=config.marker, dry_run=args.dry_run, log=log)
    return 0


if __name__ == "__main__":
    sys.exit(main())
