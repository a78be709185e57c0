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
"""Markstrip configuration schema.

The config file is optional and lives at the repository root:

    # .markstrip.yaml
    include: ["*.py", "web/**/*.tsx"]
    exclude: ["vendor/**"]
    marker: "‼️"
    log_file: ~/.markstrip/markstrip.log

Command-line flags win over the file; the file wins over built-in defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from markstrip.core.cleaner import MARKER

logger = logging.getLogger("markstrip.config")

CONFIG_FILENAME = ".markstrip.yaml"

DEFAULT_INCLUDE: tuple[str, ...] = (
    "*.rs",
    "*.toml",
    "*.py",
    "*.jsx",
    "*.tsx",
    "*.html",
    "*.css",
)


@dataclass
class MarkstripConfig:
    """Settings for one cleaning run."""

    include: list[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE))
    exclude: list[str] = field(default_factory=list)

    # Comments are only stripped when they contain this token
    marker: str = MARKER

    # Optional rotating log file in addition to stderr
    log_file: str | None = None

    def merged(
        self,
        include: list[str] | None = None,
        exclude: list[str] | None = None,
    ) -> MarkstripConfig:
        """Return a copy with command-line values applied where given."""
        return MarkstripConfig(
            include=list(include) if include is not None else list(self.include),
            exclude=list(exclude) if exclude is not None else list(self.exclude),
            marker=self.marker,
            log_file=self.log_file,
        )


def default_config_path(repo_root: Path | str) -> Path:
    return Path(repo_root) / CONFIG_FILENAME


def load_config(path: Path | str | None = None) -> MarkstripConfig:
    """Load configuration from a YAML file.

    A missing, unreadable or malformed file yields the defaults.
    """
    if path is None:
        return MarkstripConfig()
    config_path = Path(path)

    if not config_path.exists():
        logger.debug("No config at %s -- using defaults", config_path)
        return MarkstripConfig()

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        logger.error("Failed to load config %s: %s -- using defaults", config_path, exc)
        return MarkstripConfig()
    if raw is None:
        return MarkstripConfig()
    if not isinstance(raw, dict):
        logger.warning("Invalid config %s (not a mapping) -- using defaults", config_path)
        return MarkstripConfig()
    return _parse_config(raw)


def save_config(config: MarkstripConfig, path: Path | str) -> None:
    """Save configuration to a YAML file."""
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "include": list(config.include),
        "exclude": list(config.exclude),
        "marker": config.marker,
    }
    if config.log_file:
        data["log_file"] = config.log_file
    config_path.write_text(
        yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True),
        encoding="utf-8",
    )
    logger.info("Saved config to %s", config_path)


def _string_list(raw: dict, key: str, default: list[str]) -> list[str]:
    value = raw.get(key, default)
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        logger.warning("Config key %r must be a list of patterns -- ignoring", key)
        return list(default)
    return [str(v) for v in value if v is not None and str(v).strip()]


def _parse_config(raw: dict) -> MarkstripConfig:
    """Parse raw YAML dict into MarkstripConfig."""
    marker = raw.get("marker", MARKER)
    if not isinstance(marker, str) or not marker:
        logger.warning("Config key 'marker' must be a non-empty string -- using default")
        marker = MARKER

    log_file = raw.get("log_file")
    return MarkstripConfig(
        include=_string_list(raw, "include", list(DEFAULT_INCLUDE)),
        exclude=_string_list(raw, "exclude", []),
        marker=marker,
        log_file=str(log_file) if log_file else None,
    )
