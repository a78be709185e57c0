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
"""Comment syntax per file extension.

A plain lookup table from extension tag to a CommentSyntax value. Anything
not listed falls back to hash-style comments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath


@dataclass(frozen=True)
class CommentSyntax:
    """Comment openers that are active on every line of a file."""

    line: str | None = None
    blocks: tuple[tuple[str, str], ...] = field(default_factory=tuple)


HASH = CommentSyntax(line="#")
C_LIKE = CommentSyntax(line="//")
MARKUP = CommentSyntax(blocks=(("<!--", "-->"),))
STYLESHEET = CommentSyntax(blocks=(("/*", "*/"),))
# JSX/TSX: '//' in code, '{/* */}' inside markup -- both live on the same line
TEMPLATE = CommentSyntax(line="//", blocks=(("{/*", "*/}"),))

LANGUAGE_PROFILES: dict[str, CommentSyntax] = {
    "html": MARKUP,
    "css": STYLESHEET,
    "jsx": TEMPLATE,
    "tsx": TEMPLATE,
    "rs": C_LIKE,
    "js": C_LIKE,
    "ts": C_LIKE,
}

DEFAULT_SYNTAX = HASH


def language_tag(path: str | PurePath) -> str:
    """Extension without the dot ('' when there is none). Case-sensitive."""
    return PurePath(path).suffix[1:]


def syntax_for(tag: str) -> CommentSyntax:
    return LANGUAGE_PROFILES.get(tag, DEFAULT_SYNTAX)
