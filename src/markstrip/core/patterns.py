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
Markstrip -- Glob patterns for include/exclude selection.

Dialect:
    *        any run of characters, '/' included
    ?        exactly one character
    [abc]    character class, ranges allowed ([a-z]), negated with [!...]
    **       recursive wildcard; must form a whole path component.
             '**/' also matches zero directories, so '**/*.py' matches 'x.py'

Patterns are always matched against the whole forward-slash relative path,
case-sensitively. Compilation is eager: a bad pattern raises InvalidPattern
before any file is looked at.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from markstrip.core.errors import InvalidPattern


def _char_class(body: str, negate: bool) -> str:
    items: list[str] = []
    k = 0
    while k < len(body):
        if k + 2 < len(body) and body[k + 1] == "-":
            items.append(f"{re.escape(body[k])}-{re.escape(body[k + 2])}")
            k += 3
        else:
            items.append(re.escape(body[k]))
            k += 1
    return "[" + ("^" if negate else "") + "".join(items) + "]"


def translate(pattern: str) -> str:
    """Translate a glob into an (unanchored) regular expression body."""
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            run = j - i
            if run > 2:
                raise InvalidPattern(pattern, "wildcards are either regular `*` or recursive `**`")
            if run == 2:
                if (i > 0 and pattern[i - 1] != "/") or (j < n and pattern[j] != "/"):
                    raise InvalidPattern(
                        pattern, "recursive wildcards must form a single path component"
                    )
                if j < n:
                    # '**/' -- zero or more leading directories
                    out.append("(?:.*/)?")
                    i = j + 1
                    continue
            out.append(".*")
            i = j
        elif c == "?":
            out.append(".")
            i += 1
        elif c == "[":
            j = i + 1
            negate = j < n and pattern[j] == "!"
            if negate:
                j += 1
            start = j
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                raise InvalidPattern(pattern, "invalid range pattern")
            out.append(_char_class(pattern[start:j], negate))
            i = j + 1
        else:
            out.append(re.escape(c))
            i += 1
    return "".join(out)


@dataclass(frozen=True)
class PathPattern:
    """A compiled glob over forward-slash relative paths."""

    source: str
    regex: re.Pattern

    @classmethod
    def compile(cls, pattern: str) -> PathPattern:
        body = translate(pattern)
        try:
            regex = re.compile(body, re.DOTALL)
        except re.error as exc:
            raise InvalidPattern(pattern, str(exc)) from exc
        return cls(source=pattern, regex=regex)

    def matches(self, path: str) -> bool:
        return self.regex.fullmatch(path) is not None

    def __str__(self) -> str:
        return self.source


def compile_patterns(patterns: Iterable[str]) -> tuple[PathPattern, ...]:
    """Compile every pattern up front; the first bad one raises InvalidPattern."""
    return tuple(PathPattern.compile(p) for p in patterns)


def matches_any(patterns: Iterable[PathPattern], path: str) -> bool:
    return any(p.matches(path) for p in patterns)
