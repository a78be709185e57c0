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
Markstrip -- Line Cleaner

Strips marker-flagged comments from text, one line at a time.

Rules per line:
    1. Locate every opener the language allows; the earliest offset wins,
       a block opener wins a tie against a line token.
    2. Line token: the comment runs to end of line.
    3. Block opener: the closer is searched from the opener on the same
       line. With a closer the span is spliced out; without one the
       comment runs to end of line.
    4. Only comments containing the marker are touched.
    5. Repeat while the line keeps changing, so cleaning is idempotent.

There is no state across lines. A block comment spanning several lines is
seen one line at a time, and an opener with no closer on its own line
truncates that line.
"""

from __future__ import annotations

from dataclasses import dataclass

from markstrip.core.languages import CommentSyntax, syntax_for

MARKER = "\u203c\ufe0f"  # double exclamation mark + emoji presentation selector


@dataclass(frozen=True)
class LineEdit:
    """Result of evaluating one line."""

    text: str
    changed: bool = False


def _find_opener(line: str, syntax: CommentSyntax) -> tuple[int, str | None] | None:
    """Return (offset, closer) for the winning opener, closer None for line tokens."""
    best: tuple[int, int, int, str | None] | None = None
    if syntax.line:
        pos = line.find(syntax.line)
        if pos >= 0:
            best = (pos, 1, 0, None)
    for opener, closer in syntax.blocks:
        pos = line.find(opener)
        if pos < 0:
            continue
        # sort key: offset, then block before line, then longer opener first
        candidate = (pos, 0, -len(opener), closer)
        if best is None or candidate[:3] < best[:3]:
            best = candidate
    if best is None:
        return None
    return best[0], best[3]


def clean_line(line: str, syntax: CommentSyntax, marker: str = MARKER) -> LineEdit:
    found = _find_opener(line, syntax)
    if found is None:
        return LineEdit(line)
    start, closer = found

    if closer is not None:
        end_offset = line.find(closer, start)
        if end_offset >= 0:
            end = end_offset + len(closer)
            if marker not in line[start:end]:
                return LineEdit(line)
            prefix, suffix = line[:start], line[end:]
            if not suffix.strip():
                return LineEdit(prefix.rstrip(), changed=True)
            return LineEdit(prefix + suffix, changed=True)

    # line token, or a block left open on this line
    if marker in line[start:]:
        return LineEdit(line[:start].rstrip(), changed=True)
    return LineEdit(line)


def _clean_until_stable(line: str, syntax: CommentSyntax, marker: str) -> LineEdit:
    """Re-apply clean_line until the first comment on the line is unflagged.

    Each pass removes at most one comment, so a line carrying several flagged
    blocks needs several passes. Every change shortens the line.
    """
    edit = clean_line(line, syntax, marker)
    if not edit.changed:
        return edit
    while True:
        again = clean_line(edit.text, syntax, marker)
        if not again.changed:
            return edit
        edit = LineEdit(again.text, changed=True)


def split_lines(content: str) -> list[str]:
    """Split on '\\n', dropping one trailing '\\r' per line and no phantom last line."""
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [ln[:-1] if ln.endswith("\r") else ln for ln in lines]


def clean(content: str, language_tag: str, marker: str = MARKER) -> tuple[str, bool]:
    """Strip marker-flagged comments from ``content``.

    Returns the new text and whether anything changed. When nothing changed
    the original text is returned untouched.
    """
    syntax = syntax_for(language_tag)
    edits = [_clean_until_stable(line, syntax, marker) for line in split_lines(content)]
    if not any(e.changed for e in edits):
        return content, False
    text = "\n".join(e.text for e in edits)
    if content.endswith("\n"):
        text += "\n"
    return text, True
