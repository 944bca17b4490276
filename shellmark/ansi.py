"""ANSI-aware text measurement and clipping.

Escape sequences do not count toward width; East Asian wide characters count
as two columns and combining marks as zero.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Column width of ``text`` with escape sequences ignored."""
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def fit_ansi_line(text: str, cols: int) -> str:
    """Clip ``text`` to ``cols`` columns and pad it with spaces to exactly ``cols``."""
    clipped = clip_ansi_line(text, cols)
    return clipped + " " * max(0, cols - display_width(clipped))
