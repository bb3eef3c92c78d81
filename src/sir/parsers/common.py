from __future__ import annotations

from typing import Optional, Tuple

from sir.core.models import ParseOptions

# Every character with a code point <= space counts as whitespace.
WHITESPACE = "".join(chr(i) for i in range(ord(" ") + 1))


def is_space(c: str) -> bool:
    return c <= " "


def skip_whitespace(text: str, pos: int) -> int:
    """Return the index of the first non-whitespace character at or after `pos`."""
    n = len(text)
    while pos < n and text[pos] <= " ":
        pos += 1
    return pos


def trim(s: str) -> str:
    return s.strip(WHITESPACE)


def line_end(text: str, pos: int) -> int:
    """Index of the next newline at or after `pos`, or len(text)."""
    end = text.find("\n", pos)
    return len(text) if end == -1 else end


def find_assignment(text: str, pos: int, options: ParseOptions) -> Tuple[int, Optional[str]]:
    """
    Find the earliest assignment character at or after `pos`.

    Returns (index, char) or (-1, None). With colon assignment disabled only
    '=' is considered.
    """
    best = -1
    best_char: Optional[str] = None
    for c in options.assignment_chars:
        i = text.find(c, pos)
        if i != -1 and (best == -1 or i < best):
            best, best_char = i, c
    return best, best_char
