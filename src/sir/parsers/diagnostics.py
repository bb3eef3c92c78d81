from __future__ import annotations

from typing import List

from sir.core.models import (
    DEFAULT_SOURCE_NAME,
    KEY_END_CHAR,
    SECTION_CLOSE_CHAR,
    SECTION_OPEN_CHAR,
    ParseOptions,
    ParseWarning,
)

MSG_NEWLINE_IN_SECTION = (
    "Newline found in section name. Did you forget to close the section "
    "name with ']'?"
)
MSG_EOF_IN_SECTION = (
    "End of input found in section name. Did you forget to close the "
    "section name with ']'?"
)
MSG_ASSIGNMENT_IN_SECTION = (
    "'{char}' found in section name. Did you forget to close the section "
    "name with ']'?"
)
MSG_BRACKET_IN_KEY_NAME = "'{char}' found in key name"
MSG_BRACKET_IN_KEY_VALUE = "'{char}' found in key value"


class _Cursor:
    """Walks the text keeping 1-based line/column counters."""

    __slots__ = ("text", "pos", "line", "column")

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1

    @property
    def done(self) -> bool:
        return self.pos >= len(self.text)

    @property
    def char(self) -> str:
        return self.text[self.pos]

    def advance(self) -> None:
        if self.done:
            return
        if self.char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1


def scan_diagnostics(
    text: str,
    options: ParseOptions,
    name: str = DEFAULT_SOURCE_NAME,
) -> List[ParseWarning]:
    """
    Detect probable authoring mistakes in comment-stripped INI text.

    Each logical line is read either as a section header (from '[' to the
    closing ']') or as a key line (name up to the assignment character,
    value up to the newline). Positions refer to the offending character.
    Returns an empty list when warnings are disabled.
    """
    out: List[ParseWarning] = []
    if not options.warnings_enabled:
        return out

    cur = _Cursor(text)

    def warn(message: str) -> None:
        out.append(
            ParseWarning(source=name, line=cur.line, column=cur.column, message=message)
        )

    while not cur.done:
        while not cur.done and cur.char <= " ":
            cur.advance()
        if cur.done:
            break

        if cur.char == SECTION_OPEN_CHAR:
            while not cur.done and cur.char != SECTION_CLOSE_CHAR:
                if cur.char == "\n":
                    warn(MSG_NEWLINE_IN_SECTION)
                elif options.is_assignment_char(cur.char):
                    warn(MSG_ASSIGNMENT_IN_SECTION.format(char=cur.char))
                cur.advance()
            if cur.done:
                warn(MSG_EOF_IN_SECTION)
            # closing bracket
            cur.advance()
            continue

        # key name
        while not cur.done and not options.is_assignment_char(cur.char):
            if cur.char in (SECTION_OPEN_CHAR, SECTION_CLOSE_CHAR):
                warn(MSG_BRACKET_IN_KEY_NAME.format(char=cur.char))
            cur.advance()
        # assignment character
        cur.advance()

        # key value
        while not cur.done and cur.char != KEY_END_CHAR:
            if cur.char in (SECTION_OPEN_CHAR, SECTION_CLOSE_CHAR):
                warn(MSG_BRACKET_IN_KEY_VALUE.format(char=cur.char))
            cur.advance()
        cur.advance()

    return out
