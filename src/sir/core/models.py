from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import IntFlag
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ================================
# Option flags
# ================================


class Option(IntFlag):
    """Bitset form of the parse options (any combination is valid)."""

    NONE = 0x000
    IGNORE_EMPTY_VALUES = 0x001
    OVERRIDE_DUPLICATE_KEYS = 0x002
    DISABLE_QUOTES = 0x004
    DISABLE_HASH_COMMENTS = 0x008
    DISABLE_COLON_ASSIGNMENT = 0x010
    DISABLE_COMMENT_ANYWHERE = 0x020
    DISABLE_CASE_SENSITIVITY = 0x040
    DISABLE_ERRORS = 0x080
    DISABLE_WARNINGS = 0x100


# field name -> flag, in declaration order
_FLAG_FIELDS = {
    "ignore_empty_values": Option.IGNORE_EMPTY_VALUES,
    "override_duplicate_keys": Option.OVERRIDE_DUPLICATE_KEYS,
    "disable_quotes": Option.DISABLE_QUOTES,
    "disable_hash_comments": Option.DISABLE_HASH_COMMENTS,
    "disable_colon_assignment": Option.DISABLE_COLON_ASSIGNMENT,
    "disable_comment_anywhere": Option.DISABLE_COMMENT_ANYWHERE,
    "disable_case_sensitivity": Option.DISABLE_CASE_SENSITIVITY,
    "disable_errors": Option.DISABLE_ERRORS,
    "disable_warnings": Option.DISABLE_WARNINGS,
}

COMMENT_CHAR = ";"
COMMENT_CHAR_ALT = "#"
ASSIGNMENT_CHAR = "="
ASSIGNMENT_CHAR_ALT = ":"
SECTION_OPEN_CHAR = "["
SECTION_CLOSE_CHAR = "]"
KEY_END_CHAR = "\n"
QUOTE_CHAR = '"'

DEFAULT_GLOBAL_SECTION_NAME = "global"
DEFAULT_SOURCE_NAME = "ini"

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


# ================================
# Parse options
# ================================


class ParseOptions(BaseModel):
    """
    Immutable parse configuration.
    Layered file/CLI overrides are merged by core/config.py.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ignore_empty_values: bool = False
    override_duplicate_keys: bool = False
    disable_quotes: bool = False
    disable_hash_comments: bool = False
    disable_colon_assignment: bool = False
    disable_comment_anywhere: bool = False
    disable_case_sensitivity: bool = False
    disable_errors: bool = False
    disable_warnings: bool = False

    global_section_name: str = Field(
        default=DEFAULT_GLOBAL_SECTION_NAME,
        min_length=1,
        description="Name under which keys preceding the first header are found.",
    )

    @field_validator("global_section_name")
    @classmethod
    def _global_name_must_be_trimmed(cls, v: str) -> str:
        if v != v.strip():
            raise ValueError("global_section_name must not have surrounding whitespace")
        return v

    @classmethod
    def from_flags(cls, flags: int, **extra: object) -> "ParseOptions":
        flags = Option(flags)
        values = {name: bool(flags & flag) for name, flag in _FLAG_FIELDS.items()}
        values.update(extra)
        return cls.model_validate(values)

    @property
    def flags(self) -> Option:
        out = Option.NONE
        for name, flag in _FLAG_FIELDS.items():
            if getattr(self, name):
                out |= flag
        return out

    # ---- named predicates consulted by the passes ----

    @property
    def comment_chars(self) -> str:
        if self.disable_hash_comments:
            return COMMENT_CHAR
        return COMMENT_CHAR + COMMENT_CHAR_ALT

    @property
    def assignment_chars(self) -> str:
        if self.disable_colon_assignment:
            return ASSIGNMENT_CHAR
        return ASSIGNMENT_CHAR + ASSIGNMENT_CHAR_ALT

    @property
    def comments_anywhere(self) -> bool:
        return not self.disable_comment_anywhere

    @property
    def quotes_enabled(self) -> bool:
        return not self.disable_quotes

    @property
    def case_insensitive(self) -> bool:
        return self.disable_case_sensitivity

    @property
    def warnings_enabled(self) -> bool:
        return not self.disable_warnings

    @property
    def errors_enabled(self) -> bool:
        return not self.disable_errors

    def is_comment_char(self, c: str) -> bool:
        return c in self.comment_chars

    def is_assignment_char(self, c: str) -> bool:
        return c in self.assignment_chars

    def normalize_name(self, name: str) -> str:
        # ASCII letters only
        return name.translate(_ASCII_LOWER) if self.case_insensitive else name

    def names_equal(self, a: str, b: str) -> bool:
        return self.normalize_name(a) == self.normalize_name(b)


# ================================
# Storage model
# ================================


@dataclass
class Range:
    """Half-open span [start, end) of flat key indices."""

    start: int
    end: int = 0

    def __len__(self) -> int:
        return max(self.end - self.start, 0)

    def indices(self) -> range:
        return range(self.start, self.end)


@dataclass
class Section:
    name: str
    ranges: List[Range] = field(default_factory=list)

    @property
    def open_range(self) -> Range:
        return self.ranges[-1]

    def key_count(self) -> int:
        return sum(len(r) for r in self.ranges)


@dataclass(frozen=True)
class ScanCounts:
    """Storage estimates produced by the comment stripper (may over-estimate)."""

    sections: int
    keys: int


# ================================
# Diagnostics
# ================================


class ParseWarning(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str = DEFAULT_SOURCE_NAME
    line: int = Field(..., ge=1)
    column: int = Field(..., ge=1)
    message: str

    def __str__(self) -> str:
        return f"{self.source}:{self.line}:{self.column}: warning: {self.message}"
