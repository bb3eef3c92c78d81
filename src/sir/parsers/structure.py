from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sir.core.models import (
    QUOTE_CHAR,
    SECTION_CLOSE_CHAR,
    SECTION_OPEN_CHAR,
    ParseOptions,
    Range,
    ScanCounts,
    Section,
)
from sir.parsers.common import find_assignment, line_end, skip_whitespace, trim

logger = logging.getLogger(__name__)


@dataclass
class ParsedStructure:
    """Sections plus the flat, parallel key storage they index into."""

    sections: List[Section] = field(default_factory=list)
    key_names: List[str] = field(default_factory=list)
    key_values: List[str] = field(default_factory=list)

    @property
    def key_count(self) -> int:
        return len(self.key_names)


class _Builder:
    """Mutable state of one parsing pass."""

    def __init__(self, options: ParseOptions, counts: ScanCounts) -> None:
        self.options = options
        # pre-sized from the stripper's estimates, trimmed in finish()
        self.key_names: List[str] = [""] * counts.keys
        self.key_values: List[str] = [""] * counts.keys
        self.key_index = 0

        self.sections: List[Section] = [
            Section(name=options.global_section_name, ranges=[Range(start=0)])
        ]
        # normalized section name -> section index
        self.section_lookup: Dict[str, int] = {
            options.normalize_name(options.global_section_name): 0
        }
        # per section: normalized key name -> flat key index
        self.section_keys: List[Dict[str, int]] = [{}]
        self.open_index = 0

    # ---- sections ----

    def open_section(self, name: str) -> None:
        self.sections[self.open_index].open_range.end = self.key_index

        norm = self.options.normalize_name(name)
        found = self.section_lookup.get(norm)

        if found is None:
            self.sections.append(Section(name=name, ranges=[Range(start=self.key_index)]))
            self.section_keys.append({})
            found = len(self.sections) - 1
            self.section_lookup[norm] = found
            logger.debug("section [%s] opened at key %d", name, self.key_index)
        elif found != self.open_index:
            self.sections[found].ranges.append(Range(start=self.key_index))
            logger.debug(
                "section [%s] reopened at key %d (range %d)",
                name,
                self.key_index,
                len(self.sections[found].ranges),
            )

        self.open_index = found

    # ---- keys ----

    def add_key(self, name: str, value: str) -> None:
        if value == "" and self.options.ignore_empty_values:
            return

        seen = self.section_keys[self.open_index]
        norm = self.options.normalize_name(name)
        duplicate: Optional[int] = seen.get(norm)

        if duplicate is not None:
            if self.options.override_duplicate_keys:
                self.key_values[duplicate] = value
                logger.debug("duplicate key %r overrides index %d", name, duplicate)
            else:
                logger.debug("duplicate key %r dropped", name)
            return

        if self.key_index < len(self.key_names):
            self.key_names[self.key_index] = name
            self.key_values[self.key_index] = value
        else:
            # a trailing key without an assignment character is not counted
            self.key_names.append(name)
            self.key_values.append(value)
        seen[norm] = self.key_index
        self.key_index += 1

    def finish(self) -> ParsedStructure:
        self.sections[self.open_index].open_range.end = self.key_index
        del self.key_names[self.key_index:]
        del self.key_values[self.key_index:]
        return ParsedStructure(
            sections=self.sections,
            key_names=self.key_names,
            key_values=self.key_values,
        )


def _parse_value(text: str, pos: int, options: ParseOptions) -> tuple[str, int]:
    """
    Read a key value starting right after the assignment character.

    A quoted value only needs its opening quote on this line; it runs to the
    next quote anywhere after it, or to the end of the text when unterminated.

    Returns (value, position to resume parsing at).
    """
    end = line_end(text, pos)

    if options.quotes_enabled:
        open_quote = text.find(QUOTE_CHAR, pos, end)
        if open_quote != -1:
            close_quote = text.find(QUOTE_CHAR, open_quote + 1)
            if close_quote == -1:
                return text[open_quote + 1:], len(text)
            return text[open_quote + 1:close_quote], close_quote + 1

    return trim(text[pos:end]), end + 1


def parse_structure(
    text: str,
    options: ParseOptions,
    counts: ScanCounts,
) -> ParsedStructure:
    """
    Build the section/range/key model from comment-stripped text in one pass.

    Section headers reopen an existing section (matched against every name
    seen so far) instead of creating a new one. Duplicate keys are detected
    only inside the section currently being filled and resolved by the
    duplicate-key policy. Parsing stops early at an unclosed header or at a
    key without any remaining assignment character.
    """
    b = _Builder(options, counts)
    n = len(text)
    pos = 0

    while pos < n:
        pos = skip_whitespace(text, pos)
        if pos >= n:
            break

        if text[pos] == SECTION_OPEN_CHAR:
            close = text.find(SECTION_CLOSE_CHAR, pos + 1)
            if close == -1:
                b.open_section(trim(text[pos + 1:]))
                logger.debug("unclosed section header at offset %d, stopping", pos)
                break
            b.open_section(trim(text[pos + 1:close]))
            pos = close + 1
            continue

        assign, _ = find_assignment(text, pos, options)
        if assign == -1:
            b.add_key(trim(text[pos:]), "")
            break

        name = trim(text[pos:assign])
        value, pos = _parse_value(text, assign + 1, options)
        b.add_key(name, value)

    return b.finish()
