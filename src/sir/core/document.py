from __future__ import annotations

from typing import Callable, Iterator, List, Optional, Tuple, TypeVar

from sir.core.convert import (
    ConversionFailure,
    parse_bool,
    parse_double,
    parse_long,
    parse_unsigned_long,
    split_csv,
)
from sir.core.errors import (
    MSG_KEY_NAME_REQUIRED,
    MSG_KEY_NOT_FOUND,
    MSG_KEY_NOT_FOUND_IN_SECTION,
    MSG_SECTION_NAME_REQUIRED,
    MSG_SECTION_NOT_FOUND,
    ErrorChannel,
    ErrorKind,
    exception_for,
)
from sir.core.models import (
    DEFAULT_SOURCE_NAME,
    ParseOptions,
    ParseWarning,
    Range,
    Section,
)

T = TypeVar("T")


class Document:
    """
    A parsed INI document and its lookup engine.

    Keys live in two flat, parallel lists; a section owns one or more ranges
    of indices into them (one per header occurrence). Lookups never raise:
    failures return None and are reported through the error slot, readable
    via `has_error()` / `error` right after the call.

        doc = sir.parse_string("[net]\\nport = 8080\\n")
        port = doc.find_int("port", section="net")
        if doc.has_error():
            print(doc.error)
    """

    def __init__(
        self,
        *,
        text: str = "",
        options: Optional[ParseOptions] = None,
        name: str = DEFAULT_SOURCE_NAME,
        sections: Optional[List[Section]] = None,
        key_names: Optional[List[str]] = None,
        key_values: Optional[List[str]] = None,
        warnings: Optional[List[ParseWarning]] = None,
        errors: Optional[ErrorChannel] = None,
    ) -> None:
        self.options = options or ParseOptions()
        self.name = name
        self.text = text
        self._sections: List[Section] = sections or [
            Section(name=self.options.global_section_name, ranges=[Range(0, 0)])
        ]
        self._key_names: List[str] = key_names or []
        self._key_values: List[str] = key_values or []
        self._warnings: List[ParseWarning] = warnings or []
        self._errors = errors or ErrorChannel(enabled=self.options.errors_enabled)
        self._closed = False

    # ---- lifetime ----

    def close(self) -> None:
        """Drop all storage. Lists already handed out stay valid."""
        self.text = ""
        self._sections = []
        self._key_names = []
        self._key_values = []
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "Document":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return "<Document %r sections=%d keys=%d warnings=%d>" % (
            self.name,
            self.section_count,
            self.key_count,
            len(self._warnings),
        )

    # ---- diagnostics ----

    def has_error(self) -> bool:
        return self._errors.has_error

    @property
    def error(self) -> str:
        return self._errors.message

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return self._errors.kind

    def raise_for_error(self) -> None:
        """Raise the IniError matching the current error slot, if any."""
        kind = self._errors.kind
        if self._errors.has_error and kind is not None:
            raise exception_for(kind, self._errors.message)

    @property
    def warnings(self) -> List[ParseWarning]:
        return list(self._warnings)

    # ---- model inspection ----

    @property
    def section_count(self) -> int:
        return len(self._sections)

    @property
    def key_count(self) -> int:
        return len(self._key_names)

    @property
    def sections(self) -> List[str]:
        """Section names in order of first appearance, global section first."""
        return [s.name for s in self._sections]

    def keys(self) -> List[str]:
        return list(self._key_names)

    def values(self) -> List[str]:
        return list(self._key_values)

    def items(self) -> List[Tuple[str, str]]:
        return list(zip(self._key_names, self._key_values))

    def ranges(self, section: str) -> List[Tuple[int, int]]:
        found = self._get_section(section)
        if found is None:
            return []
        return [(r.start, r.end) for r in found.ranges]

    def __contains__(self, section: object) -> bool:
        if not isinstance(section, str):
            return False
        return any(self.options.names_equal(s.name, section) for s in self._sections)

    def __len__(self) -> int:
        return self.key_count

    # ---- lookups ----

    def _get_section(self, section: Optional[str]) -> Optional[Section]:
        self._errors.clear()
        if section is None:
            self._errors.set(ErrorKind.MISSING_PARAMETER, MSG_SECTION_NAME_REQUIRED)
            return None
        for s in self._sections:
            if self.options.names_equal(s.name, section):
                return s
        self._errors.set(ErrorKind.NOT_FOUND, MSG_SECTION_NOT_FOUND, section)
        return None

    def _section_indices(self, section: Section) -> Iterator[int]:
        for r in section.ranges:
            yield from r.indices()

    def find(self, key: Optional[str], section: Optional[str] = None) -> Optional[str]:
        """
        Value of `key`, scoped to `section` when given.

        Without a section the whole flat key list is scanned: the first
        match wins, or the last one when duplicate keys override.
        """
        self._errors.clear()
        if key is None:
            self._errors.set(ErrorKind.MISSING_PARAMETER, MSG_KEY_NAME_REQUIRED)
            return None

        if section is not None:
            found = self._get_section(section)
            if found is None:
                return None
            for i in self._section_indices(found):
                if self.options.names_equal(self._key_names[i], key):
                    return self._key_values[i]
            self._errors.set(ErrorKind.NOT_FOUND, MSG_KEY_NOT_FOUND_IN_SECTION, key, section)
            return None

        value: Optional[str] = None
        for name, candidate in zip(self._key_names, self._key_values):
            if not self.options.names_equal(name, key):
                continue
            if not self.options.override_duplicate_keys:
                return candidate
            value = candidate

        if value is None:
            self._errors.set(ErrorKind.NOT_FOUND, MSG_KEY_NOT_FOUND, key)
        return value

    def _convert(
        self,
        key: Optional[str],
        section: Optional[str],
        converter: Callable[[str], T],
    ) -> Optional[T]:
        value = self.find(key, section)
        if value is None:
            return None
        try:
            return converter(value)
        except ConversionFailure as e:
            self._errors.set(e.kind, e.template, value)
            return None

    def find_int(self, key: Optional[str], section: Optional[str] = None) -> Optional[int]:
        return self._convert(key, section, parse_long)

    def find_uint(self, key: Optional[str], section: Optional[str] = None) -> Optional[int]:
        return self._convert(key, section, parse_unsigned_long)

    def find_float(self, key: Optional[str], section: Optional[str] = None) -> Optional[float]:
        return self._convert(key, section, parse_double)

    def find_bool(self, key: Optional[str], section: Optional[str] = None) -> Optional[bool]:
        return self._convert(key, section, parse_bool)

    def find_csv(self, key: Optional[str], section: Optional[str] = None) -> Optional[List[str]]:
        """Comma-split value as a fresh list, or None if the key is missing."""
        value = self.find(key, section)
        if value is None:
            return None
        return split_csv(value)

    # ---- bulk retrieval ----

    def section_items(self, section: Optional[str]) -> Optional[List[Tuple[str, str]]]:
        """Every (name, value) of `section` in range-then-index order."""
        found = self._get_section(section)
        if found is None:
            return None
        return [(self._key_names[i], self._key_values[i]) for i in self._section_indices(found)]

    def section_key_names(self, section: Optional[str]) -> Optional[List[str]]:
        items = self.section_items(section)
        return None if items is None else [k for k, _ in items]

    def section_key_values(self, section: Optional[str]) -> Optional[List[str]]:
        items = self.section_items(section)
        return None if items is None else [v for _, v in items]
