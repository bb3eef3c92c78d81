from __future__ import annotations

from enum import Enum, IntEnum
from typing import Optional, Type


class ExitCode(IntEnum):
    OK = 0
    WARNINGS = 1
    ERROR = 2


class ErrorKind(str, Enum):
    SOURCE_UNAVAILABLE = "source_unavailable"
    NOT_FOUND = "not_found"
    MISSING_PARAMETER = "missing_parameter"
    CONVERSION_OVERFLOW = "conversion_overflow"
    CONVERSION_UNDERFLOW = "conversion_underflow"
    CONVERSION_INVALID = "conversion_invalid"

    @property
    def is_conversion(self) -> bool:
        return self in (
            ErrorKind.CONVERSION_OVERFLOW,
            ErrorKind.CONVERSION_UNDERFLOW,
            ErrorKind.CONVERSION_INVALID,
        )


# ================================
# Message templates ('%' is substituted positionally)
# ================================

MSG_SECTION_NAME_REQUIRED = "the parameter 'section_name' is not optional"
MSG_KEY_NAME_REQUIRED = "the parameter 'key_name' is not optional"
MSG_SECTION_NOT_FOUND = "section '%' not found"
MSG_KEY_NOT_FOUND = "key '%' not found"
MSG_KEY_NOT_FOUND_IN_SECTION = "key '%' not found in section '%'"


def format_message(template: str, s1: Optional[str] = None, s2: Optional[str] = None) -> str:
    """
    Substitute up to two strings into `template`.

    Each '%' consumes the next argument; a '%' without a matching argument
    is dropped.
    """
    args = (s1, s2)
    out = []
    i = 0
    for c in template:
        if c != "%":
            out.append(c)
            continue
        if i < len(args) and args[i] is not None:
            out.append(args[i])
            i += 1
    return "".join(out)


# ================================
# Exceptions (opt-in via Document.raise_for_error)
# ================================


class IniError(Exception):
    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, kind: Optional[ErrorKind] = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class SourceUnavailableError(IniError):
    kind = ErrorKind.SOURCE_UNAVAILABLE


class NotFoundError(IniError, LookupError):
    kind = ErrorKind.NOT_FOUND


class MissingParameterError(IniError, ValueError):
    kind = ErrorKind.MISSING_PARAMETER


class ConversionError(IniError, ValueError):
    """Value present but not parseable as the requested type."""


_EXCEPTION_FOR_KIND: dict[ErrorKind, Type[IniError]] = {
    ErrorKind.SOURCE_UNAVAILABLE: SourceUnavailableError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.MISSING_PARAMETER: MissingParameterError,
    ErrorKind.CONVERSION_OVERFLOW: ConversionError,
    ErrorKind.CONVERSION_UNDERFLOW: ConversionError,
    ErrorKind.CONVERSION_INVALID: ConversionError,
}


def exception_for(kind: ErrorKind, message: str) -> IniError:
    return _EXCEPTION_FOR_KIND[kind](message, kind)


# ================================
# Error slot
# ================================


class ErrorChannel:
    """
    The single current-error slot of a Document.

    Every operation that can fail calls `clear()` on entry and `set()` at
    most once. When disabled the channel is a sink: `set()` does nothing and
    `has_error` is always False.
    """

    __slots__ = ("_enabled", "_kind", "_message")

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled
        self._kind: Optional[ErrorKind] = None
        self._message = ""

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def has_error(self) -> bool:
        return self._enabled and self._kind is not None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self._kind if self._enabled else None

    @property
    def message(self) -> str:
        return self._message if self._enabled else ""

    def clear(self) -> None:
        if self._enabled:
            self._kind = None
            self._message = ""

    def set(
        self,
        kind: ErrorKind,
        template: str,
        s1: Optional[str] = None,
        s2: Optional[str] = None,
    ) -> None:
        if not self._enabled:
            return
        self._kind = kind
        self._message = format_message(template, s1, s2)

    def __repr__(self) -> str:
        if not self._enabled:
            return "ErrorChannel(disabled)"
        return f"ErrorChannel(kind={self._kind!r}, message={self._message!r})"
