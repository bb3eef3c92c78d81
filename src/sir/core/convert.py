from __future__ import annotations

import math
import re
from typing import List, Tuple

from sir.core.errors import ErrorKind

LONG_MAX = 2**63 - 1
LONG_MIN = -(2**63)
ULONG_MAX = 2**64 - 1

BOOL_TRUE_STRING = "true"
BOOL_FALSE_STRING = "false"

# strtol/strtoul with base 0: sign, then hex / octal / decimal, longest prefix
_INT_RE = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]+)|(0[0-7]*)|([1-9][0-9]*))")

# strtod: hex float, decimal float, inf/infinity, nan
_HEX_FLOAT_RE = re.compile(
    r"\s*([+-]?)0[xX](?=\.?[0-9a-fA-F])([0-9a-fA-F]*(?:\.[0-9a-fA-F]*)?)(?:[pP]([+-]?[0-9]+))?"
)
_DEC_FLOAT_RE = re.compile(
    r"\s*([+-]?)((?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)
_SPECIAL_FLOAT_RE = re.compile(r"\s*([+-]?)(inf(?:inity)?|nan)", re.IGNORECASE)


class ConversionFailure(Exception):
    """Raised by the converters; Document turns it into the error slot."""

    def __init__(self, kind: ErrorKind, template: str) -> None:
        super().__init__(template)
        self.kind = kind
        self.template = template


def _match_int(text: str) -> Tuple[int, bool]:
    """Return (value, negative) for the longest integer prefix of `text`."""
    m = _INT_RE.match(text)
    if m is None:
        raise ValueError(text)
    sign, hex_digits, octal, decimal = m.groups()
    if hex_digits is not None:
        value = int(hex_digits, 16)
    elif octal is not None:
        value = int(octal, 8)
    else:
        value = int(decimal, 10)
    negative = sign == "-"
    return (-value if negative else value), negative


def parse_long(text: str) -> int:
    """Convert like C strtol(text, &end, 0) into a signed 64-bit integer."""
    try:
        value, _ = _match_int(text)
    except ValueError:
        raise ConversionFailure(
            ErrorKind.CONVERSION_INVALID, "'%' could not be converted to a long integer."
        ) from None

    if value > LONG_MAX:
        raise ConversionFailure(
            ErrorKind.CONVERSION_OVERFLOW,
            "'%' is more than the maximum value of a long integer.",
        )
    if value < LONG_MIN:
        raise ConversionFailure(
            ErrorKind.CONVERSION_UNDERFLOW,
            "'%' is less than the minimum value of a long integer.",
        )
    return value


def parse_unsigned_long(text: str) -> int:
    """Convert like C strtoul(text, &end, 0); negative values are rejected."""
    try:
        value, negative = _match_int(text)
    except ValueError:
        raise ConversionFailure(
            ErrorKind.CONVERSION_INVALID,
            "'%' could not be converted to an unsigned long integer.",
        ) from None

    if negative and value != 0:
        raise ConversionFailure(
            ErrorKind.CONVERSION_UNDERFLOW,
            "'%' is less than the minimum value of an unsigned long integer.",
        )
    if value > ULONG_MAX:
        raise ConversionFailure(
            ErrorKind.CONVERSION_OVERFLOW,
            "'%' is more than the maximum value of an unsigned long integer.",
        )
    return abs(value)


def _match_float(text: str) -> Tuple[float, str]:
    """Return (value, mantissa digits) for the longest float prefix of `text`."""
    m = _HEX_FLOAT_RE.match(text)
    if m is not None:
        sign, mantissa, exponent = m.groups()
        literal = f"{sign}0x{mantissa}p{exponent or '0'}"
        try:
            return float.fromhex(literal), mantissa
        except OverflowError:
            return (-math.inf if sign == "-" else math.inf), mantissa

    m = _SPECIAL_FLOAT_RE.match(text)
    if m is not None:
        sign, word = m.groups()
        # special values are never out of range
        return float(f"{sign}{word}"), ""

    m = _DEC_FLOAT_RE.match(text)
    if m is not None:
        sign, body = m.groups()
        mantissa = re.split(r"[eE]", body)[0]
        return float(f"{sign}{body}"), mantissa

    raise ValueError(text)


def parse_double(text: str) -> float:
    """Convert like C strtod(text, &end), reporting overflow and underflow."""
    try:
        value, mantissa = _match_float(text)
    except ValueError:
        raise ConversionFailure(
            ErrorKind.CONVERSION_INVALID, "'%' could not be converted to a double."
        ) from None

    if mantissa and math.isinf(value):
        if value > 0:
            raise ConversionFailure(
                ErrorKind.CONVERSION_OVERFLOW,
                "'%' is more than the maximum value of a double.",
            )
        raise ConversionFailure(
            ErrorKind.CONVERSION_UNDERFLOW,
            "'%' is less than the minimum value of a double.",
        )
    if value == 0.0 and any(c not in "0." for c in mantissa):
        raise ConversionFailure(
            ErrorKind.CONVERSION_UNDERFLOW,
            "'%' is outside the range of values of a double.",
        )
    return value


def parse_bool(text: str) -> bool:
    """
    Numeric truthiness first (0 is False, any other integer True), then the
    literals 'true' / 'false' in any letter case.
    """
    try:
        return parse_long(text) != 0
    except ConversionFailure:
        pass

    # whole word only: "trueish" is not a bool
    word = text.strip().lower()
    if word == BOOL_TRUE_STRING:
        return True
    if word == BOOL_FALSE_STRING:
        return False
    raise ConversionFailure(ErrorKind.CONVERSION_INVALID, "could not parse '%' as a bool")


def split_csv(text: str) -> List[str]:
    """
    Split on ',' and strip each field.

    Always yields at least one field, e.g. "" -> [""] and "a" -> ["a"].
    """
    return [field.strip() for field in text.strip().split(",")]
