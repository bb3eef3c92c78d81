from __future__ import annotations

from sir.core.convert import split_csv
from sir.core.document import Document
from sir.core.errors import (
    ConversionError,
    ErrorKind,
    IniError,
    MissingParameterError,
    NotFoundError,
    SourceUnavailableError,
)
from sir.core.loader import load, parse_string
from sir.core.models import Option, ParseOptions, ParseWarning

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "Document",
    "ErrorKind",
    "IniError",
    "MissingParameterError",
    "NotFoundError",
    "Option",
    "ParseOptions",
    "ParseWarning",
    "SourceUnavailableError",
    "load",
    "parse_string",
    "split_csv",
]
