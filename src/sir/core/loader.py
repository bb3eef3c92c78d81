from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from sir.core.document import Document
from sir.core.errors import ErrorChannel, ErrorKind
from sir.core.models import DEFAULT_SOURCE_NAME, Option, ParseOptions
from sir.parsers import parse_structure, scan_diagnostics, strip_comments

logger = logging.getLogger(__name__)

OptionsLike = Union[ParseOptions, Option, int, None]


def resolve_options(options: OptionsLike) -> ParseOptions:
    """Accept a ParseOptions, an Option bitset, a plain int, or None."""
    if options is None:
        return ParseOptions()
    if isinstance(options, ParseOptions):
        return options
    return ParseOptions.from_flags(int(options))


def parse_string(
    data: Union[str, bytes],
    options: OptionsLike = None,
    name: Optional[str] = None,
    *,
    encoding: str = "utf-8",
) -> Document:
    """
    Parse INI text into a Document.

    Orchestrates: strip comments -> (optional) diagnostics -> structure.
    `name` is only used when formatting warnings.
    """
    opts = resolve_options(options)
    text = data.decode(encoding, errors="replace") if isinstance(data, bytes) else data
    source = name or DEFAULT_SOURCE_NAME

    stripped, counts = strip_comments(text, opts)
    warnings = scan_diagnostics(stripped, opts, source) if opts.warnings_enabled else []
    parsed = parse_structure(stripped, opts, counts)

    logger.debug(
        "parsed %s: %d section(s), %d key(s), %d warning(s)",
        source,
        len(parsed.sections),
        parsed.key_count,
        len(warnings),
    )

    return Document(
        text=stripped,
        options=opts,
        name=source,
        sections=parsed.sections,
        key_names=parsed.key_names,
        key_values=parsed.key_values,
        warnings=warnings,
        errors=ErrorChannel(enabled=opts.errors_enabled),
    )


def load(
    path: Union[str, os.PathLike],
    options: OptionsLike = None,
    *,
    encoding: str = "utf-8",
) -> Document:
    """
    Read and parse an INI file.

    If the file cannot be read, an empty Document is returned whose error
    slot carries the system reason (error tracking is forced on for it).
    """
    opts = resolve_options(options)
    p = Path(path)
    try:
        raw = p.read_bytes()
    except OSError as e:
        logger.debug("could not read %s: %s", p, e)
        errors = ErrorChannel(enabled=True)
        errors.set(ErrorKind.SOURCE_UNAVAILABLE, e.strerror or str(e))
        return Document(options=opts, name=str(path), errors=errors)

    return parse_string(raw, opts, str(path), encoding=encoding)
