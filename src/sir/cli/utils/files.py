from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from sir.core.document import Document
from sir.core.loader import load, parse_string
from sir.core.models import ParseOptions

STDIN_NAME = "stdin"


def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def write_file(path: Path, content: str, *, force: bool) -> bool:
    """Write `content` unless the file exists and `force` is off. Returns True if written."""
    if path.exists() and not force:
        return False
    path.write_text(content, encoding="utf-8")
    return True


def stdin_is_interactive() -> bool:
    return sys.stdin is None or sys.stdin.isatty()


def read_document(path: Optional[Path], options: ParseOptions) -> Document:
    """Parse `path`, or standard input (pipes and redirection) when no path is given."""
    if path is not None:
        return load(path, options)
    data = sys.stdin.buffer.read() if hasattr(sys.stdin, "buffer") else sys.stdin.read()
    return parse_string(data, options, STDIN_NAME)
