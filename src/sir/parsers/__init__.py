from __future__ import annotations

from sir.parsers.diagnostics import scan_diagnostics
from sir.parsers.stripper import strip_comments
from sir.parsers.structure import ParsedStructure, parse_structure

__all__ = [
    "ParsedStructure",
    "parse_structure",
    "scan_diagnostics",
    "strip_comments",
]
