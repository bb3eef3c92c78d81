from __future__ import annotations

import logging
from typing import List, Tuple

from sir.core.models import SECTION_OPEN_CHAR, ParseOptions, ScanCounts

logger = logging.getLogger(__name__)


def _comment_start(line: str, options: ParseOptions) -> int:
    if not line:
        return -1

    if not options.comments_anywhere:
        # only a marker in the very first column starts a comment
        return 0 if options.is_comment_char(line[0]) else -1

    start = -1
    for c in options.comment_chars:
        i = line.find(c)
        if i != -1 and (start == -1 or i < start):
            start = i
    return start


def strip_comments(text: str, options: ParseOptions) -> Tuple[str, ScanCounts]:
    """
    Blank comments and estimate storage sizes.

    Every comment span (marker through end of line, newline excluded) is
    replaced by spaces, so line/column positions in the returned text match
    the input. The returned counts are upper bounds: one section per '['
    plus the global section, one key per assignment character.
    """
    out: List[str] = []
    for line in text.split("\n"):
        cut = _comment_start(line, options)
        if cut != -1:
            line = line[:cut] + " " * (len(line) - cut)
        out.append(line)

    stripped = "\n".join(out)

    counts = ScanCounts(
        sections=1 + stripped.count(SECTION_OPEN_CHAR),
        keys=sum(stripped.count(c) for c in options.assignment_chars),
    )
    logger.debug(
        "estimated %d section(s), %d key(s) (assignment=%r)",
        counts.sections,
        counts.keys,
        options.assignment_chars,
    )
    return stripped, counts
