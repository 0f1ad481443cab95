"""
Docstring extraction.

A declaration's docstring is the block of ``#`` comment lines directly above
it. Scanning goes upward from the line before the declaration; blank lines
are tolerated between the block and the declaration only up to a limit, so
that a comment written for something further up the file is not picked up.
"""

import re
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from pupdoc.parsers.source_text import SourceUnit

COMMENT_RE = re.compile(r"^\s*#+ ?")

# More blank lines than this between a block and its declaration detach the block
DEFAULT_MAX_BLANK_LINES = 1


class Docstring(BaseModel):
    """Raw docstring text and the lines it was read from."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    comments_range: Optional[Tuple[int, int]] = None

    def __bool__(self) -> bool:
        return bool(self.text)


def extract_docstring(line: int, source: SourceUnit, max_blank_lines: int = DEFAULT_MAX_BLANK_LINES) -> Docstring:
    """
    Extract the comment block preceding a declaration.

    Args:
        line: 1-based line on which the declaration keyword starts
        source: Lines of the whole file the declaration belongs to
        max_blank_lines: Blank lines allowed between the block and the declaration

    Returns:
        Docstring with the comment prefixes stripped; empty if there is no
        attachable block
    """
    blank_lines = 0
    block: List[Tuple[int, str]] = []

    for number, text in source.range_before(line):
        if not block and not text.strip():
            blank_lines += 1
            continue
        match = COMMENT_RE.match(text)
        if not match:
            break
        block.append((number, text[match.end():].rstrip()))

    if not block or blank_lines > max_blank_lines:
        return Docstring()

    block.reverse()
    lines = [text for _, text in block]
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        return Docstring()

    return Docstring(text="\n".join(lines), comments_range=(block[0][0], block[-1][0]))
