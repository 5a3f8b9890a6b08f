"""Line classification for the rule-file parser."""
from __future__ import annotations

import re
from enum import Enum
from typing import NamedTuple

from .models import BlockType

_HEADER_PREFIX = re.compile(r"^#\s?")


class LineKind(Enum):
    BLANK = "blank"
    TOP_COMMENT = "top_comment"
    INNER_COMMENT = "inner_comment"
    BLOCK_START = "block_start"
    ATTRIBUTE = "attribute"
    STRAY = "stray"  # text outside any block; dropped by the assembler


class ClassifiedLine(NamedTuple):
    kind: LineKind
    text: str


def is_indented(raw_line: str) -> bool:
    return raw_line.startswith((" ", "\t"))


def classify_line(raw_line: str, *, block_open: bool) -> ClassifiedLine:
    """Categorize one raw line given whether a block is currently open.

    Returned text per kind:
        BLANK: empty string.
        TOP_COMMENT: comment text with ``#`` and at most one following
            whitespace character removed.
        INNER_COMMENT: the raw line with trailing whitespace stripped
            (indentation and ``#`` kept).
        BLOCK_START: the keyword.
        ATTRIBUTE / STRAY: the trimmed line.
    """
    trimmed = raw_line.strip()
    if not trimmed:
        return ClassifiedLine(LineKind.BLANK, "")

    indented = is_indented(raw_line)

    if trimmed.startswith("#"):
        if not block_open or not indented:
            return ClassifiedLine(LineKind.TOP_COMMENT, _HEADER_PREFIX.sub("", trimmed, count=1))
        return ClassifiedLine(LineKind.INNER_COMMENT, raw_line.rstrip())

    first_token = trimmed.split()[0]
    if first_token in BlockType.keywords() and not indented:
        return ClassifiedLine(LineKind.BLOCK_START, first_token)

    if block_open:
        return ClassifiedLine(LineKind.ATTRIBUTE, trimmed)
    return ClassifiedLine(LineKind.STRAY, trimmed)


__all__ = ["LineKind", "ClassifiedLine", "classify_line", "is_indented"]
