"""Header comment decomposition.

Headers follow the convention ``Category - Name - Priority``. This is a
heuristic, not a reversible encoding: the raw header text is always kept on
the block and wins on serialization.
"""
from __future__ import annotations

from typing import NamedTuple, Optional, Sequence

DEFAULT_DELIMITER = " - "


class HeaderFields(NamedTuple):
    category: Optional[str] = None
    name: Optional[str] = None
    priority: Optional[str] = None


def definitional_line(header_lines: Sequence[str]) -> str:
    """Return the last non-blank header line (earlier lines are not decomposed)."""
    for line in reversed(header_lines):
        if line.strip():
            return line
    return ""


def decompose_header(text: str, delimiter: str = DEFAULT_DELIMITER) -> HeaderFields:
    """Split a header line into category, name and priority.

    Three or more parts map to category/name/priority (extra parts are
    dropped), two parts to category/name, otherwise the whole trimmed text is
    the name.
    """
    parts = [part.strip() for part in text.split(delimiter)]
    if len(parts) >= 3:
        return HeaderFields(parts[0] or None, parts[1] or None, parts[2] or None)
    if len(parts) == 2:
        return HeaderFields(parts[0] or None, parts[1] or None, None)
    return HeaderFields(None, text.strip() or None, None)


def compose_header(
    category: Optional[str],
    name: Optional[str],
    priority: Optional[str],
    delimiter: str = DEFAULT_DELIMITER,
) -> Optional[str]:
    """Inverse of :func:`decompose_header`; ``None`` when there is no name.

    Priority is only written alongside a category, since ``Name - Priority``
    would read back as ``Category - Name``.
    """
    if not name:
        return None
    if not category:
        return name
    parts = [category, name]
    if priority:
        parts.append(priority)
    return delimiter.join(parts)


__all__ = [
    "DEFAULT_DELIMITER",
    "HeaderFields",
    "definitional_line",
    "decompose_header",
    "compose_header",
]
