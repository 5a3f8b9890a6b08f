"""Data model for parsed rule files.

A rule file is an ordered list of :class:`RuleBlock` objects (a "document").
Each block holds its header text, its block-type keyword, the ordered
attribute lines, and the inline comments anchored between those lines.

Blocks are mutated in place by an editing surface. All edits go through the
methods defined here so the merge-set and comment-anchor invariants are kept
in one place.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from ..exceptions import BlockEditError

# Keys whose repeated occurrences inside one block collapse into one entry.
MERGE_KEYS: tuple[str, ...] = ("BaseType", "Class", "Prophecy")

# Operator tokens are compared whole, never by prefix.
OPERATORS: tuple[str, ...] = ("==", "=", "<", ">", "<=", ">=")

SIGNATURE_DELIMITER = "\x1f"


class BlockType(str, Enum):
    """Block-start keyword."""

    SHOW = "Show"
    HIDE = "Hide"
    MINIMAL = "Minimal"
    CONTINUE = "Continue"

    @classmethod
    def keywords(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)


def sanitize_values(tokens: Iterable[str]) -> List[str]:
    """Strip one leading and one trailing comma from each token, drop empties."""
    cleaned: List[str] = []
    for token in tokens:
        if token.endswith(","):
            token = token[:-1]
        if token.startswith(","):
            token = token[1:]
        if token:
            cleaned.append(token)
    return cleaned


@dataclass
class AttributeLine:
    """One condition or action line inside a block.

    Attributes:
        key: Attribute name, case preserved (lookups are case-insensitive).
        operator: Comparison operator, or ``None`` for implicit equality.
        values: Value tokens in source order; quoted tokens keep their quotes.
        raw: Source text the line was parsed from (diagnostics only).
    """

    key: str
    operator: Optional[str] = None
    values: List[str] = field(default_factory=list)
    raw: str = ""

    def __post_init__(self) -> None:
        self.values = [v for v in self.values if v]

    def matches(self, key: str) -> bool:
        return self.key.lower() == key.lower()

    def render(self) -> str:
        """Return ``key [operator] [values...]`` without indentation."""
        parts = [self.key]
        if self.operator:
            parts.append(self.operator)
        if self.values:
            parts.append(" ".join(self.values))
        return " ".join(parts)

    def signature(self) -> str:
        return f"{self.key}:{self.operator or ''}:{' '.join(self.values)}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "operator": self.operator,
            "values": list(self.values),
            "raw": self.raw,
        }


@dataclass
class InlineComment:
    """Comment emitted immediately before ``lines[before_index]``.

    An index equal to (or beyond) the number of lines means "at block end".
    """

    before_index: int
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"before": self.before_index, "text": self.text}


@dataclass
class RuleBlock:
    """One Show/Hide/Minimal/Continue section of a rule file.

    Attributes:
        id: Opaque identity; the only field reassigned by reconciliation.
        type: Block-start keyword.
        start_line: Zero-based line of the first header line (or keyword).
        category: Header category sub-field, e.g. ``"基础"``.
        name: Header name sub-field, e.g. ``"货币通货"``.
        priority: Header priority sub-field, e.g. ``"优先级1"``.
        raw_header: Header comment text without ``#``, newline separated.
        inline_comments: Comments anchored between attribute lines.
        lines: Attribute lines in source order.
    """

    id: str
    type: BlockType
    start_line: int = 0
    category: Optional[str] = None
    name: Optional[str] = None
    priority: Optional[str] = None
    raw_header: str = ""
    inline_comments: List[InlineComment] = field(default_factory=list)
    lines: List[AttributeLine] = field(default_factory=list)

    # ---------- Lookup ----------
    def index_of(self, key: str) -> int:
        """Return the index of the first line matching ``key``, or -1."""
        for idx, line in enumerate(self.lines):
            if line.matches(key):
                return idx
        return -1

    def find_line(self, key: str) -> Optional[AttributeLine]:
        idx = self.index_of(key)
        return self.lines[idx] if idx >= 0 else None

    def get_values(self, key: str) -> List[str]:
        line = self.find_line(key)
        return list(line.values) if line is not None else []

    # ---------- Mutation ----------
    def add_line(self, line: AttributeLine, *, merge_keys: Iterable[str] = MERGE_KEYS) -> AttributeLine:
        """Append ``line``, merging it into an existing entry for merge-set keys.

        Merging matches the key case-sensitively, as the source format does.

        Returns:
            The entry now holding the values (existing or newly appended).
        """
        if line.key in tuple(merge_keys):
            for existing in self.lines:
                if existing.key == line.key:
                    existing.values.extend(line.values)
                    existing.raw += " " + " ".join(line.values)
                    return existing
        self.lines.append(line)
        return line

    def set_line(
        self,
        key: str,
        values: Iterable[str],
        operator: Optional[str] = None,
    ) -> AttributeLine:
        """Replace the first line matching ``key`` or add a new one.

        The existing entry keeps its position and key spelling.
        """
        cleaned = sanitize_values(values)
        existing = self.find_line(key)
        if existing is None:
            return self.add_line(AttributeLine(key=key, operator=operator, values=cleaned))
        existing.operator = operator
        existing.values = cleaned
        existing.raw = existing.render()
        return existing

    def remove_line(self, key: str) -> bool:
        """Remove every line matching ``key``.

        Inline comments anchored after a removed line shift down so they stay
        next to the same neighbour.

        Returns:
            True if at least one line was removed.
        """
        removed = False
        idx = 0
        while idx < len(self.lines):
            if not self.lines[idx].matches(key):
                idx += 1
                continue
            del self.lines[idx]
            for comment in self.inline_comments:
                if comment.before_index > idx:
                    comment.before_index -= 1
            removed = True
        return removed

    def move_line(self, src: int, dest: int) -> None:
        """Move the line at ``src`` to position ``dest``."""
        count = len(self.lines)
        if not (0 <= src < count and 0 <= dest < count):
            raise BlockEditError(
                f"Cannot move line {src} to {dest} in a block of {count} lines",
                context={"block_id": self.id, "src": src, "dest": dest},
            )
        line = self.lines.pop(src)
        self.lines.insert(dest, line)

    # ---------- Views ----------
    def signature(self) -> str:
        """Content digest used to match blocks across a reparse."""
        parts = [self.raw_header, self.type.value]
        parts.extend(line.signature() for line in self.lines)
        return SIGNATURE_DELIMITER.join(parts)

    def to_dict(self, *, include_id: bool = True) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type.value,
            "startLine": self.start_line,
            "category": self.category,
            "name": self.name,
            "priority": self.priority,
            "rawHeader": self.raw_header,
            "inlineComments": [c.to_dict() for c in self.inline_comments],
            "lines": [line.to_dict() for line in self.lines],
        }
        if include_id:
            data = {"id": self.id, **data}
        return data


Document = List[RuleBlock]


def find_block(document: Document, block_id: str) -> Optional[RuleBlock]:
    for block in document:
        if block.id == block_id:
            return block
    return None


def move_block(document: Document, src: int, dest: int) -> None:
    """Reorder ``document`` in place, moving the block at ``src`` to ``dest``."""
    count = len(document)
    if not (0 <= src < count and 0 <= dest < count):
        raise BlockEditError(
            f"Cannot move block {src} to {dest} in a document of {count} blocks",
            context={"src": src, "dest": dest},
        )
    block = document.pop(src)
    document.insert(dest, block)


__all__ = [
    "MERGE_KEYS",
    "OPERATORS",
    "BlockType",
    "AttributeLine",
    "InlineComment",
    "RuleBlock",
    "Document",
    "sanitize_values",
    "find_block",
    "move_block",
]
