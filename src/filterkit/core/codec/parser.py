"""Rule-file parser.

Turns raw rule-file text into a document (ordered list of ``RuleBlock``).

Format summary:
- Unindented ``# ...`` lines form the header of the next block.
- ``Show`` / ``Hide`` / ``Minimal`` / ``Continue`` at column 0 opens a block.
- Indented lines inside a block are attribute lines; indented ``#`` lines
  are inline comments anchored before the next attribute line.
- Blank lines are ignored; a block closes only at the next keyword or EOF.

Parsing never raises: any string yields some (possibly empty) document.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional

from .attributes import parse_attribute_line
from .header import decompose_header, definitional_line
from .identity import IdentityFactory, uuid_identity
from .lines import LineKind, classify_line
from .models import BlockType, Document, InlineComment, RuleBlock
from .options import DEFAULT_OPTIONS, CodecOptions

logger = logging.getLogger(__name__)

_LINE_SPLIT = re.compile(r"\r?\n")
_BOM = "\ufeff"


class BlockAssembler:
    """Consume classified lines one at a time and build blocks.

    Typical usage:

    ```python
    assembler = BlockAssembler()
    for number, raw in enumerate(text.splitlines()):
        assembler.feed(number, raw)
    blocks = assembler.finish()
    ```
    """

    def __init__(
        self,
        *,
        new_id: IdentityFactory = uuid_identity,
        options: CodecOptions = DEFAULT_OPTIONS,
    ) -> None:
        self._new_id = new_id
        self._options = options
        self._blocks: List[RuleBlock] = []
        self._pending_header: List[str] = []
        self._header_start: Optional[int] = None
        self._current: Optional[RuleBlock] = None

    def feed(self, line_number: int, raw_line: str) -> None:
        kind, text = classify_line(raw_line, block_open=self._current is not None)

        if kind is LineKind.BLANK:
            return

        if kind is LineKind.TOP_COMMENT:
            if self._header_start is None:
                self._header_start = line_number
            self._pending_header.append(text)
            return

        if kind is LineKind.BLOCK_START:
            self._open_block(line_number, BlockType(text))
            return

        block = self._current
        if block is None or kind is LineKind.STRAY:
            logger.debug("Dropping line %d outside any block: %r", line_number, text)
            return

        if kind is LineKind.INNER_COMMENT:
            block.inline_comments.append(InlineComment(before_index=len(block.lines), text=text))
            return

        parsed = parse_attribute_line(text, operators=self._options.operators)
        if parsed is not None:
            block.add_line(parsed, merge_keys=self._options.merge_keys)

    def finish(self) -> Document:
        """Flush the open block and return all blocks in source order."""
        if self._current is not None:
            self._blocks.append(self._current)
            self._current = None
        if self._pending_header:
            logger.debug("Dropping %d trailing header line(s) with no block", len(self._pending_header))
            self._pending_header = []
            self._header_start = None
        return self._blocks

    def _open_block(self, line_number: int, block_type: BlockType) -> None:
        if self._current is not None:
            self._blocks.append(self._current)

        fields = decompose_header(
            definitional_line(self._pending_header),
            self._options.header_delimiter,
        )
        self._current = RuleBlock(
            id=self._new_id(),
            type=block_type,
            start_line=self._header_start if self._header_start is not None else line_number,
            category=fields.category,
            name=fields.name,
            priority=fields.priority,
            raw_header="\n".join(self._pending_header),
        )
        self._pending_header = []
        self._header_start = None


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` or ``\\r\\n`` keeping a trailing empty segment.

    A leading byte-order mark is dropped.
    """
    if text.startswith(_BOM):
        text = text[len(_BOM):]
    return _LINE_SPLIT.split(text)


def parse(
    text: str,
    *,
    new_id: IdentityFactory = uuid_identity,
    options: CodecOptions = DEFAULT_OPTIONS,
) -> Document:
    """Parse rule-file text into a document.

    Args:
        text: Full file content.
        new_id: Identity generator called once per block.
        options: Codec constants (merge keys, operators, header delimiter).

    Returns:
        Blocks in source order; empty for blank input.
    """
    assembler = BlockAssembler(new_id=new_id, options=options)
    for line_number, raw_line in enumerate(split_lines(text)):
        assembler.feed(line_number, raw_line)
    blocks = assembler.finish()
    logger.debug("Parsed %d block(s)", len(blocks))
    return blocks


__all__ = ["BlockAssembler", "parse", "split_lines"]
