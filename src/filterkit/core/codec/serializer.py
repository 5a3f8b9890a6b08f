"""Rule-file serializer, the inverse of :mod:`filterkit.core.codec.parser`.

Output is normalized rather than byte-identical to the source: attribute
lines and inline comments are re-indented, values are joined by single
spaces, and every block is followed by one blank line. A further
parse/serialize cycle over the output is a no-op.
"""
from __future__ import annotations

import logging
from typing import Iterable, List

from .header import compose_header
from .models import Document, InlineComment, RuleBlock
from .options import DEFAULT_OPTIONS, CodecOptions

logger = logging.getLogger(__name__)


def header_lines(block: RuleBlock, options: CodecOptions = DEFAULT_OPTIONS) -> List[str]:
    """Return the ``#``-prefixed header lines for ``block``.

    ``raw_header`` always wins over the decomposed sub-fields.
    """
    if block.raw_header and block.raw_header.strip():
        texts = [line.rstrip() for line in block.raw_header.split("\n")]
        texts = [line for line in texts if line]
    else:
        composed = compose_header(block.category, block.name, block.priority, options.header_delimiter)
        texts = [composed] if composed else []
    return [text if text.startswith("#") else f"# {text}" for text in texts]


def _comment_lines(comments: Iterable[InlineComment], indent: str) -> List[str]:
    out: List[str] = []
    for comment in comments:
        body = comment.text.strip()
        if not body.startswith("#"):
            body = f"# {body}"
        out.append(f"{indent}{body}")
    return out


def block_lines(block: RuleBlock, options: CodecOptions = DEFAULT_OPTIONS) -> List[str]:
    """Render one block (header, keyword, body, separator) as output lines."""
    indent = options.indent_text
    out = header_lines(block, options)
    out.append(block.type.value)

    for idx, line in enumerate(block.lines):
        out.extend(_comment_lines((c for c in block.inline_comments if c.before_index == idx), indent))
        out.append(f"{indent}{line.render()}")

    trailing = (c for c in block.inline_comments if c.before_index >= len(block.lines))
    out.extend(_comment_lines(trailing, indent))
    out.append("")
    return out


def serialize(document: Document, *, options: CodecOptions = DEFAULT_OPTIONS) -> str:
    """Render ``document`` to rule-file text.

    Side effect: each block's ``start_line`` is updated to the zero-based line
    of its first header line (or of its keyword when it has no header) in the
    returned text.
    """
    output: List[str] = []
    for block in document:
        block.start_line = len(output)
        output.extend(block_lines(block, options))
    logger.debug("Serialized %d block(s) into %d line(s)", len(document), len(output))
    return "".join(f"{line}\n" for line in output)


__all__ = ["serialize", "block_lines", "header_lines"]
