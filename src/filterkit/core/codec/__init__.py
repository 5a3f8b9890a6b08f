"""Rule-file codec: parse, serialize, and identity reconciliation.

```python
from filterkit.core.codec import parse, serialize, reconcile_identities

blocks = parse(text)
blocks[0].set_line("ItemLevel", ["65"], operator=">=")
text = serialize(blocks)
fresh = reconcile_identities(blocks, parse(text))
```
"""
from __future__ import annotations

from .attributes import parse_attribute_line, tokenize
from .header import HeaderFields, compose_header, decompose_header
from .identity import CounterIdentityFactory, IdentityFactory, uuid_identity
from .lines import ClassifiedLine, LineKind, classify_line
from .models import (
    MERGE_KEYS,
    OPERATORS,
    AttributeLine,
    BlockType,
    Document,
    InlineComment,
    RuleBlock,
    find_block,
    move_block,
    sanitize_values,
)
from .options import DEFAULT_OPTIONS, CodecOptions
from .parser import BlockAssembler, parse
from .reconcile import reconcile_identities
from .serializer import serialize

__all__ = [
    "MERGE_KEYS",
    "OPERATORS",
    "AttributeLine",
    "BlockType",
    "Document",
    "InlineComment",
    "RuleBlock",
    "find_block",
    "move_block",
    "sanitize_values",
    "HeaderFields",
    "compose_header",
    "decompose_header",
    "CounterIdentityFactory",
    "IdentityFactory",
    "uuid_identity",
    "ClassifiedLine",
    "LineKind",
    "classify_line",
    "parse_attribute_line",
    "tokenize",
    "CodecOptions",
    "DEFAULT_OPTIONS",
    "BlockAssembler",
    "parse",
    "serialize",
    "reconcile_identities",
]
