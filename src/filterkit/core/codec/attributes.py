"""Quote-aware attribute line parsing."""
from __future__ import annotations

from typing import Iterable, List, Optional

from .models import OPERATORS, AttributeLine, sanitize_values


def tokenize(text: str) -> List[str]:
    """Split ``text`` on spaces that are not inside double quotes.

    Quotes are kept in the emitted tokens. An unterminated quote absorbs the
    rest of the line into a single token; this never raises.
    """
    tokens: List[str] = []
    buffer: List[str] = []
    in_quote = False
    for char in text:
        if char == '"':
            in_quote = not in_quote
            buffer.append(char)
        elif char == " " and not in_quote:
            if buffer:
                tokens.append("".join(buffer))
                buffer = []
        else:
            buffer.append(char)
    if buffer:
        tokens.append("".join(buffer))
    return tokens


def parse_attribute_line(text: str, *, operators: Iterable[str] = OPERATORS) -> Optional[AttributeLine]:
    """Parse one attribute line into key, optional operator and values.

    Args:
        text: Line text; surrounding whitespace is ignored.
        operators: Tokens accepted in second position as an operator.

    Returns:
        The parsed line, or ``None`` when the text is blank or a comment.

    Example:
        >>> parse_attribute_line("ItemLevel >= 65")
        AttributeLine(key='ItemLevel', operator='>=', values=['65'], raw='ItemLevel >= 65')
    """
    trimmed = text.strip()
    if not trimmed or trimmed.startswith("#"):
        return None

    parts = tokenize(trimmed)
    if not parts:
        return None

    key = parts[0]
    operator: Optional[str] = None
    value_start = 1
    if len(parts) > 1 and parts[1] in tuple(operators):
        operator = parts[1]
        value_start = 2

    return AttributeLine(
        key=key,
        operator=operator,
        values=sanitize_values(parts[value_start:]),
        raw=text,
    )


__all__ = ["tokenize", "parse_attribute_line"]
