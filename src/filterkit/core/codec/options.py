"""Codec options.

Defaults match the rule-file format. ``CodecOptions.from_config`` maps the
``codec`` configuration section onto these fields; the codec itself never
loads configuration.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .models import MERGE_KEYS, OPERATORS


@dataclass(frozen=True)
class CodecOptions:
    """Tunable constants for parsing and serialization.

    Attributes:
        indent: Number of spaces before attribute lines and inline comments.
        merge_keys: Keys whose repeated lines merge into one entry.
        operators: Tokens recognised as comparison operators.
        header_delimiter: Separator between header sub-fields.
    """

    indent: int = 4
    merge_keys: tuple[str, ...] = MERGE_KEYS
    operators: tuple[str, ...] = OPERATORS
    header_delimiter: str = " - "

    @property
    def indent_text(self) -> str:
        return " " * self.indent

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "CodecOptions":
        """Build options from a full config dict (reads its ``codec`` section)."""
        section = config.get("codec") or {}
        defaults = cls()
        return cls(
            indent=int(section.get("indent", defaults.indent)),
            merge_keys=tuple(section.get("mergeKeys") or defaults.merge_keys),
            operators=tuple(section.get("operators") or defaults.operators),
            header_delimiter=str(section.get("headerDelimiter") or defaults.header_delimiter),
        )


DEFAULT_OPTIONS = CodecOptions()

__all__ = ["CodecOptions", "DEFAULT_OPTIONS"]
