"""Layer merging for configuration dicts.

Mappings merge key by key. A list from an overlay replaces the base list
unless its first item is a marker: ``"+"`` appends the remaining items (used
to extend ``codec.mergeKeys``), ``"="`` replaces with them explicitly.
"""
from __future__ import annotations

from typing import Any, Dict, List

_APPEND = "+"
_REPLACE = "="


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    if not override:
        return list(base)
    marker, rest = override[0], override[1:]
    if marker == _APPEND:
        return [*base, *rest]
    if marker == _REPLACE:
        return list(rest)
    return list(override)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``base`` with ``override`` layered on top; inputs are not mutated."""
    merged: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            merged[key] = merge_arrays(current, value)
        else:
            merged[key] = value
    return merged


__all__ = ["deep_merge", "merge_arrays"]
