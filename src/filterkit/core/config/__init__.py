"""Layered YAML configuration for FilterKit."""
from __future__ import annotations

from .manager import ENV_PREFIX, HOME_ENV, ConfigManager, get_config_home
from .merge import deep_merge, merge_arrays
from .validation import load_schema, validate_payload

__all__ = [
    "ConfigManager",
    "get_config_home",
    "ENV_PREFIX",
    "HOME_ENV",
    "deep_merge",
    "merge_arrays",
    "load_schema",
    "validate_payload",
]
