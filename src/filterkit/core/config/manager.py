"""
FilterKit configuration management (YAML only).

Precedence (in increasing order):
  1) Bundled defaults (``filterkit/data/config/*.yaml``)
  2) User overlays (``<config home>/config/*.yaml|*.yml``)
  3) Environment overrides (``FILTERKIT_*``)

The config home is ``$FILTERKIT_HOME`` when set, otherwise ``~/.filterkit``.

Environment overrides:
- Path separator: double underscore ``__`` (single ``_`` when no double
  underscore is present), e.g. ``FILTERKIT_codec__indent=2``.
- Case handling: case-insensitive lookup against existing keys, so
  ``FILTERKIT_CODEC__MERGEKEYS`` updates ``codec.mergeKeys``.
- A trailing ``APPEND`` segment appends to a list:
  ``FILTERKIT_codec__mergeKeys__APPEND=Currency``.
- Type coercion: bool/int/float/JSON-like strings are coerced.
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from filterkit.data import get_data_path

from ..exceptions import ConfigError
from ..io import iter_yaml_files, read_yaml
from .merge import deep_merge
from .validation import validate_payload

logger = logging.getLogger(__name__)

ENV_PREFIX = "FILTERKIT_"
HOME_ENV = "FILTERKIT_HOME"
CONFIG_SCHEMA = "config.schema.yaml"

# Environment variables under the prefix that are not config overrides.
_RESERVED_ENV_KEYS = {HOME_ENV}

PathSegment = Union[str, int, object]


def get_config_home() -> Path:
    """Return the user configuration directory (not created)."""
    override = os.environ.get(HOME_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".filterkit"


class ConfigManager:
    """Load, merge, and validate FilterKit configuration.

    Typical usage:

    ```python
    mgr = ConfigManager()
    cfg = mgr.load_config(validate=True)
    indent = mgr.get("codec.indent", 4)
    ```

    Attributes:
        config_home: User configuration directory.
        core_config_dir: Bundled defaults directory.
        user_config_dir: ``<config_home>/config`` overlays directory.
    """

    ARRAY_APPEND_MARKER = object()

    def __init__(self, config_home: Optional[Path] = None) -> None:
        self.config_home = Path(config_home) if config_home is not None else get_config_home()
        self.core_config_dir = get_data_path("config")
        self.user_config_dir = self.config_home / "config"
        self._cache: Optional[Dict[str, Any]] = None

    # ---------- Layer loading ----------
    def _merge_directory(self, cfg: Dict[str, Any], directory: Path) -> Dict[str, Any]:
        for path in iter_yaml_files(directory):
            try:
                module_cfg = read_yaml(path, default={}, raise_on_error=True) or {}
            except Exception as exc:
                raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
            if not isinstance(module_cfg, dict):
                raise ConfigError(
                    f"Config file must contain a mapping: {path}",
                    context={"path": str(path)},
                )
            logger.debug("Merging config file %s", path)
            cfg = deep_merge(cfg, module_cfg)
        return cfg

    # ---------- Environment overrides ----------
    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str, *, strict: bool) -> List[PathSegment]:
        segs = raw.split("__") if "__" in raw else raw.split("_")
        processed: List[PathSegment] = []
        for seg in segs:
            if seg == "":
                if strict:
                    raise ConfigError(
                        f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                        context={"key": raw},
                    )
                return []
            if seg.isdigit():
                processed.append(int(seg))
            elif seg.upper() == "APPEND":
                processed.append(self.ARRAY_APPEND_MARKER)
            else:
                processed.append(seg.lower())
        return processed

    def _iter_env_overrides(self, *, strict: bool) -> Iterator[Tuple[List[PathSegment], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key in _RESERVED_ENV_KEYS:
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw:
                if strict:
                    raise ConfigError(f"Malformed {ENV_PREFIX}* key", context={"key": key})
                continue
            path = self._parse_env_key(raw, strict=strict)
            if path:
                yield path, self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[PathSegment], value: Any) -> None:
        cur: Any = root
        for i, part in enumerate(path[:-1]):
            if isinstance(part, int) or part is self.ARRAY_APPEND_MARKER:
                raise ConfigError("Invalid path: list index/APPEND may only appear at leaf")
            if not isinstance(cur, dict):
                raise ConfigError("Path traverses non-dict container")
            nxt = path[i + 1]
            key_candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key_to_use = key_candidates.get(str(part), part)
            if key_to_use not in cur:
                cur[key_to_use] = [] if (isinstance(nxt, int) or nxt is self.ARRAY_APPEND_MARKER) else {}
            cur = cur[key_to_use]

        leaf = path[-1]
        if leaf is self.ARRAY_APPEND_MARKER:
            if not isinstance(cur, list):
                raise ConfigError("APPEND requires list")
            cur.append(value)
        elif isinstance(leaf, int):
            if not isinstance(cur, list):
                raise ConfigError("Index assignment requires list")
            while len(cur) <= leaf:
                cur.append(None)
            cur[leaf] = value
        else:
            if not isinstance(cur, dict):
                raise ConfigError("Key assignment requires dict")
            lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            cur[lower_map.get(str(leaf), leaf)] = value

    def apply_env_overrides(self, cfg: Dict[str, Any], *, strict: bool) -> None:
        for path, typed_value in self._iter_env_overrides(strict=strict):
            self._set_nested(cfg, path, typed_value)

    # ---------- Public API ----------
    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load the merged configuration.

        The result is cached per manager; treat it as immutable.

        Raises:
            ConfigError: On invalid YAML, malformed env keys (when
                ``validate`` is True), or schema violations.
        """
        if self._cache is None:
            cfg: Dict[str, Any] = {}
            cfg = self._merge_directory(cfg, self.core_config_dir)
            cfg = self._merge_directory(cfg, self.user_config_dir)
            self.apply_env_overrides(cfg, strict=False)
            self._cache = cfg
        if validate:
            # Strict pass so malformed env keys fail even when cached.
            list(self._iter_env_overrides(strict=True))
            validate_payload(self._cache, CONFIG_SCHEMA)
        return self._cache

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key.

        Example:
            >>> ConfigManager().get("codec.indent")
            4
        """
        current: Any = self.load_config(validate=False)
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def reload(self) -> Dict[str, Any]:
        self._cache = None
        return self.load_config()


__all__ = ["ConfigManager", "get_config_home", "ENV_PREFIX", "HOME_ENV"]
