"""Application settings persisted as JSON.

Settings are loaded once and merged over defaults; a missing file is created
from defaults. Failures to read or write never interrupt the app: they are
logged and the in-memory settings stay usable.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import SettingsError
from .io import PathLike, ensure_directory, read_json, write_json_atomic

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "Settings.json"
BACKGROUND_TYPES = ("default", "image", "video")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


@dataclass
class AppSettings:
    """Window geometry, storage location, and UI preferences."""

    width: int = 1280
    height: int = 720
    x: Optional[int] = None
    y: Optional[int] = None
    maximized: bool = False
    filter_storage_path: str = ""
    last_selected_filter: Optional[str] = None
    nav_order: List[str] = field(default_factory=lambda: ["filter", "market", "workshop", "poedb"])
    background_type: str = "default"
    background_path: str = ""
    background_volume: int = 0

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "AppSettings":
        """Build settings from camelCase JSON, ignoring unknown keys."""
        by_camel = {_camel(name): name for name in cls.field_names()}
        kwargs = {by_camel[k]: v for k, v in data.items() if k in by_camel}
        settings = cls(**kwargs)
        settings.normalize()
        return settings

    def to_json(self) -> Dict[str, Any]:
        return {_camel(k): v for k, v in asdict(self).items() if v is not None}

    def normalize(self) -> None:
        if self.background_type not in BACKGROUND_TYPES:
            self.background_type = "default"
        self.background_volume = max(0, min(100, int(self.background_volume or 0)))


class SettingsStore:
    """Load and save :class:`AppSettings` at ``<directory>/<file_name>``."""

    def __init__(self, directory: PathLike, file_name: str = DEFAULT_FILE_NAME) -> None:
        self.directory = Path(directory).expanduser()
        self.path = self.directory / file_name
        self._settings = AppSettings()
        self._initialized = False

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def load(self) -> AppSettings:
        if self._initialized:
            return self._settings
        try:
            ensure_directory(self.directory)
            if self.path.exists():
                data = read_json(self.path)
                if not isinstance(data, dict):
                    raise ValueError(f"expected a JSON object, got {type(data).__name__}")
                self._settings = AppSettings.from_json(data)
            else:
                self._write()
        except (OSError, ValueError, TypeError) as exc:
            logger.error("Failed to initialize settings from %s: %s", self.path, exc)
            self._settings = AppSettings()
        self._initialized = True
        return self._settings

    def save(self, **changes: Any) -> AppSettings:
        """Apply ``changes`` (snake_case field names) and persist.

        Raises:
            SettingsError: If a change names an unknown field or holds a
                value that cannot be normalized. Nothing is applied then.
        """
        unknown = sorted(set(changes) - set(AppSettings.field_names()))
        if unknown:
            raise SettingsError(
                f"Unknown settings field(s): {', '.join(unknown)}",
                context={"fields": unknown},
            )
        candidate = replace(self._settings, **changes)
        try:
            candidate.normalize()
        except (TypeError, ValueError) as exc:
            raise SettingsError(
                f"Invalid settings value: {exc}",
                context={"fields": sorted(changes)},
            ) from exc
        self._settings = candidate
        self._write()
        return self._settings

    def _write(self) -> None:
        try:
            write_json_atomic(self.path, self._settings.to_json())
        except OSError as exc:
            logger.error("Failed to save settings to %s: %s", self.path, exc)


__all__ = ["AppSettings", "SettingsStore", "DEFAULT_FILE_NAME"]
