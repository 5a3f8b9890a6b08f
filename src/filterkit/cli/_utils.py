"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from filterkit.core.codec import CodecOptions
from filterkit.core.config import ConfigManager
from filterkit.core.settings import DEFAULT_FILE_NAME, SettingsStore
from filterkit.core.store import DEFAULT_EXTENSION, FilterStore


def get_config_manager(args: argparse.Namespace) -> ConfigManager:
    """Return the manager attached by the dispatcher, or build one."""
    manager = getattr(args, "_config_manager", None)
    if manager is None:
        home = getattr(args, "config_home", None)
        manager = ConfigManager(Path(home) if home else None)
        args._config_manager = manager
    return manager


def get_codec_options(args: argparse.Namespace) -> CodecOptions:
    return CodecOptions.from_config(get_config_manager(args).load_config(validate=False))


def get_store(args: argparse.Namespace, root: Optional[Path] = None) -> FilterStore:
    """Build a store rooted at ``root`` (default: current directory)."""
    manager = get_config_manager(args)
    return FilterStore(
        root or Path.cwd(),
        extension=str(manager.get("store.extension", DEFAULT_EXTENSION)),
        options=get_codec_options(args),
    )


def get_settings_store(args: argparse.Namespace) -> SettingsStore:
    manager = get_config_manager(args)
    directory = str(manager.get("settings.directory", "") or "").strip()
    return SettingsStore(
        Path(directory).expanduser() if directory else manager.config_home,
        str(manager.get("settings.fileName", DEFAULT_FILE_NAME)),
    )


__all__ = ["get_config_manager", "get_codec_options", "get_store", "get_settings_store"]
