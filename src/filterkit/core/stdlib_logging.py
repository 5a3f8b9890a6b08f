"""Logging setup for the ``filterkit`` logger hierarchy.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, once per process, by the CLI (or by an embedding app).
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Optional

from .io import ensure_directory

ROOT_LOGGER = "filterkit"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_INSTALLED_HANDLER: logging.Handler | None = None
_CONFIGURED_TARGET: str | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str = "WARNING", log_path: Optional[Path] = None) -> logging.Logger:
    """Install one handler on the ``filterkit`` logger.

    Writes to ``log_path`` when given, otherwise to stderr. Idempotent: calling
    again with the same target only updates the level; a different target
    replaces the previously installed handler.
    """
    global _INSTALLED_HANDLER, _CONFIGURED_TARGET

    logger = logging.getLogger(ROOT_LOGGER)
    numeric_level = _level_from_name(level)
    target = str(Path(log_path).resolve()) if log_path else "<stderr>"

    if _INSTALLED_HANDLER is not None and _CONFIGURED_TARGET == target:
        logger.setLevel(numeric_level)
        _INSTALLED_HANDLER.setLevel(numeric_level)
        return logger

    reset_logging()

    handler: logging.Handler
    if log_path:
        ensure_directory(Path(target).parent)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    logger.propagate = False

    _INSTALLED_HANDLER = handler
    _CONFIGURED_TARGET = target
    return logger


def configure_from_config(config: Mapping[str, Any], *, verbose: bool = False) -> logging.Logger:
    """Configure logging from the ``logging`` config section."""
    section = config.get("logging") or {}
    level = "DEBUG" if verbose else str(section.get("level") or "WARNING")
    path = str(section.get("path") or "").strip()
    return configure_logging(level, Path(path).expanduser() if path else None)


def reset_logging() -> None:
    """Remove the handler installed by :func:`configure_logging` (tests use this too)."""
    global _INSTALLED_HANDLER, _CONFIGURED_TARGET
    logger = logging.getLogger(ROOT_LOGGER)
    if _INSTALLED_HANDLER is not None:
        logger.removeHandler(_INSTALLED_HANDLER)
        _INSTALLED_HANDLER.close()
    _INSTALLED_HANDLER = None
    _CONFIGURED_TARGET = None
    logger.propagate = True


__all__ = ["configure_logging", "configure_from_config", "reset_logging", "ROOT_LOGGER"]
