from __future__ import annotations

from typing import Any, Dict, Mapping


class FilterKitError(Exception):
    """Base exception for FilterKit."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigError(FilterKitError, ValueError):
    """Raised when configuration cannot be loaded or fails schema validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FilterKitError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class FilterStoreError(FilterKitError):
    """Generic filter file store error."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        operation: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if path:
            ctx["path"] = path
        if operation:
            ctx["operation"] = operation
        super().__init__(message, context=ctx)


class FilterFileNotFoundError(FilterStoreError, FileNotFoundError):
    """Raised when a filter file or storage directory does not exist."""


class FilterPathConflictError(FilterStoreError, FileExistsError):
    """Raised when a rename or create would overwrite an existing path."""


class SettingsError(FilterKitError, ValueError):
    """Raised when application settings are updated with unknown fields."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FilterKitError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class BlockEditError(FilterKitError, IndexError):
    """Raised when a positional edit on a rule block is out of range."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FilterKitError.__init__(self, message, context=context)
        IndexError.__init__(self, message)


__all__ = [
    "FilterKitError",
    "ConfigError",
    "FilterStoreError",
    "FilterFileNotFoundError",
    "FilterPathConflictError",
    "SettingsError",
    "BlockEditError",
]
