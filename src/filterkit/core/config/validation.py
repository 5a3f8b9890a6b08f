"""Schema validation for configuration payloads.

Schemas are JSON Schema documents stored as YAML under
``filterkit/data/schemas/`` and validated with ``jsonschema``.
"""
from __future__ import annotations

from typing import Any, Dict, List

import jsonschema
from jsonschema import Draft202012Validator

from filterkit.data import read_yaml

from ..exceptions import ConfigError


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema, appending ``.yaml`` when no extension is given."""
    if not schema_name.lower().endswith((".yaml", ".yml")):
        schema_name = f"{schema_name}.yaml"
    schema = read_yaml("schemas", schema_name)
    if not isinstance(schema, dict):
        raise ConfigError(
            f"Schema must be a YAML mapping, got {type(schema).__name__}",
            context={"schema": schema_name},
        )
    return schema


def _format_error(error: jsonschema.ValidationError) -> str:
    location = ".".join(str(p) for p in error.absolute_path) or "<root>"
    return f"{location}: {error.message}"


def validate_payload(payload: Dict[str, Any], schema_name: str) -> None:
    """Validate ``payload`` against a bundled schema.

    Raises:
        ConfigError: Listing every violation, sorted by location.
    """
    schema = load_schema(schema_name)
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(payload), key=lambda e: list(map(str, e.absolute_path)))
    if not errors:
        return
    messages: List[str] = [_format_error(e) for e in errors]
    raise ConfigError(
        "Configuration failed schema validation:\n" + "\n".join(f"- {m}" for m in messages),
        context={"schema": schema_name, "errors": messages},
    )


__all__ = ["load_schema", "validate_payload"]
