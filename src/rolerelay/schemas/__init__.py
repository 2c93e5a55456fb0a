"""RoleRelay JSON Schema definitions and validation utilities.

Schemas:
    - session.schema.json: Persisted session (context and message log)
    - prompts.schema.json: Per-role prompt template overrides

Usage:
    from rolerelay.schemas import validate_session

    with open("session.json") as f:
        data = json.load(f)
    validate_session(data)  # Raises jsonschema.ValidationError if invalid
"""

from __future__ import annotations

import json
from functools import cache
from importlib.resources import files
from typing import Any

import jsonschema


@cache
def _load_schema(name: str) -> dict[str, Any]:
    """Load a JSON schema from the schemas package.

    Args:
        name: Schema filename (e.g., 'session.schema.json')

    Returns:
        Parsed JSON schema as a dictionary
    """
    schema_text = files("rolerelay.schemas").joinpath(name).read_text()
    result: dict[str, Any] = json.loads(schema_text)
    return result


def get_session_schema() -> dict[str, Any]:
    return _load_schema("session.schema.json")


def get_prompts_schema() -> dict[str, Any]:
    return _load_schema("prompts.schema.json")


def validate_session(data: dict[str, Any]) -> None:
    """Validate a persisted session against the schema.

    Args:
        data: Session dictionary

    Raises:
        jsonschema.ValidationError: If validation fails
    """
    jsonschema.validate(data, get_session_schema())


def validate_prompts(data: dict[str, Any]) -> None:
    """Validate prompt overrides against the schema.

    Args:
        data: Prompts configuration dictionary

    Raises:
        jsonschema.ValidationError: If validation fails
    """
    jsonschema.validate(data, get_prompts_schema())


__all__ = [
    "get_session_schema",
    "get_prompts_schema",
    "validate_session",
    "validate_prompts",
]
