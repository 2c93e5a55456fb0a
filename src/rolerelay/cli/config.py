"""Configuration loading for the rolerelay CLI."""

from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any

import jsonschema

from rolerelay.domain.models import Role
from rolerelay.domain.prompts import PromptTemplate
from rolerelay.infrastructure.model_mapper import ModelMap
from rolerelay.schemas import validate_prompts


class ConfigurationError(Exception):
    """Raised when configuration files are invalid or missing."""

    pass


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e


def load_prompts(path: Path) -> dict[Role, PromptTemplate]:
    """
    Load per-role prompt overrides from a JSON file.

    The file maps role values ("manager", "implementer", ...) to objects
    with ``role``, optional ``constraints`` and ``task`` fields. Roles that
    are not listed keep their default prompt.

    Args:
        path: Path to prompts.json

    Returns:
        Dict mapping role to PromptTemplate

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    data = _read_json(path)
    try:
        validate_prompts(data)
    except jsonschema.ValidationError as e:
        raise ConfigurationError(f"Invalid prompts in {path}: {e.message}") from e

    return {
        Role(role): PromptTemplate(
            role=entry["role"],
            constraints=entry.get("constraints", ""),  # Optional
            task=entry["task"],
        )
        for role, entry in data.items()
    }


def load_model_map(path: Path) -> ModelMap:
    """
    Load model identifiers per tier and purpose.

    Example file::

        {"high_think": "o4-mini", "mid_dev": "gpt-4.1-mini"}

    Missing keys keep their defaults.

    Raises:
        ConfigurationError: If the file is missing, not an object, has
            unknown keys or non-string values
    """
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected dict in {path}, got {type(data).__name__}")

    allowed = {f.name for f in fields(ModelMap)}
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ConfigurationError(
            f"Unknown keys in {path}: {', '.join(unknown)} "
            f"(expected any of {', '.join(sorted(allowed))})"
        )
    for key, value in data.items():
        if not isinstance(value, str) or not value:
            raise ConfigurationError(f"'{key}' in {path} must be a non-empty string")
    return ModelMap(**data)


def normalize_base_url(url: str) -> str:
    """
    Normalize base URL for an OpenAI-compatible API.

    Ensures /v1 suffix for Ollama/OpenAI compatible endpoints.

    Args:
        url: Raw URL from CLI or environment

    Returns:
        URL with /v1 suffix
    """
    base_url = url.rstrip("/")
    if not base_url.endswith("/v1"):
        base_url = f"{base_url}/v1"
    return base_url
