"""Schema helpers for the application settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_ITEMS_PER_PAGE,
    DEFAULT_REQUEST_TIMEOUT_SEC,
    PAGE_SIZE_OPTIONS,
)

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "finproducts/settings.schema.json",
    "type": "object",
    "required": ["schema", "api", "ui"],
    "properties": {
        "schema": {"const": "finproducts/settings@1"},
        "api": {
            "type": "object",
            "required": ["base_url"],
            "properties": {
                "base_url": {"type": "string", "minLength": 1},
                "timeout": {"type": "number", "exclusiveMinimum": 0},
            },
            "additionalProperties": True,
        },
        "ui": {
            "type": "object",
            "properties": {
                "items_per_page": {"type": "integer", "minimum": 1},
                "page_size_options": {
                    "type": "array",
                    "items": {"type": "integer", "minimum": 1},
                    "minItems": 1,
                },
            },
            "additionalProperties": True,
        },
        "logging": {
            "type": "object",
            "properties": {
                "level": {
                    "type": "string",
                    "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                },
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "finproducts/settings@1",
    "api": {
        "base_url": DEFAULT_API_BASE_URL,
        "timeout": DEFAULT_REQUEST_TIMEOUT_SEC,
    },
    "ui": {
        "items_per_page": DEFAULT_ITEMS_PER_PAGE,
        "page_size_options": list(PAGE_SIZE_OPTIONS),
    },
    "logging": {
        "level": "INFO",
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)

_SECTIONS = ("api", "ui", "logging")


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in _SECTIONS and isinstance(value, dict):
                merged.setdefault(key, {}).update(value)
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
