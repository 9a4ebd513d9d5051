"""Declarative field rules for product forms.

The rule set is a JSON Schema so it stays data, not code.  Failures are
reported per field with the user-facing messages the form renders.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from jsonschema import Draft202012Validator

from finproducts.errors import ValidationError

from .dates import format_input_date
from .models import PRODUCT_FIELDS

PRODUCT_SCHEMA: dict[str, Any] = {
    "$id": "finproducts/product-input.schema.json",
    "type": "object",
    "required": list(PRODUCT_FIELDS),
    "properties": {
        "id": {"type": "string", "minLength": 3, "maxLength": 10},
        "name": {"type": "string", "minLength": 5, "maxLength": 100},
        "description": {"type": "string", "minLength": 10, "maxLength": 200},
        "logo": {"type": "string"},
        "date_release": {"type": "string"},
        "date_revision": {"type": "string"},
    },
    "additionalProperties": True,
}

_validator = Draft202012Validator(PRODUCT_SCHEMA)

# Earlier entries win when a field breaks more than one rule.
_RULE_PRIORITY: tuple[str, ...] = ("required", "type", "minLength", "maxLength")

_DATE_FIELDS: tuple[str, ...] = ("date_release", "date_revision")


def required_message(field: str) -> str:
    return f"{field} es requerido"


def min_length_message(field: str, length: int) -> str:
    return f"{field} debe tener al menos {length} caracteres"


def max_length_message(field: str, length: int) -> str:
    return f"{field} debe tener máximo {length} caracteres"


def invalid_type_message(field: str) -> str:
    return f"{field} tiene un formato inválido"


def _message(rule: str, field: str, limit: Any) -> str:
    if rule == "type":
        return invalid_type_message(field)
    if rule == "minLength":
        return min_length_message(field, limit)
    if rule == "maxLength":
        return max_length_message(field, limit)
    return required_message(field)


def _normalise(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Prepare *values* for the schema.

    Blank values and dates that cannot be read count as missing; dates are
    rendered as ISO text and numbers as their string form.
    """
    normalised: Dict[str, Any] = {}
    for key, value in values.items():
        if key in _DATE_FIELDS:
            value = format_input_date(value)
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if value is None or value == "":
            continue
        normalised[key] = value
    return normalised


def validate_product_fields(values: Mapping[str, Any]) -> Dict[str, str]:
    """Return ``{field: message}`` for every field that breaks a rule."""

    instance = _normalise(values)
    found: Dict[str, tuple[int, str]] = {}

    for error in _validator.iter_errors(instance):
        rule = error.validator
        if rule == "required":
            fields = [f for f in error.validator_value if f not in instance]
        elif error.path:
            fields = [str(error.path[0])]
        else:
            continue

        rank = _RULE_PRIORITY.index(rule) if rule in _RULE_PRIORITY else len(_RULE_PRIORITY)
        for field in fields:
            current = found.get(field)
            if current is None or rank < current[0]:
                found[field] = (rank, _message(rule, field, error.validator_value))

    return {field: message for field, (_, message) in found.items()}


def ensure_valid(values: Mapping[str, Any]) -> None:
    """Raise :class:`ValidationError` when *values* break the rule set."""

    errors = validate_product_fields(values)
    if errors:
        raise ValidationError(errors)


__all__ = [
    "PRODUCT_SCHEMA",
    "ensure_valid",
    "invalid_type_message",
    "max_length_message",
    "min_length_message",
    "required_message",
    "validate_product_fields",
]
