"""Default input derivation and presentation of editable values."""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Final, Mapping, TypeAlias

from quick_actor.models.field_schema import FieldSchema
from quick_actor.schema_resolver import infer_field_schemas


logger = logging.getLogger(__name__)

DefaultInput: TypeAlias = dict[str, Any]

# Blank numeric value. Distinct from zero, and rejected by coercion if submitted.
EMPTY: Final = ""


def candidate_default(field: FieldSchema) -> Any:
    if field.default is not None:
        return field.default
    return field.placeholder


def derive_defaults(field_schemas: Mapping[str, FieldSchema]) -> DefaultInput:
    """
    Returns one default per field that has one. Fields without a default are left out.
    """
    defaults: DefaultInput = {}
    for name, field in field_schemas.items():
        value = candidate_default(field)
        if value is not None:
            defaults[name] = value
    return defaults


def derive_example_defaults(example: Mapping[str, Any]) -> DefaultInput:
    return derive_defaults(infer_field_schemas(example))


def parse_number(text: str, *, integer: bool = False) -> int | float:
    """
    Parses numeric text. Raises ValueError for non-numeric, non-finite, or (with integer) fractional input.
    """
    cleaned = text.strip()
    try:
        return int(cleaned)
    except ValueError:
        pass
    number = float(cleaned)
    if not math.isfinite(number):
        raise ValueError(f"Not a finite number: {text!r}")
    if integer:
        if not number.is_integer():
            raise ValueError(f"Not an integer: {text!r}")
        return int(number)
    return number


def format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _reads_back(value: Any, items_type: str | None) -> bool:
    if items_type in ("number", "integer"):
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if items_type == "boolean":
        return isinstance(value, bool)
    if items_type not in (None, "string"):
        return False
    if not isinstance(value, str) or not value:
        return False
    return "\n" not in value and "," not in value and value == value.strip() and not value.startswith("[")


def format_array(values: list[Any], items_type: str | None = None, *, multiline: bool = True) -> str:
    """
    Newline-joined text when every element reads back unchanged, else a JSON array.
    """
    if multiline and values and all(_reads_back(value, items_type) for value in values):
        return "\n".join(format_scalar(value) for value in values)
    try:
        return json.dumps(values)
    except (TypeError, ValueError):
        return str(values)


def format_object(value: Any, *, multiline: bool = True) -> str:
    try:
        return json.dumps(value, indent=2 if multiline else None)
    except (TypeError, ValueError):
        return str(value)


def present_value(field: FieldSchema, value: Any, *, multiline: bool = True) -> Any:
    if field.type == "object":
        if value is None:
            return ""
        return format_object(value, multiline=multiline)
    if field.type == "array":
        if isinstance(value, (list, tuple)):
            return format_array(list(value), field.items_type, multiline=multiline)
        if isinstance(value, str):
            return value
        return ""
    if field.type == "boolean":
        return False if value is None else bool(value)
    if field.type in ("number", "integer"):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            try:
                return parse_number(value, integer=field.type == "integer")
            except ValueError:
                logger.debug("Ignoring non-numeric default %r", value)
        return EMPTY
    return "" if value is None else value


def present_defaults(
    field_schemas: Mapping[str, FieldSchema],
    defaults: Mapping[str, Any],
    *,
    multiline: bool = True,
) -> dict[str, Any]:
    """
    Editable values for every field, prefilled from defaults.
    """
    return {
        name: present_value(field, defaults.get(name), multiline=multiline)
        for name, field in field_schemas.items()
    }
