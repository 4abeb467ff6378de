"""Coercion of raw field values into a typed run input."""

from __future__ import annotations

import json
import math
from typing import Any, Callable, Final, Mapping, TypeAlias

from quick_actor.defaults import format_scalar, parse_number
from quick_actor.errors import ValidationError
from quick_actor.models.field_schema import FieldSchema

RunInput: TypeAlias = dict[str, Any]


class _Omit:
    def __repr__(self) -> str:
        return "OMIT"


# Returned by a coercer when the field should not be submitted.
OMIT: Final = _Omit()

FALSE_WORDS = frozenset({"", "false", "0", "no", "off"})

Coercer = Callable[[str, FieldSchema, Any], Any]


def coerce_object(name: str, field: FieldSchema, value: Any) -> Any:
    if isinstance(value, str):
        if not value.strip():
            return OMIT
        try:
            return json.loads(value)
        except ValueError:
            raise ValidationError.for_field(name, "contains invalid JSON.") from None
    if value is None:
        return OMIT
    return value


def _coerce_number(name: str, value: Any, *, integer: bool) -> int | float:
    kind = "an integer" if integer else "a number"
    if isinstance(value, bool):
        raise ValidationError.for_field(name, f"must be {kind}.")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value) or (integer and not float(value).is_integer()):
            raise ValidationError.for_field(name, f"must be {kind}.")
        return int(value) if integer else value
    if isinstance(value, str) and value.strip():
        try:
            return parse_number(value, integer=integer)
        except ValueError:
            pass
    raise ValidationError.for_field(name, f"must be {kind}.")


def _split_items(text: str) -> list[str]:
    separator = "\n" if "\n" in text else ","
    return [part.strip() for part in text.split(separator) if part.strip()]


def coerce_array(name: str, field: FieldSchema, value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return list(value)
    if value is None:
        return OMIT
    if not isinstance(value, str):
        raise ValidationError.for_field(name, "must be a list of values or a JSON array.")
    text = value.strip()
    if not text:
        return OMIT
    if text.startswith("["):
        try:
            parsed = json.loads(text)
        except ValueError:
            parsed = None
        if not isinstance(parsed, list):
            raise ValidationError.for_field(name, "must be a list of values or a JSON array.")
        return parsed

    parts = _split_items(text)
    if field.items_type in ("number", "integer"):
        integer = field.items_type == "integer"
        try:
            return [parse_number(part, integer=integer) for part in parts]
        except ValueError:
            raise ValidationError.for_field(name, "must contain only numbers.") from None
    if field.items_type == "boolean":
        lowered = [part.lower() for part in parts]
        if any(part not in ("true", "false") for part in lowered):
            raise ValidationError.for_field(name, "must contain only booleans (true/false).")
        return [part == "true" for part in lowered]
    return parts


def coerce_number(name: str, field: FieldSchema, value: Any) -> Any:
    return _coerce_number(name, value, integer=False)


def coerce_integer(name: str, field: FieldSchema, value: Any) -> Any:
    return _coerce_number(name, value, integer=True)


def coerce_boolean(name: str, field: FieldSchema, value: Any) -> Any:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() not in FALSE_WORDS
    return bool(value)


def coerce_string(name: str, field: FieldSchema, value: Any) -> Any:
    cleaned = value.strip() if isinstance(value, str) else value
    if cleaned is None or cleaned == "":
        return OMIT
    return cleaned


COERCERS: dict[str, Coercer] = {
    "object": coerce_object,
    "array": coerce_array,
    "number": coerce_number,
    "integer": coerce_integer,
    "boolean": coerce_boolean,
    "string": coerce_string,
}


def check_enum(name: str, field: FieldSchema, value: Any) -> None:
    if not field.enum or isinstance(value, (list, dict)):
        return
    if value not in field.enum and format_scalar(value) not in {format_scalar(choice) for choice in field.enum}:
        choices = ", ".join(str(choice) for choice in field.enum)
        raise ValidationError.for_field(name, f"must be one of: {choices}.")


def coerce(field_schemas: Mapping[str, FieldSchema], raw_values: Mapping[str, Any]) -> RunInput:
    """
    Converts raw values into the input submitted with a run.
    Fields absent from raw_values are not submitted.
    Raises ValidationError on the first malformed field, then on any missing required fields.
    """
    run_input: RunInput = {}
    for name, field in field_schemas.items():
        if name not in raw_values:
            continue
        coercer = COERCERS.get(field.type, coerce_string)
        value = coercer(name, field, raw_values[name])
        if value is OMIT:
            continue
        check_enum(name, field, value)
        run_input[name] = value

    missing = [name for name, field in field_schemas.items() if field.required and name not in run_input]
    if missing:
        raise ValidationError.missing(missing)
    return run_input
