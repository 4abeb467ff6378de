from typing import Any

import pytest

from quick_actor import coercion
from quick_actor.coercion import coerce
from quick_actor.errors import ValidationError
from quick_actor.models import FieldSchema


SCHEMAS = {
    "url": FieldSchema(type="string", required=True, default="https://x"),
    "maxItems": FieldSchema(type="integer"),
}


def test_missing_required_field_fails() -> None:
    with pytest.raises(ValidationError) as excinfo:
        coerce(SCHEMAS, {"maxItems": "10"})
    assert str(excinfo.value) == "Missing required fields: url"
    assert excinfo.value.fields == ["url"]


def test_present_required_field_succeeds() -> None:
    assert coerce(SCHEMAS, {"url": " https://y ", "maxItems": "10"}) == {"url": "https://y", "maxItems": 10}


def test_missing_required_lists_every_field() -> None:
    schemas = {
        "a": FieldSchema(required=True),
        "b": FieldSchema(type="object", required=True),
        "c": FieldSchema(),
    }
    with pytest.raises(ValidationError) as excinfo:
        coerce(schemas, {"a": "  ", "c": "x"})
    assert str(excinfo.value) == "Missing required fields: a, b"
    assert excinfo.value.fields == ["a", "b"]


def test_fields_absent_from_raw_are_not_submitted() -> None:
    schemas = {"n": FieldSchema(type="number"), "flag": FieldSchema(type="boolean"), "s": FieldSchema()}
    assert coerce(schemas, {}) == {}


def test_unknown_raw_keys_are_ignored() -> None:
    assert coerce({"s": FieldSchema()}, {"s": "x", "other": "y"}) == {"s": "x"}


@pytest.mark.parametrize("text", ["{not json", "{'a': 1}", "{"])
def test_object_malformed_json_fails(text: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        coerce({"opts": FieldSchema(type="object")}, {"opts": text})
    assert str(excinfo.value) == 'Field "opts" contains invalid JSON.'
    assert excinfo.value.fields == ["opts"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('{"a": [1, 2]}', {"opts": {"a": [1, 2]}}),
        ({"a": 1}, {"opts": {"a": 1}}),
        ("   ", {}),
    ],
)
def test_object_values(raw: Any, expected: dict[str, Any]) -> None:
    assert coerce({"opts": FieldSchema(type="object")}, {"opts": raw}) == expected


@pytest.mark.parametrize(
    ("field", "raw", "expected"),
    [
        (FieldSchema(type="array"), ["a", "b"], ["a", "b"]),
        (FieldSchema(type="array"), ("a",), ["a"]),
        (FieldSchema(type="array"), "a, b,, c ", ["a", "b", "c"]),
        (FieldSchema(type="array"), "a, b\nc", ["a, b", "c"]),
        (FieldSchema(type="array"), ' [1, "x"] ', [1, "x"]),
        (FieldSchema(type="array", items_type="number"), "1, 2.5", [1, 2.5]),
        (FieldSchema(type="array", items_type="integer"), "1\n2\n", [1, 2]),
        (FieldSchema(type="array", items_type="boolean"), "TRUE, false", [True, False]),
    ],
)
def test_array_values(field: FieldSchema, raw: Any, expected: list[Any]) -> None:
    assert coerce({"items": field}, {"items": raw}) == {"items": expected}


def test_array_blank_text_is_omitted() -> None:
    assert coerce({"items": FieldSchema(type="array")}, {"items": "  "}) == {}


@pytest.mark.parametrize(
    ("field", "raw", "reason"),
    [
        (FieldSchema(type="array"), "[1, 2", "must be a list of values or a JSON array."),
        (FieldSchema(type="array"), '["a"', "must be a list of values or a JSON array."),
        (FieldSchema(type="array", items_type="number"), "1, two", "must contain only numbers."),
        (FieldSchema(type="array", items_type="integer"), "1, 2.5", "must contain only numbers."),
        (FieldSchema(type="array", items_type="boolean"), "true, yes", "must contain only booleans (true/false)."),
    ],
)
def test_array_errors(field: FieldSchema, raw: str, reason: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        coerce({"items": field}, {"items": raw})
    assert str(excinfo.value) == f'Field "items" {reason}'


@pytest.mark.parametrize(
    ("field_type", "raw", "expected"),
    [
        ("number", "2.5", 2.5),
        ("number", "10", 10),
        ("number", 3, 3),
        ("integer", "10", 10),
        ("integer", "10.0", 10),
        ("integer", 4.0, 4),
    ],
)
def test_number_values(field_type: str, raw: Any, expected: Any) -> None:
    result = coerce({"n": FieldSchema(type=field_type)}, {"n": raw})
    assert result == {"n": expected}
    assert type(result["n"]) is type(expected)


@pytest.mark.parametrize(
    ("field_type", "raw"),
    [
        ("number", ""),
        ("number", "abc"),
        ("number", True),
        ("number", None),
        ("number", float("nan")),
        ("integer", "1.5"),
        ("integer", 2.5),
    ],
)
def test_number_errors(field_type: str, raw: Any) -> None:
    with pytest.raises(ValidationError) as excinfo:
        coerce({"n": FieldSchema(type=field_type)}, {"n": raw})
    assert excinfo.value.fields == ["n"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (True, True),
        (False, False),
        (None, False),
        ("true", True),
        ("False", False),
        ("0", False),
        ("off", False),
        ("", False),
        ("yes", True),
        (1, True),
    ],
)
def test_boolean_values(raw: Any, expected: bool) -> None:
    assert coerce({"flag": FieldSchema(type="boolean")}, {"flag": raw}) == {"flag": expected}


@pytest.mark.parametrize(("raw", "expected"), [("  hi ", {"s": "hi"}), ("", {}), ("   ", {}), (None, {}), (5, {"s": 5})])
def test_string_values(raw: Any, expected: dict[str, Any]) -> None:
    assert coerce({"s": FieldSchema()}, {"s": raw}) == expected


def test_enum_membership() -> None:
    schemas = {"mode": FieldSchema(enum=["fast", "slow"]), "level": FieldSchema(type="integer", enum=[1, 2])}
    assert coerce(schemas, {"mode": "fast", "level": "2"}) == {"mode": "fast", "level": 2}
    with pytest.raises(ValidationError) as excinfo:
        coerce(schemas, {"mode": "medium"})
    assert str(excinfo.value) == 'Field "mode" must be one of: fast, slow.'


def test_coercer_table_covers_every_type() -> None:
    assert set(coercion.COERCERS) == {"string", "number", "integer", "boolean", "array", "object"}


@pytest.mark.parametrize("field_type", ["number", "integer"])
def test_huge_integers_match_text_input(field_type: str) -> None:
    field = FieldSchema(type=field_type)
    assert coerce({"n": field}, {"n": 10**400}) == {"n": 10**400}
    assert coerce({"n": field}, {"n": "1" + "0" * 400}) == {"n": 10**400}


def test_enum_matches_across_text_and_numbers() -> None:
    schemas = {"size": FieldSchema(enum=[10, 20]), "level": FieldSchema(type="integer", enum=["1", "2"])}
    assert coerce(schemas, {"size": "10", "level": "2"}) == {"size": "10", "level": 2}
    with pytest.raises(ValidationError):
        coerce(schemas, {"size": "30"})
