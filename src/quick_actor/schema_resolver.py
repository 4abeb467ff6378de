"""Actor input schema resolution."""

from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

from quick_actor.models.build_lookup import BuildLookup
from quick_actor.models.field_schema import FieldSchema, FieldType
from quick_actor.models.schema_resolution import SchemaResolution


logger = logging.getLogger(__name__)

BuildFetcher = Callable[[str], Awaitable[Optional[Mapping[str, Any]]]]
Extractor = Callable[[Mapping[str, Any]], Optional[Any]]

FIELD_TYPES: tuple[str, ...] = ("string", "number", "integer", "boolean", "array", "object")
PREFERRED_TAGS = ("latest", "stable")


def pick_tagged_build_id(actor: Mapping[str, Any]) -> str | None:
    """
    Picks the build to inspect: "latest", then "stable", then the first tagged build.
    """
    tagged = actor.get("taggedBuilds")
    if not isinstance(tagged, Mapping) or not tagged:
        return None
    ordered = [tagged.get(tag) for tag in PREFERRED_TAGS] + list(tagged.values())
    for entry in ordered:
        if isinstance(entry, Mapping) and entry.get("buildId"):
            return str(entry["buildId"])
    return None


async def lookup_build(actor: Mapping[str, Any], fetch_build: BuildFetcher) -> BuildLookup:
    build_id = pick_tagged_build_id(actor)
    if build_id is None:
        return BuildLookup(status="no_build")
    try:
        definition = await fetch_build(build_id)
    except Exception as exc:
        return BuildLookup(status="failed", build_id=build_id, error=str(exc) or type(exc).__name__)
    if not isinstance(definition, Mapping):
        return BuildLookup(status="absent", build_id=build_id)
    return BuildLookup(status="found", build_id=build_id, definition=dict(definition))


def _as_mapping(value: Any) -> Mapping[str, Any] | None:
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return None
    if isinstance(value, Mapping):
        return value
    return None


def _definition_input(build: Mapping[str, Any]) -> Mapping[str, Any] | None:
    actor_definition = _as_mapping(build.get("actorDefinition"))
    if actor_definition is None:
        return None
    return _as_mapping(actor_definition.get("input"))


def _input_schema(build: Mapping[str, Any]) -> Mapping[str, Any] | None:
    # The API serves inputSchema as a JSON string; older payloads carry an object.
    return _as_mapping(build.get("inputSchema"))


def _definition_properties(build: Mapping[str, Any]) -> Any:
    schema = _definition_input(build)
    return schema.get("properties") if schema is not None else None


def _schema_properties(build: Mapping[str, Any]) -> Any:
    schema = _input_schema(build)
    return schema.get("properties") if schema is not None else None


def _bare_properties(build: Mapping[str, Any]) -> Any:
    schema = _input_schema(build)
    if schema is None or "properties" in schema:
        return None
    if all(isinstance(prop, Mapping) for prop in schema.values()):
        return schema
    return None


def _definition_required(build: Mapping[str, Any]) -> Any:
    schema = _definition_input(build)
    return schema.get("required") if schema is not None else None


def _schema_required(build: Mapping[str, Any]) -> Any:
    schema = _input_schema(build)
    return schema.get("required") if schema is not None else None


PROPERTIES_EXTRACTORS: tuple[Extractor, ...] = (
    _definition_properties,
    _schema_properties,
    _bare_properties,
)
REQUIRED_EXTRACTORS: tuple[Extractor, ...] = (
    _definition_required,
    _schema_required,
)


def first_match(build: Mapping[str, Any], extractors: tuple[Extractor, ...]) -> Any:
    for extract in extractors:
        found = extract(build)
        if found:
            return found
    return None


def extract_properties(build: Mapping[str, Any]) -> dict[str, Mapping[str, Any]]:
    found = first_match(build, PROPERTIES_EXTRACTORS)
    if not isinstance(found, Mapping):
        return {}
    return {str(name): prop for name, prop in found.items() if isinstance(prop, Mapping)}


def extract_required(build: Mapping[str, Any]) -> list[str]:
    found = first_match(build, REQUIRED_EXTRACTORS)
    if not isinstance(found, list):
        return []
    return [name for name in found if isinstance(name, str)]


def normalize_type(declared: Any) -> FieldType:
    if isinstance(declared, list):
        declared = declared[0] if declared else None
    if declared in FIELD_TYPES:
        return declared
    return "string"


def field_schema_from_property(prop: Mapping[str, Any], required: bool) -> FieldSchema:
    items = prop.get("items")
    items_type = normalize_type(items.get("type")) if isinstance(items, Mapping) else None
    enum = prop.get("enum")
    placeholder = prop.get("placeholderValue")
    if placeholder is None:
        placeholder = prop.get("prefill")
    return FieldSchema(
        type=normalize_type(prop.get("type")),
        items_type=items_type,
        enum=list(enum) if isinstance(enum, list) else None,
        title=prop.get("title") if isinstance(prop.get("title"), str) else None,
        description=prop.get("description") if isinstance(prop.get("description"), str) else None,
        required=required,
        placeholder=placeholder,
        default=prop.get("default"),
    )


def parse_example_input(actor: Mapping[str, Any]) -> dict[str, Any]:
    example = actor.get("exampleRunInput")
    body = example.get("body") if isinstance(example, Mapping) else None
    if not body or not isinstance(body, str):
        return {}
    try:
        parsed = json.loads(body)
    except ValueError:
        logger.info("Example run input is not valid JSON; ignoring it.")
        return {}
    if not isinstance(parsed, dict):
        return {}
    return parsed


def infer_type(value: Any) -> FieldType:
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    # bool before number: bool is an int subclass.
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    return "string"


def infer_field_schemas(example: Mapping[str, Any]) -> dict[str, FieldSchema]:
    return {str(name): FieldSchema(type=infer_type(value), default=value) for name, value in example.items()}


def build_field_schemas(build: Mapping[str, Any]) -> tuple[dict[str, FieldSchema], list[str]]:
    properties = extract_properties(build)
    required = extract_required(build)
    required_set = set(required)
    schemas = {name: field_schema_from_property(prop, name in required_set) for name, prop in properties.items()}
    return schemas, required


async def resolve(actor: Mapping[str, Any], fetch_build: BuildFetcher) -> SchemaResolution:
    """
    Resolves the input fields of an actor.
    Prefers the input schema of a tagged build and falls back to the example run input.
    Fetch failures are recorded on the returned build lookup and never raised.
    """
    lookup = await lookup_build(actor, fetch_build)
    example = parse_example_input(actor)

    if lookup.status == "failed":
        logger.warning("Couldn't get build %s: %s", lookup.build_id, lookup.error)
    elif lookup.status == "absent":
        logger.info("Build %s not found.", lookup.build_id)
    elif lookup.status == "no_build":
        logger.info("No tagged build found.")

    if lookup.found and lookup.definition is not None:
        schemas, required = build_field_schemas(lookup.definition)
        if schemas:
            logger.info("Using input schema from build %s.", lookup.build_id)
            return SchemaResolution(
                field_schemas=schemas,
                required_fields=required,
                source="build",
                build_lookup=lookup,
                example=example,
            )
        logger.info("Build %s has no input schema properties.", lookup.build_id)

    logger.info("Falling back to example run input for fields.")
    return SchemaResolution(
        field_schemas=infer_field_schemas(example),
        required_fields=[],
        source="example",
        build_lookup=lookup,
        example=example,
    )
