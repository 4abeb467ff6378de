"""CLI entrypoint."""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Mapping

from quick_actor.defaults import format_scalar, present_value
from quick_actor.errors import ActorLoadError, ActorNotFoundError, RunSubmissionError, ValidationError
from quick_actor.io_utils import load_presets, parse_assignments
from quick_actor.models.connection_spec import ConnectionSpec
from quick_actor.models.field_schema import FieldSchema
from quick_actor.models.schema_resolution import SchemaResolution
from quick_actor.models.workflow_result import WorkflowResult
from quick_actor.ui_adaptors import PresetInput, UiAdaptor
from quick_actor.workflow import ActorWorkflow

# Typed at a field prompt to leave the field out of the run input.
CLEAR = "-"


def _dump(data: Any) -> str:
    if isinstance(data, str):
        return data
    try:
        return json.dumps(data, indent=2, default=str)
    except (TypeError, ValueError):
        return str(data)


def field_label(name: str, field: FieldSchema) -> str:
    kind = field.type
    if field.type == "array" and field.items_type:
        kind = f"{kind}<{field.items_type}>"
    label = f"{name}{' *' if field.required else ''} ({kind})"
    if field.enum:
        label += f" [{' | '.join(format_scalar(choice) for choice in field.enum)}]"
    return label


def as_prompt_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return format_scalar(value)


class PromptAdaptor(UiAdaptor):
    def __init__(
        self,
        presets: Mapping[str, Any] | None = None,
        ask: Callable[[str], str] = input,
        ask_secret: Callable[[str], str] = getpass.getpass,
        write: Callable[[str], None] = print,
    ) -> None:
        self._presets = dict(presets or {})
        self._ask = ask
        self._ask_secret = ask_secret
        self._write = write

    def prompt(self, label: str, default: str = "") -> str:
        suffix = f" [{default}]" if default else ""
        answer = self._ask(f"{label}{suffix}: ").strip()
        return answer or default

    async def get_connection_info(self, initial: ConnectionSpec) -> ConnectionSpec:
        token = self._ask_secret("Apify API Token (blank keeps current): ").strip() or initial.resolved_token()
        actor_id = self.prompt("Apify Actor", initial.actor_id)
        output_key = self.prompt("Output Key", initial.output_key)
        return initial.model_copy(update={"token": token, "actor_id": actor_id, "output_key": output_key})

    async def show(self, message: str, data: Any = None) -> None:
        if data is None:
            self._write(message)
            return
        self._write(f"{message}:")
        self._write(_dump(data))

    def _editable_default(self, name: str, field: FieldSchema, defaults: Mapping[str, Any]) -> str:
        if name in self._presets:
            preset = self._presets[name]
            if isinstance(preset, str):
                return preset
            return as_prompt_text(present_value(field, preset, multiline=False))
        return as_prompt_text(present_value(field, defaults.get(name), multiline=False))

    async def collect_input(self, resolution: SchemaResolution, defaults: Mapping[str, Any]) -> dict[str, Any]:
        if not resolution.field_schemas:
            self._write("This actor defines no input schema or example input; running without parameters.")
        else:
            self._write(f"Press Enter to keep a shown value, or type {CLEAR} to clear it.")
        raw: dict[str, Any] = {}
        for name, field in resolution.field_schemas.items():
            if field.description:
                self._write(field.description)
            answer = self.prompt(field_label(name, field), self._editable_default(name, field, defaults))
            if answer == CLEAR:
                continue
            if answer != "":
                raw[name] = answer
        return raw


def print_result(result: WorkflowResult, max_items: int, write: Callable[[str], None] = print) -> None:
    run = result.run
    write(f"Run status: {run.status}")
    write(f"Run cost (USD): {run.usage_total_usd}")
    write(f"Store ID: {run.default_key_value_store_id or '-'}")
    write(f"Dataset ID: {run.default_dataset_id or '-'}")
    outputs = result.outputs
    if outputs is None:
        return
    if outputs.kv_record is not None:
        if outputs.kv_record.content_type:
            write(f"KV Record ({outputs.kv_record.content_type}):")
        else:
            write("KV Record:")
        write(_dump(outputs.kv_record.value))
    else:
        write("KV Record: None")
    if outputs.record_url:
        write(f"Direct output link: {outputs.record_url}")
    write(f"Dataset Items: {len(outputs.dataset_items)}")
    for item in outputs.dataset_items[:max_items]:
        write(_dump(item))
    if len(outputs.dataset_items) > max_items:
        write(f"Showing first {max_items} items...")
    for warning in outputs.warnings:
        write(warning)


async def run_workflow(workflow: ActorWorkflow, connection: ConnectionSpec) -> WorkflowResult:
    return await workflow.run(connection)


def main() -> None:
    parser = argparse.ArgumentParser(description="Load an Apify actor, prompt for its input and run it.")
    parser.add_argument("--token", type=str, default="", help="Apify API token (defaults to $APIFY_TOKEN)")
    parser.add_argument("--token-env", type=str, default="APIFY_TOKEN")
    parser.add_argument("--actor", type=str, default="apify/hello-world")
    parser.add_argument("--output-key", type=str, default="OUTPUT")
    parser.add_argument("--input-file", type=str, help="JSON or YAML file with field values")
    parser.add_argument("--set", action="append", default=[], metavar="KEY=VALUE", help="Field value override")
    parser.add_argument("--no-input", action="store_true", help="Run with defaults and presets, without prompting")
    parser.add_argument("--max-items", type=int, default=5, help="Dataset items to print")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    connection = ConnectionSpec(
        token=args.token,
        token_env=args.token_env,
        actor_id=args.actor,
        output_key=args.output_key,
    )
    try:
        presets: dict[str, Any] = {}
        if args.input_file:
            presets.update(load_presets(Path(args.input_file)))
        presets.update(parse_assignments(args.set))
    except (OSError, ValueError) as exc:
        parser.error(str(exc))

    ui: UiAdaptor
    if args.no_input:
        ui = PresetInput(connection, presets)
    else:
        ui = PromptAdaptor(presets)
    workflow = ActorWorkflow(ui)

    # Async entrypoint
    import anyio

    try:
        result = anyio.run(run_workflow, workflow, connection)
    except (ValidationError, RunSubmissionError, ActorNotFoundError, ActorLoadError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        print_result(result, args.max_items)
