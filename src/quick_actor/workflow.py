"""The load, prompt, run and fetch sequence for one actor."""

from __future__ import annotations

import logging
from typing import Callable

from quick_actor.apify_platform import ActorPlatform
from quick_actor.coercion import RunInput, coerce
from quick_actor.defaults import DefaultInput, derive_defaults
from quick_actor.errors import ValidationError
from quick_actor.models.connection_spec import ConnectionSpec
from quick_actor.models.schema_resolution import SchemaResolution
from quick_actor.models.workflow_result import WorkflowResult
from quick_actor.schema_resolver import resolve
from quick_actor.ui_adaptors import UiAdaptor


logger = logging.getLogger(__name__)

PlatformFactory = Callable[[str], ActorPlatform]


class ActorWorkflow:
    def __init__(self, ui: UiAdaptor, platform_factory: PlatformFactory = ActorPlatform) -> None:
        self._ui: UiAdaptor = ui
        self._platform_factory: PlatformFactory = platform_factory

    async def load(self, platform: ActorPlatform, actor_id: str) -> tuple[SchemaResolution, DefaultInput]:
        await self._ui.show(f"Loading actor: {actor_id}")
        await platform.current_user()
        actor = await platform.load_actor(actor_id)
        await self._ui.show("Actor loaded", {"id": actor.get("id"), "name": actor.get("name")})

        resolution = await resolve(actor, platform.fetch_build)
        defaults = derive_defaults(resolution.field_schemas)
        await self._ui.show(f"Schema source: {resolution.source}")
        await self._ui.show("Default input prepared", defaults)
        return resolution, defaults

    async def collect(self, resolution: SchemaResolution, defaults: DefaultInput) -> RunInput:
        raw = await self._ui.collect_input(resolution, defaults)
        unknown = [name for name in raw if name not in resolution.field_schemas]
        if unknown:
            logger.warning("Ignoring values for unknown fields: %s", ", ".join(unknown))
        try:
            return coerce(resolution.field_schemas, raw)
        except ValidationError as exc:
            await self._ui.show(str(exc))
            raise

    async def run(self, initial: ConnectionSpec | None = None) -> WorkflowResult:
        connection = await self._ui.get_connection_info(initial or ConnectionSpec())
        token = connection.resolved_token()
        if not token:
            raise ValueError("Missing token")
        if not connection.actor_id:
            raise ValueError("Missing actor id")

        platform = self._platform_factory(token)
        resolution, defaults = await self.load(platform, connection.actor_id)
        run_input = await self.collect(resolution, defaults)

        await self._ui.show("Running actor...", run_input)
        run = await platform.run_actor(connection.actor_id, run_input)
        await self._ui.show(f"Run status: {run.status}", {"costUsd": run.usage_total_usd})
        result = WorkflowResult(actor_id=connection.actor_id, input=run_input, run=run)
        if not run.succeeded:
            await self._ui.show("Run did not succeed. Aborting output fetch.", {"status": run.status})
            return result

        await self._ui.show("Fetching outputs...")
        result.outputs = await platform.fetch_outputs(run, connection.output_key)
        await self._ui.show("Outputs fetched.", result.outputs.model_dump(mode="json"))
        return result
