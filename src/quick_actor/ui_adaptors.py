"""Presentation adaptors for the actor workflow."""

from __future__ import annotations

from typing import Any, Mapping

from quick_actor.defaults import EMPTY, present_defaults
from quick_actor.models.connection_spec import ConnectionSpec
from quick_actor.models.schema_resolution import SchemaResolution


class UiAdaptor:
    async def get_connection_info(self, initial: ConnectionSpec) -> ConnectionSpec:
        raise NotImplementedError("UiAdaptor.get_connection_info must be implemented by subclasses.")

    async def show(self, message: str, data: Any = None) -> None:
        raise NotImplementedError("UiAdaptor.show must be implemented by subclasses.")

    async def collect_input(self, resolution: SchemaResolution, defaults: Mapping[str, Any]) -> dict[str, Any]:
        """
        Returns raw field values keyed by field name. Fields left out are not submitted.
        """
        raise NotImplementedError("UiAdaptor.collect_input must be implemented by subclasses.")


class PresetInput(UiAdaptor):
    """Non-interactive adaptor: fixed connection info, defaults overlaid with preset values."""

    def __init__(self, connection: ConnectionSpec, presets: Mapping[str, Any] | None = None) -> None:
        self._connection = connection
        self._presets = dict(presets or {})
        self.messages: list[tuple[str, Any]] = []

    async def get_connection_info(self, initial: ConnectionSpec) -> ConnectionSpec:
        return self._connection

    async def show(self, message: str, data: Any = None) -> None:
        self.messages.append((message, data))

    async def collect_input(self, resolution: SchemaResolution, defaults: Mapping[str, Any]) -> dict[str, Any]:
        presented = present_defaults(resolution.field_schemas, defaults, multiline=False)
        raw = {name: value for name, value in presented.items() if value != EMPTY}
        raw.update(self._presets)
        return raw
