"""Async access to the Apify platform."""

from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import quote

from apify_client import ApifyClientAsync

from quick_actor.errors import ActorLoadError, ActorNotFoundError, RunSubmissionError
from quick_actor.models.run_outputs import KeyValueRecord, RunOutputs
from quick_actor.models.run_result import RunResult


logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.apify.com/v2"


def record_url(store_id: str, key: str) -> str:
    return f"{API_BASE_URL}/key-value-stores/{store_id}/records/{quote(key, safe='')}?disableRedirect=1"


def build_client(token: str) -> ApifyClientAsync:
    return ApifyClientAsync(token=token)


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class ActorPlatform:
    def __init__(self, token: str, client: ApifyClientAsync | None = None) -> None:
        if not token and client is None:
            raise ValueError("Missing token")
        self.client: ApifyClientAsync = client if client is not None else build_client(token)

    async def current_user(self) -> dict[str, Any] | None:
        """Best-effort lookup of the authenticated user."""
        try:
            user = await self.client.user().get()
        except Exception as exc:
            logger.warning("Couldn't fetch user: %s", _describe(exc))
            return None
        if user:
            logger.info("Authenticated as: %s", user.get("username") or user.get("id"))
        return user

    async def load_actor(self, actor_id: str) -> dict[str, Any]:
        try:
            actor = await self.client.actor(actor_id).get()
        except Exception as exc:
            raise ActorLoadError(f"Couldn't load actor {actor_id}: {_describe(exc)}") from exc
        if not actor:
            raise ActorNotFoundError(f"Actor not found: {actor_id}")
        return actor

    async def fetch_build(self, build_id: str) -> Mapping[str, Any] | None:
        return await self.client.build(build_id).get()

    async def run_actor(self, actor_id: str, run_input: Mapping[str, Any]) -> RunResult:
        """
        Starts a run and waits for it to finish.
        Any failure is raised as RunSubmissionError carrying the underlying message.
        """
        try:
            run = await self.client.actor(actor_id).call(run_input=dict(run_input))
        except Exception as exc:
            raise RunSubmissionError(_describe(exc)) from exc
        if run is None:
            raise RunSubmissionError(f"Run of {actor_id} returned no result.")
        return RunResult.model_validate(run)

    async def fetch_record(self, store_id: str, key: str) -> KeyValueRecord | None:
        record = await self.client.key_value_store(store_id).get_record(key)
        if record is None:
            return None
        if isinstance(record, Mapping) and "value" in record:
            return KeyValueRecord(key=key, content_type=record.get("content_type"), value=record["value"])
        return KeyValueRecord(key=key, value=record)

    async def fetch_dataset_items(self, dataset_id: str) -> list[Any]:
        page = await self.client.dataset(dataset_id).list_items(clean=True)
        return list(page.items or [])

    async def fetch_outputs(self, run: RunResult, output_key: str | None) -> RunOutputs:
        """
        Reads the run's output record and dataset items.
        The two reads are independent; a failure in one is kept as a warning.
        """
        outputs = RunOutputs()
        store_id = run.default_key_value_store_id
        if store_id and output_key:
            outputs.record_url = record_url(store_id, output_key)
            try:
                outputs.kv_record = await self.fetch_record(store_id, output_key)
            except Exception as exc:
                message = f"KV fetch warning: {_describe(exc)}"
                logger.warning("%s", message)
                outputs.warnings.append(message)
            else:
                if outputs.kv_record is None:
                    logger.info("No record %r in store %s.", output_key, store_id)
        else:
            logger.info("No default key-value store on run or missing output key.")

        if run.default_dataset_id:
            try:
                outputs.dataset_items = await self.fetch_dataset_items(run.default_dataset_id)
            except Exception as exc:
                message = f"Dataset fetch warning: {_describe(exc)}"
                logger.warning("%s", message)
                outputs.warnings.append(message)
            else:
                logger.info("Fetched %d dataset items.", len(outputs.dataset_items))
        return outputs
