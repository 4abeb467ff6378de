"""Public package exports."""

from quick_actor.apify_platform import ActorPlatform
from quick_actor.coercion import coerce
from quick_actor.defaults import derive_defaults
from quick_actor.defaults import derive_example_defaults
from quick_actor.defaults import present_defaults
from quick_actor.errors import ValidationError
from quick_actor.schema_resolver import resolve
from quick_actor.ui_adaptors import PresetInput
from quick_actor.ui_adaptors import UiAdaptor
from quick_actor.workflow import ActorWorkflow

__all__ = [
    "ActorPlatform",
    "ActorWorkflow",
    "PresetInput",
    "UiAdaptor",
    "ValidationError",
    "coerce",
    "derive_defaults",
    "derive_example_defaults",
    "present_defaults",
    "resolve",
]
