"""Model types for actor schemas, runs and connection settings."""

from quick_actor.models.build_lookup import BuildLookup
from quick_actor.models.connection_spec import ConnectionSpec
from quick_actor.models.field_schema import FieldSchema
from quick_actor.models.field_schema import FieldType
from quick_actor.models.run_outputs import KeyValueRecord
from quick_actor.models.run_outputs import RunOutputs
from quick_actor.models.run_result import RunResult
from quick_actor.models.schema_resolution import SchemaResolution
from quick_actor.models.workflow_result import WorkflowResult

__all__ = [
    "BuildLookup",
    "ConnectionSpec",
    "FieldSchema",
    "FieldType",
    "KeyValueRecord",
    "RunOutputs",
    "RunResult",
    "SchemaResolution",
    "WorkflowResult",
]
