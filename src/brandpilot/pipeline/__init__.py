"""Pipeline structure: execution order, builder edits, and document loading."""

from brandpilot.pipeline.editing import add_node, remove_node, update_node
from brandpilot.pipeline.loader import (
    dump_run,
    load_account_context,
    load_pipeline,
    pipeline_from_dict,
)
from brandpilot.pipeline.order import resolve_execution_order

__all__ = [
    "resolve_execution_order",
    "add_node",
    "update_node",
    "remove_node",
    "pipeline_from_dict",
    "load_pipeline",
    "load_account_context",
    "dump_run",
]
