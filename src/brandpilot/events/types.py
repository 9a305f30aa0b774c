"""Event types emitted while a pipeline run executes."""

from dataclasses import dataclass

from brandpilot.model.run import PipelineRun


@dataclass(frozen=True)
class RunStarted:
    run_id: str
    pipeline_id: str
    execution_order: tuple[str, ...]


@dataclass(frozen=True)
class RunResumed:
    run_id: str
    from_index: int
    skipped: bool


@dataclass(frozen=True)
class RunUpdated:
    """Carries the latest run snapshot after every transition."""

    run: PipelineRun


@dataclass(frozen=True)
class RunCompleted:
    run_id: str
    duration: int


@dataclass(frozen=True)
class RunStopped:
    run_id: str
    cancelled_node_ids: tuple[str, ...]


@dataclass(frozen=True)
class RunFailed:
    run_id: str
    node_id: str
    error: str


@dataclass(frozen=True)
class NodeStarted:
    node_id: str
    index: int


@dataclass(frozen=True)
class NodeOutput:
    node_id: str
    line: str


@dataclass(frozen=True)
class NodeCompleted:
    node_id: str
    result: str
    duration: int


@dataclass(frozen=True)
class NodeFailed:
    node_id: str
    error: str


@dataclass(frozen=True)
class NodeSkipped:
    node_id: str


@dataclass(frozen=True)
class NodeCancelled:
    node_id: str
