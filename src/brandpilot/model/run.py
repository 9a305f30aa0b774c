from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any


class NodeRunStatus(StrEnum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"
    ERROR = "error"
    CANCELLED = "cancelled"
    SKIPPED = "skipped"


class RunStatus(StrEnum):
    RUNNING = "running"
    COMPLETED = "completed"
    STOPPED = "stopped"
    ERROR = "error"


@dataclass(frozen=True)
class NodeRun:
    node_id: str
    status: NodeRunStatus = NodeRunStatus.IDLE
    started_at: str | None = None  # ISO 8601
    completed_at: str | None = None
    duration: int | None = None  # milliseconds
    output: tuple[str, ...] = ()
    result: str | None = None
    error: str | None = None

    def reset(self) -> NodeRun:
        """Return a fresh idle record for the same node."""
        return NodeRun(node_id=self.node_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodeId": self.node_id,
            "status": self.status.value,
            "startedAt": self.started_at,
            "completedAt": self.completed_at,
            "duration": self.duration,
            "output": list(self.output),
            "result": self.result,
            "error": self.error,
        }


@dataclass(frozen=True)
class PipelineRun:
    id: str
    pipeline_id: str
    status: RunStatus = RunStatus.RUNNING
    started_at: str = ""
    completed_at: str | None = None
    duration: int = 0  # milliseconds
    node_runs: tuple[NodeRun, ...] = ()

    def index_of(self, node_id: str) -> int:
        """Position of *node_id* in the execution order; -1 if absent."""
        for i, nr in enumerate(self.node_runs):
            if nr.node_id == node_id:
                return i
        return -1

    def node_run(self, node_id: str) -> NodeRun | None:
        idx = self.index_of(node_id)
        return self.node_runs[idx] if idx >= 0 else None

    def with_node_run(self, index: int, node_run: NodeRun) -> PipelineRun:
        """Return a copy with the NodeRun at *index* replaced."""
        node_runs = list(self.node_runs)
        node_runs[index] = node_run
        return replace(self, node_runs=tuple(node_runs))

    @property
    def running_node_ids(self) -> list[str]:
        return [nr.node_id for nr in self.node_runs if nr.status == NodeRunStatus.RUNNING]

    @property
    def is_terminal(self) -> bool:
        return self.status != RunStatus.RUNNING

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "pipelineId": self.pipeline_id,
            "status": self.status.value,
            "startedAt": self.started_at,
            "completedAt": self.completed_at,
            "duration": self.duration,
            "nodeRuns": [nr.to_dict() for nr in self.node_runs],
        }
