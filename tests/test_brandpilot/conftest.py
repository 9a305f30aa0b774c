from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from brandpilot.agents.caller import AgentCallRequest, AgentCallResult, ProgressCallback
from brandpilot.events.bus import EventBus
from brandpilot.model.agent import AgentNode, AgentType, PipelineConnection

RESEARCHER = AgentType.CONTENT_RESEARCHER
WRITER = AgentType.CONTENT_WRITER
PUBLISHER = AgentType.PUBLISHER


# ---------------------------------------------------------------------------
# Pipeline factories
# ---------------------------------------------------------------------------


def make_node(
    id: str,
    type: AgentType = AgentType.CONTENT_WRITER,
    config: dict[str, Any] | None = None,
) -> AgentNode:
    return AgentNode(id=id, type=type, name=id, config=config)


def connect(source: str, target: str) -> PipelineConnection:
    return PipelineConnection(id=f"{source}->{target}", source_node_id=source, target_node_id=target)


def make_chain(
    spec: list[tuple[str, AgentType]],
) -> tuple[list[AgentNode], list[PipelineConnection]]:
    """Build a fully linked chain from (id, type) pairs."""
    nodes = [make_node(node_id, agent_type) for node_id, agent_type in spec]
    connections = [connect(a.id, b.id) for a, b in zip(nodes, nodes[1:])]
    return nodes, connections


# ---------------------------------------------------------------------------
# Stub collaborators
# ---------------------------------------------------------------------------


class ScriptedCaller:
    """Agent caller returning per-node-type outcomes.

    Each entry in *script* is an AgentCallResult, an exception to raise, or
    a callable taking the request and returning either of those. Types with
    no (remaining) script entry succeed with ``"<type> result"``.
    """

    def __init__(self, script: dict[AgentType, list[Any]] | None = None) -> None:
        self._script = {k: list(v) for k, v in (script or {}).items()}
        self.requests: list[AgentCallRequest] = []
        self.progress_lines: list[str] = []
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def call(
        self,
        request: AgentCallRequest,
        progress: ProgressCallback | None = None,
    ) -> AgentCallResult:
        with self._lock:
            self.requests.append(request)
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            queue = self._script.get(request.node_type)
            item: Any = queue.pop(0) if queue else None
            if callable(item) and not isinstance(item, AgentCallResult):
                item = item(request)
            if isinstance(item, Exception):
                raise item
            if item is None:
                if progress is not None:
                    progress(f"{request.node_type.value} working")
                return AgentCallResult.ok(f"{request.node_type.value} result")
            return item
        finally:
            with self._lock:
                self.active -= 1

    @property
    def called_types(self) -> list[AgentType]:
        return [r.node_type for r in self.requests]


class FakeClock:
    """Clock that advances a fixed step on every reading."""

    def __init__(self, step_ms: int = 10) -> None:
        self.now = datetime(2026, 2, 10, 9, 0, tzinfo=timezone.utc)
        self.step = timedelta(milliseconds=step_ms)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


class EventCollector:
    """Collects all events emitted during a run."""

    def __init__(self, bus: EventBus) -> None:
        self.events: list[Any] = []
        bus.on_all(self.events.append)

    def of_type(self, event_type: type) -> list[Any]:
        return [e for e in self.events if isinstance(e, event_type)]

    def names(self) -> list[str]:
        return [type(e).__name__ for e in self.events]


def wait_until(predicate: Callable[[], bool], timeout: float = 5.0) -> bool:
    event = threading.Event()
    deadline = timeout
    while deadline > 0:
        if predicate():
            return True
        event.wait(0.01)
        deadline -= 0.01
    return predicate()
