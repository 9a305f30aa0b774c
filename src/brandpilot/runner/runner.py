"""Execution runner: drives a pipeline's agent nodes one at a time."""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

from brandpilot.agents.caller import AgentCaller, AgentCallRequest, AgentCallResult
from brandpilot.agents.formatting import format_node_result
from brandpilot.errors import InvalidRunStateError, RunnerBusyError
from brandpilot.events import types as events
from brandpilot.events.bus import EventBus
from brandpilot.model.agent import (
    AccountContext,
    AgentNode,
    AgentType,
    AIProvider,
    PipelineConnection,
)
from brandpilot.model.run import NodeRun, NodeRunStatus, PipelineRun, RunStatus
from brandpilot.pipeline.order import resolve_execution_order
from brandpilot.runner.status import StreamBuffer, status_lines_for

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _elapsed_ms(start: datetime, end: datetime) -> int:
    return max(0, int((end - start).total_seconds() * 1000))


class ExecutionRunner:
    """Runs a pipeline's nodes sequentially against an agent caller.

    ``start``, ``retry`` and ``skip`` drive the run on the calling thread and
    return the settled run. ``stop`` may be called from any thread, including
    from inside the agent caller; the in-flight call is left to finish and its
    result is discarded.

    Every transition replaces ``current_run`` with a new frozen snapshot and
    emits ``RunUpdated`` on the event bus.
    """

    def __init__(
        self,
        nodes: Sequence[AgentNode],
        connections: Sequence[PipelineConnection],
        caller: AgentCaller,
        *,
        pipeline_id: str = "pipeline",
        provider: AIProvider = AIProvider.ANTHROPIC,
        account_context: AccountContext | None = None,
        event_bus: EventBus | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._nodes = {n.id: n for n in nodes}
        self._node_list = list(nodes)
        self._connections = list(connections)
        self.caller = caller
        self.pipeline_id = pipeline_id
        self.provider = provider
        self.account_context = account_context
        self.event_bus = event_bus or EventBus()
        self._clock = clock or _utc_now

        self._lock = threading.Lock()
        self._abort = threading.Event()
        self._run: PipelineRun | None = None
        self._run_started: datetime | None = None
        self._index = 0
        self._active_node_id: str | None = None
        self._node_started: datetime | None = None
        self._buffer = StreamBuffer()

    # -- Read-only view --------------------------------------------------

    @property
    def current_run(self) -> PipelineRun | None:
        return self._run

    @property
    def is_running(self) -> bool:
        run = self._run
        return run is not None and run.status == RunStatus.RUNNING

    @property
    def active_node_id(self) -> str | None:
        return self._active_node_id

    @property
    def streaming_text(self) -> str:
        with self._lock:
            return self._buffer.text

    @property
    def execution_order(self) -> list[str]:
        """Node ids of the current run, or the order a new run would use."""
        run = self._run
        if run is not None:
            return [nr.node_id for nr in run.node_runs]
        return resolve_execution_order(self._node_list, self._connections)

    def set_pipeline(
        self,
        nodes: Sequence[AgentNode],
        connections: Sequence[PipelineConnection],
    ) -> None:
        """Replace the graph used by the next ``start``.

        A settled run belongs to the old graph, so it is discarded and can no
        longer be retried or skipped.
        """
        with self._lock:
            if self._is_active():
                raise RunnerBusyError("Cannot edit the pipeline while a run is active")
            self._nodes = {n.id: n for n in nodes}
            self._node_list = list(nodes)
            self._connections = list(connections)
            self._run = None
            self._run_started = None
            self._index = 0
            self._active_node_id = None
            self._buffer.reset()

    # -- Control ---------------------------------------------------------

    def start(self) -> PipelineRun:
        """Begin a fresh run from the first node, discarding any previous run."""
        order = resolve_execution_order(self._node_list, self._connections)
        now = self._clock()
        run = PipelineRun(
            id=f"run-{uuid.uuid4().hex[:12]}",
            pipeline_id=self.pipeline_id,
            status=RunStatus.RUNNING,
            started_at=now.isoformat(),
            node_runs=tuple(NodeRun(node_id=node_id) for node_id in order),
        )
        if not order:
            run = replace(run, status=RunStatus.COMPLETED, completed_at=run.started_at)
        with self._lock:
            if self._is_active():
                raise RunnerBusyError("A run is already in progress")
            abort = self._new_abort()
            self._run = run
            self._run_started = now
            self._index = 0
            self._active_node_id = None
            self._buffer.reset()

        logger.info("Starting run %s for pipeline %s (%d nodes)", run.id, self.pipeline_id, len(order))
        announce: list[object] = [
            events.RunStarted(run_id=run.id, pipeline_id=self.pipeline_id, execution_order=tuple(order)),
            events.RunUpdated(run=run),
        ]
        if run.status == RunStatus.COMPLETED:
            announce.append(events.RunCompleted(run_id=run.id, duration=run.duration))
        return self._drive(abort, 0, None, announce)

    def stop(self) -> PipelineRun | None:
        """Abort the active run. A no-op when nothing is running."""
        with self._lock:
            run = self._run
            if run is None or run.status != RunStatus.RUNNING:
                return run
            self._abort.set()
            now = self._clock()
            cancelled = tuple(run.running_node_ids)
            run = replace(
                run,
                status=RunStatus.STOPPED,
                completed_at=now.isoformat(),
                duration=self._run_elapsed(now),
                node_runs=tuple(
                    replace(nr, status=NodeRunStatus.CANCELLED)
                    if nr.status == NodeRunStatus.RUNNING
                    else nr
                    for nr in run.node_runs
                ),
            )
            self._run = run
            self._active_node_id = None

        logger.info("Run %s stopped", run.id)
        for node_id in cancelled:
            self.event_bus.emit(events.NodeCancelled(node_id=node_id))
        self.event_bus.emit(events.RunStopped(run_id=run.id, cancelled_node_ids=cancelled))
        self.event_bus.emit(events.RunUpdated(run=run))
        return run

    def retry(self) -> PipelineRun:
        """Re-run the failed (or cancelled) node and everything after it."""
        with self._lock:
            run = self._resumable_run("retry")
            index = self._index
            previous_output = None
            for nr in reversed(run.node_runs[:index]):
                if nr.status == NodeRunStatus.COMPLETE:
                    previous_output = nr.result
                    break
            run = replace(
                run,
                status=RunStatus.RUNNING,
                completed_at=None,
                node_runs=run.node_runs[:index] + tuple(nr.reset() for nr in run.node_runs[index:]),
            )
            abort = self._new_abort()
            self._run = run
            self._buffer.reset()

        logger.info("Retrying run %s from node %d", run.id, index)
        announce = [
            events.RunResumed(run_id=run.id, from_index=index, skipped=False),
            events.RunUpdated(run=run),
        ]
        return self._drive(abort, index, previous_output, announce)

    def skip(self) -> PipelineRun:
        """Mark the failed (or cancelled) node skipped and continue after it."""
        with self._lock:
            run = self._resumable_run("skip")
            index = self._index
            now = self._clock()
            skipped = replace(
                run.node_runs[index],
                status=NodeRunStatus.SKIPPED,
                completed_at=now.isoformat(),
            )
            run = replace(run.with_node_run(index, skipped), status=RunStatus.RUNNING, completed_at=None)
            if index == len(run.node_runs) - 1:
                run = self._completed(run, now)
            abort = self._new_abort()
            self._run = run
            self._index = index + 1
            self._active_node_id = None
            self._buffer.reset()

        logger.info("Skipping node %s in run %s", skipped.node_id, run.id)
        announce: list[object] = [
            events.RunResumed(run_id=run.id, from_index=index + 1, skipped=True),
            events.NodeSkipped(node_id=skipped.node_id),
            events.RunUpdated(run=run),
        ]
        if run.status == RunStatus.COMPLETED:
            announce.append(events.RunCompleted(run_id=run.id, duration=run.duration))
        # The skipped node contributes nothing downstream.
        return self._drive(abort, index + 1, None, announce)

    # -- Driver ----------------------------------------------------------

    def _drive(
        self,
        abort: threading.Event,
        index: int,
        previous_output: str | None,
        announce: Sequence[object] = (),
    ) -> PipelineRun:
        """Emit *announce*, then run nodes from *index* until the run settles.

        Anything raised along the way, by a listener or by a graph lookup,
        ends the run in ``error`` instead of leaving it running.
        """
        order = self.execution_order
        try:
            for event in announce:
                self.event_bus.emit(event)
            for i in range(index, len(order)):
                if abort.is_set():
                    break
                result = self._execute_node(abort, i, order[i], previous_output)
                if result is None:
                    break
                previous_output = result
        except Exception as exc:
            logger.exception("Run halted by an unexpected error")
            self._halt(abort, str(exc) or type(exc).__name__)
        return self._run  # type: ignore[return-value]

    def _execute_node(
        self,
        abort: threading.Event,
        index: int,
        node_id: str,
        previous_output: str | None,
    ) -> str | None:
        """Run one node. Returns its result, or None if the run halted."""
        node = self._nodes[node_id]
        lines = status_lines_for(node.type)

        def start_node(run: PipelineRun, now: datetime) -> PipelineRun:
            self._index = index
            self._active_node_id = node_id
            self._node_started = now
            self._buffer.reset(lines[0])
            nr = replace(
                run.node_runs[index],
                status=NodeRunStatus.RUNNING,
                started_at=now.isoformat(),
                output=(lines[0],),
            )
            return run.with_node_run(index, nr)

        if not self._commit(abort, start_node):
            return None
        logger.debug("Node %s (%s) started", node_id, node.type)
        self.event_bus.emit(events.NodeStarted(node_id=node_id, index=index))

        def progress(line: str) -> None:
            self._append_output(abort, index, node_id, line)

        for line in lines[1:]:
            progress(line)

        request = AgentCallRequest(
            node_type=node.type,
            config=node.config,
            provider=self.provider,
            previous_output=previous_output,
            account_context=self.account_context,
        )
        try:
            outcome = self.caller.call(request, progress)
        except Exception as exc:
            logger.exception("Agent call for node %s raised", node_id)
            outcome = AgentCallResult.failure(str(exc) or "Unknown error")

        if outcome.success:
            return self._finish_success(abort, index, node_id, node.type, outcome)
        self._finish_failure(abort, index, node_id, outcome.error or "Agent execution failed")
        return None

    def _finish_success(
        self,
        abort: threading.Event,
        index: int,
        node_id: str,
        agent_type: AgentType,
        outcome: AgentCallResult,
    ) -> str | None:
        result = format_node_result(agent_type, outcome.output)
        settled: dict[str, int] = {}

        def complete(run: PipelineRun, now: datetime) -> PipelineRun:
            nr = run.node_runs[index]
            duration = _elapsed_ms(self._node_started or now, now)
            settled["duration"] = duration
            for line in ("", "Agent response received:", result):
                self._buffer.append(line)
            nr = replace(
                nr,
                status=NodeRunStatus.COMPLETE,
                completed_at=now.isoformat(),
                duration=duration,
                output=nr.output + ("", "Agent response received:", result),
                result=result,
            )
            run = replace(run.with_node_run(index, nr), duration=self._run_elapsed(now))
            self._index = index + 1
            if index == len(run.node_runs) - 1:
                self._active_node_id = None
                run = self._completed(run, now)
            return run

        run = self._commit(abort, complete)
        if run is None:
            logger.debug("Discarding result for node %s after stop", node_id)
            return None
        self.event_bus.emit(events.NodeCompleted(node_id=node_id, result=result, duration=settled["duration"]))
        if run.status == RunStatus.COMPLETED:
            logger.info("Run %s completed in %dms", run.id, run.duration)
            self.event_bus.emit(events.RunCompleted(run_id=run.id, duration=run.duration))
        return result

    def _finish_failure(self, abort: threading.Event, index: int, node_id: str, error: str) -> None:
        def fail(run: PipelineRun, now: datetime) -> PipelineRun:
            nr = run.node_runs[index]
            self._buffer.append("")
            self._buffer.append(f"Error: {error}")
            self._active_node_id = None
            nr = replace(
                nr,
                status=NodeRunStatus.ERROR,
                completed_at=now.isoformat(),
                duration=_elapsed_ms(self._node_started or now, now),
                output=nr.output + ("", f"Error: {error}"),
                result=None,
                error=error,
            )
            return replace(
                run.with_node_run(index, nr),
                status=RunStatus.ERROR,
                duration=self._run_elapsed(now),
            )

        run = self._commit(abort, fail)
        if run is None:
            return
        logger.warning("Node %s failed in run %s: %s", node_id, run.id, error)
        self.event_bus.emit(events.NodeFailed(node_id=node_id, error=error))
        self.event_bus.emit(events.RunFailed(run_id=run.id, node_id=node_id, error=error))

    def _append_output(self, abort: threading.Event, index: int, node_id: str, line: str) -> None:
        def append(run: PipelineRun, now: datetime) -> PipelineRun:
            nr = run.node_runs[index]
            if nr.status != NodeRunStatus.RUNNING:
                return run
            self._buffer.append(line)
            return run.with_node_run(index, replace(nr, output=nr.output + (line,)))

        if self._commit(abort, append) is not None:
            self.event_bus.emit(events.NodeOutput(node_id=node_id, line=line))

    def _halt(self, abort: threading.Event, error: str) -> None:
        """End a still-running run in ``error`` after an unexpected exception."""
        with self._lock:
            run = self._run
            if abort.is_set() or run is None or run.is_terminal:
                return
            now = self._clock()
            failed = run.running_node_ids
            run = replace(
                run,
                status=RunStatus.ERROR,
                duration=self._run_elapsed(now),
                node_runs=tuple(
                    replace(
                        nr,
                        status=NodeRunStatus.ERROR,
                        completed_at=now.isoformat(),
                        output=nr.output + ("", f"Error: {error}"),
                        error=error,
                    )
                    if nr.status == NodeRunStatus.RUNNING
                    else nr
                    for nr in run.node_runs
                ),
            )
            self._run = run
            self._active_node_id = None
            if failed:
                self._buffer.append("")
                self._buffer.append(f"Error: {error}")

        node_id = failed[0] if failed else ""
        self.event_bus.emit(events.RunFailed(run_id=run.id, node_id=node_id, error=error))
        self.event_bus.emit(events.RunUpdated(run=run))

    # -- Helpers ---------------------------------------------------------

    def _commit(
        self,
        abort: threading.Event,
        update: Callable[[PipelineRun, datetime], PipelineRun],
    ) -> PipelineRun | None:
        """Apply *update* to the current run unless *abort* is set.

        Returns the published snapshot, or None when the update was dropped.
        """
        with self._lock:
            if abort.is_set() or self._run is None:
                return None
            run = update(self._run, self._clock())
            self._run = run
        self.event_bus.emit(events.RunUpdated(run=run))
        return run

    def _completed(self, run: PipelineRun, now: datetime) -> PipelineRun:
        return replace(
            run,
            status=RunStatus.COMPLETED,
            completed_at=now.isoformat(),
            duration=self._run_elapsed(now),
        )

    def _run_elapsed(self, now: datetime) -> int:
        return _elapsed_ms(self._run_started or now, now)

    def _is_active(self) -> bool:
        return self._run is not None and not self._run.is_terminal

    def _new_abort(self) -> threading.Event:
        # A fresh flag per drive so a stopped drive can never write into a newer one.
        self._abort = threading.Event()
        return self._abort

    def _resumable_run(self, action: str) -> PipelineRun:
        run = self._run
        if run is None:
            raise InvalidRunStateError(f"Nothing to {action}: no run has been started")
        if run.status == RunStatus.RUNNING:
            raise RunnerBusyError(f"Cannot {action} while the run is in progress")
        if run.status == RunStatus.COMPLETED or self._index >= len(run.node_runs):
            raise InvalidRunStateError(f"Nothing to {action}: run {run.id} has completed")
        return run
