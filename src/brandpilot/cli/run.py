"""CLI command: brandpilot run -- execute a pipeline document."""

from __future__ import annotations

import sys
from dataclasses import replace

import click

from brandpilot.agents.caller import AgentCaller, LLMAgentCaller
from brandpilot.agents.remote import HttpAgentCaller
from brandpilot.agents.stub import StubAgentCaller
from brandpilot.config import BrandPilotConfig
from brandpilot.errors import PipelineLoadError
from brandpilot.events import types as events
from brandpilot.events.bus import EventBus
from brandpilot.model.agent import AGENT_TYPE_LABELS, AgentType, AIProvider
from brandpilot.model.run import NodeRunStatus, RunStatus
from brandpilot.pipeline.loader import dump_run, load_account_context, load_pipeline
from brandpilot.runner.runner import ExecutionRunner


def _build_caller(
    config: BrandPilotConfig,
    mock: bool,
    fail_types: tuple[str, ...],
    server: str | None,
) -> AgentCaller:
    if mock:
        return StubAgentCaller.failing(*(AgentType(t) for t in fail_types))
    if server:
        return HttpAgentCaller(
            server,
            config.api_key_for(config.provider),
            timeout=config.request_timeout,
        )
    return LLMAgentCaller.from_config(config)


def _echo_progress(bus: EventBus, labels: dict[str, str]) -> None:
    bus.subscribe(
        events.NodeStarted,
        lambda e: click.echo(f"\n[{e.index + 1}] {labels.get(e.node_id, e.node_id)}"),
    )
    bus.subscribe(events.NodeOutput, lambda e: click.echo(f"    {e.line}"))
    bus.subscribe(
        events.NodeCompleted,
        lambda e: click.echo(f"  done in {e.duration}ms\n" + _indent(e.result)),
    )
    bus.subscribe(events.NodeFailed, lambda e: click.echo(f"  failed: {e.error}", err=True))
    bus.subscribe(events.NodeSkipped, lambda e: click.echo(f"  skipped {e.node_id}"))


def _indent(text: str) -> str:
    return "\n".join(f"  > {line}" for line in text.splitlines())


@click.command()
@click.argument("pipeline_file", type=click.Path(exists=True))
@click.option(
    "--provider",
    type=click.Choice([p.value for p in AIProvider]),
    default=None,
    help="AI provider (defaults to BRANDPILOT_PROVIDER)",
)
@click.option("--account", type=click.Path(exists=True), default=None, help="Account context JSON file")
@click.option("--mock", is_flag=True, help="Use canned agent output instead of calling an LLM")
@click.option(
    "--fail-type",
    "fail_types",
    multiple=True,
    type=click.Choice([t.value for t in AgentType]),
    help="With --mock, fail the first call for this agent type (repeatable)",
)
@click.option("--server", default=None, help="Delegate agent calls to a running brandpilot server")
@click.option(
    "--on-error",
    type=click.Choice(["halt", "retry", "skip"]),
    default="halt",
    help="What to do once when a node fails",
)
@click.option("--json", "as_json", is_flag=True, help="Print the final run as JSON")
def run(
    pipeline_file: str,
    provider: str | None,
    account: str | None,
    mock: bool,
    fail_types: tuple[str, ...],
    server: str | None,
    on_error: str,
    as_json: bool,
) -> None:
    """Execute a pipeline file node by node.

    Exits with status 1 when the run ends in error.
    """
    try:
        pipeline = load_pipeline(pipeline_file)
        account_context = load_account_context(account) if account else None
    except PipelineLoadError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    config = BrandPilotConfig.from_env()
    if provider:
        config = replace(config, provider=AIProvider(provider))

    bus = EventBus()
    if not as_json:
        labels = {n.id: n.name or AGENT_TYPE_LABELS.get(n.type, n.type) for n in pipeline.nodes}
        _echo_progress(bus, labels)

    caller = _build_caller(config, mock, fail_types, server)
    runner = ExecutionRunner(
        pipeline.nodes,
        pipeline.connections,
        caller,
        pipeline_id=pipeline.id,
        provider=config.provider,
        account_context=account_context,
        event_bus=bus,
    )

    if not as_json:
        click.echo(f"Running pipeline: {pipeline.name or pipeline.id}")
    try:
        result = runner.start()
        if result.status == RunStatus.ERROR and on_error != "halt":
            if not as_json:
                click.echo(f"\nRecovering with {on_error}...")
            result = runner.retry() if on_error == "retry" else runner.skip()
    finally:
        close = getattr(caller, "close", None)
        if close is not None:
            close()

    if as_json:
        click.echo(dump_run(result))
    else:
        counts = {s: 0 for s in NodeRunStatus}
        for nr in result.node_runs:
            counts[nr.status] += 1
        summary = ", ".join(f"{n} {s.value}" for s, n in counts.items() if n)
        click.echo(f"\nRun {result.id}: {result.status.value} in {result.duration}ms ({summary})")

    sys.exit(1 if result.status == RunStatus.ERROR else 0)
