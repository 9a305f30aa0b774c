"""Execution order: flatten a pipeline's connection chain into a node sequence."""
from __future__ import annotations

from collections.abc import Iterable, Sequence

from brandpilot.model.agent import AgentNode, PipelineConnection


def resolve_execution_order(
    nodes: Sequence[AgentNode],
    connections: Iterable[PipelineConnection],
) -> list[str]:
    """Return node ids in the order they should execute.

    Pipelines are single linear chains: each node has at most one outgoing
    and one incoming connection. The walk starts at the first node (in
    *nodes* order) with no incoming connection and follows outgoing links
    until the chain ends or a node repeats. Nodes the walk never reached are
    appended in their original order, so every node runs exactly once.

    A source with several outgoing connections keeps only the last one.
    When every node has an incoming connection (a ring) the original node
    order is returned unchanged.
    """
    if not nodes:
        return []

    outgoing: dict[str, str] = {}
    incoming: set[str] = set()
    for conn in connections:
        outgoing[conn.source_node_id] = conn.target_node_id
        incoming.add(conn.target_node_id)

    start = next((n.id for n in nodes if n.id not in incoming), None)
    if start is None:
        return [n.id for n in nodes]

    known = {n.id for n in nodes}
    order: list[str] = []
    visited: set[str] = set()
    current: str | None = start
    # Dangling connections to deleted nodes end the chain.
    while current is not None and current in known and current not in visited:
        visited.add(current)
        order.append(current)
        current = outgoing.get(current)

    order.extend(n.id for n in nodes if n.id not in visited)
    return order
