"""Pipeline builder operations.

Each function takes a Pipeline and returns a new one; inputs are never
mutated. Connection and node ids are short random hex strings unless given.
"""
from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Any

from brandpilot.model.agent import (
    AGENT_TYPE_LABELS,
    AgentNode,
    AgentNodeStatus,
    AgentType,
    Pipeline,
    PipelineConnection,
    Position,
)

_NODE_SPACING_X = 250.0
_NODE_ORIGIN = Position(x=300.0, y=200.0)


def _generate_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def add_node(
    pipeline: Pipeline,
    agent_type: AgentType,
    *,
    node_id: str | None = None,
    name: str | None = None,
) -> Pipeline:
    """Append an unconfigured node and link it to the end of the chain.

    The new node is connected from the last node (in node order) that has
    no outgoing connection. An empty pipeline just gains the node.
    """
    new_id = node_id or _generate_id("node")
    node = AgentNode(
        id=new_id,
        type=agent_type,
        name=name or AGENT_TYPE_LABELS.get(agent_type, agent_type.value),
        position=Position(
            x=_NODE_ORIGIN.x + len(pipeline.nodes) * _NODE_SPACING_X,
            y=_NODE_ORIGIN.y,
        ),
    )

    connections = list(pipeline.connections)
    if pipeline.nodes:
        with_outgoing = {c.source_node_id for c in pipeline.connections}
        tail = next((n for n in reversed(pipeline.nodes) if n.id not in with_outgoing), None)
        if tail is not None:
            connections.append(
                PipelineConnection(
                    id=_generate_id("conn"),
                    source_node_id=tail.id,
                    target_node_id=new_id,
                )
            )

    return replace(
        pipeline,
        nodes=(*pipeline.nodes, node),
        connections=tuple(connections),
    )


def update_node(pipeline: Pipeline, node_id: str, **changes: Any) -> Pipeline:
    """Replace fields on one node.

    Attaching a non-None ``config`` marks the node configured unless the
    caller sets ``status`` explicitly. Raises KeyError for an unknown id.
    """
    if pipeline.node(node_id) is None:
        raise KeyError(node_id)
    if changes.get("config") is not None and "status" not in changes:
        changes["status"] = AgentNodeStatus.CONFIGURED

    nodes = tuple(replace(n, **changes) if n.id == node_id else n for n in pipeline.nodes)
    return replace(pipeline, nodes=nodes)


def remove_node(pipeline: Pipeline, node_id: str) -> Pipeline:
    """Delete a node and rewire the chain around it.

    All connections touching the node are dropped. If it had both an
    incoming and an outgoing connection, its predecessor is linked directly
    to its successor.
    """
    incoming = next((c for c in pipeline.connections if c.target_node_id == node_id), None)
    outgoing = next((c for c in pipeline.connections if c.source_node_id == node_id), None)

    connections = [
        c
        for c in pipeline.connections
        if c.source_node_id != node_id and c.target_node_id != node_id
    ]
    if incoming is not None and outgoing is not None:
        connections.append(
            PipelineConnection(
                id=_generate_id("conn"),
                source_node_id=incoming.source_node_id,
                target_node_id=outgoing.target_node_id,
            )
        )

    return replace(
        pipeline,
        nodes=tuple(n for n in pipeline.nodes if n.id != node_id),
        connections=tuple(connections),
    )
