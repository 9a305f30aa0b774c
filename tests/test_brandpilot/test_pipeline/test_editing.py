"""Tests for pipeline builder operations."""

from __future__ import annotations

import pytest

from brandpilot.model.agent import AgentNodeStatus, AgentType, Pipeline
from brandpilot.pipeline.editing import add_node, remove_node, update_node
from brandpilot.pipeline.order import resolve_execution_order


def build(*types: AgentType) -> Pipeline:
    pipeline = Pipeline(id="pipe-1", name="Morning posts")
    for i, agent_type in enumerate(types):
        pipeline = add_node(pipeline, agent_type, node_id=f"n{i}")
    return pipeline


def edges(pipeline: Pipeline) -> list[tuple[str, str]]:
    return [(c.source_node_id, c.target_node_id) for c in pipeline.connections]


class TestAddNode:
    def test_first_node_has_no_connection(self):
        pipeline = build(AgentType.CONTENT_RESEARCHER)
        assert len(pipeline.nodes) == 1
        assert pipeline.connections == ()

    def test_new_node_linked_from_tail(self):
        pipeline = build(AgentType.CONTENT_RESEARCHER, AgentType.CONTENT_WRITER, AgentType.PUBLISHER)
        assert edges(pipeline) == [("n0", "n1"), ("n1", "n2")]

    def test_defaults(self):
        pipeline = build(AgentType.HASHTAG_GENERATOR)
        node = pipeline.nodes[0]
        assert node.name == "Hashtag Generator"
        assert node.status == AgentNodeStatus.UNCONFIGURED
        assert node.config is None
        assert (node.position.x, node.position.y) == (300.0, 200.0)

    def test_position_steps_right(self):
        pipeline = build(AgentType.CONTENT_RESEARCHER, AgentType.CONTENT_WRITER)
        assert pipeline.nodes[1].position.x == 550.0

    def test_generated_ids_unique(self):
        pipeline = Pipeline(id="p", name="p")
        pipeline = add_node(pipeline, AgentType.SCHEDULER)
        pipeline = add_node(pipeline, AgentType.SCHEDULER)
        assert pipeline.nodes[0].id != pipeline.nodes[1].id

    def test_input_not_mutated(self):
        original = build(AgentType.CONTENT_RESEARCHER)
        add_node(original, AgentType.CONTENT_WRITER)
        assert len(original.nodes) == 1


class TestUpdateNode:
    def test_config_marks_configured(self):
        pipeline = update_node(build(AgentType.CONTENT_WRITER), "n0", config={"writingTone": "bold"})
        node = pipeline.node("n0")
        assert node.config == {"writingTone": "bold"}
        assert node.status == AgentNodeStatus.CONFIGURED

    def test_explicit_status_wins(self):
        pipeline = update_node(
            build(AgentType.CONTENT_WRITER), "n0",
            config={"writingTone": "bold"}, status=AgentNodeStatus.ERROR,
        )
        assert pipeline.node("n0").status == AgentNodeStatus.ERROR

    def test_rename(self):
        pipeline = update_node(build(AgentType.CONTENT_WRITER), "n0", name="Caption bot")
        assert pipeline.node("n0").name == "Caption bot"
        assert pipeline.node("n0").status == AgentNodeStatus.UNCONFIGURED

    def test_unknown_node_raises(self):
        with pytest.raises(KeyError):
            update_node(build(AgentType.CONTENT_WRITER), "missing", name="x")


class TestRemoveNode:
    def test_middle_node_rewired(self):
        pipeline = build(AgentType.CONTENT_RESEARCHER, AgentType.CONTENT_WRITER, AgentType.PUBLISHER)
        pipeline = remove_node(pipeline, "n1")
        assert [n.id for n in pipeline.nodes] == ["n0", "n2"]
        assert edges(pipeline) == [("n0", "n2")]
        assert resolve_execution_order(pipeline.nodes, pipeline.connections) == ["n0", "n2"]

    def test_head_removed(self):
        pipeline = build(AgentType.CONTENT_RESEARCHER, AgentType.CONTENT_WRITER, AgentType.PUBLISHER)
        pipeline = remove_node(pipeline, "n0")
        assert edges(pipeline) == [("n1", "n2")]

    def test_tail_removed(self):
        pipeline = build(AgentType.CONTENT_RESEARCHER, AgentType.CONTENT_WRITER)
        pipeline = remove_node(pipeline, "n1")
        assert edges(pipeline) == []

    def test_add_after_remove_extends_chain(self):
        pipeline = build(AgentType.CONTENT_RESEARCHER, AgentType.CONTENT_WRITER, AgentType.PUBLISHER)
        pipeline = remove_node(pipeline, "n2")
        pipeline = add_node(pipeline, AgentType.SCHEDULER, node_id="n3")
        assert resolve_execution_order(pipeline.nodes, pipeline.connections) == ["n0", "n1", "n3"]
