from __future__ import annotations

from brandpilot.model.agent import (
    AGENT_TYPE_LABELS,
    AccountContext,
    AgentNode,
    AgentNodeStatus,
    AgentType,
    AIProvider,
    AutonomyLevel,
    BrandVoice,
    Pipeline,
    PipelineConnection,
    PipelineStatus,
    Position,
)
from brandpilot.model.run import NodeRun, NodeRunStatus, PipelineRun, RunStatus

__all__ = [
    # agent
    "AGENT_TYPE_LABELS",
    "AgentType",
    "AgentNodeStatus",
    "AutonomyLevel",
    "AIProvider",
    "Position",
    "AgentNode",
    "PipelineConnection",
    "PipelineStatus",
    "Pipeline",
    "BrandVoice",
    "AccountContext",
    # run
    "NodeRunStatus",
    "RunStatus",
    "NodeRun",
    "PipelineRun",
]
