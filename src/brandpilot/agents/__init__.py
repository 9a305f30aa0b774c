"""Agent prompts, result formatting and the agent-call collaborators."""
from __future__ import annotations

from brandpilot.agents.caller import (
    AgentCaller,
    AgentCallRequest,
    AgentCallResult,
    LLMAgentCaller,
    ProgressCallback,
)
from brandpilot.agents.formatting import extract_json_string, format_node_result
from brandpilot.agents.prompts import AgentPrompt, brand_tone_description, build_agent_prompt
from brandpilot.agents.remote import HttpAgentCaller
from brandpilot.agents.stub import CANNED_OUTPUTS, StubAgentCaller

__all__ = [
    "AgentCaller",
    "AgentCallRequest",
    "AgentCallResult",
    "ProgressCallback",
    "LLMAgentCaller",
    "HttpAgentCaller",
    "StubAgentCaller",
    "CANNED_OUTPUTS",
    "AgentPrompt",
    "brand_tone_description",
    "build_agent_prompt",
    "extract_json_string",
    "format_node_result",
]
