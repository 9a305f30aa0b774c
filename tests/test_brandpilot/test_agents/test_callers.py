"""Tests for the agent-call collaborators."""

from __future__ import annotations

import json

import httpx
import pytest

from brandpilot.agents.caller import AgentCallRequest, AgentCallResult, LLMAgentCaller
from brandpilot.agents.remote import HttpAgentCaller
from brandpilot.agents.stub import CANNED_OUTPUTS, StubAgentCaller
from brandpilot.config import BrandPilotConfig
from brandpilot.llm.adapter import StubAdapter
from brandpilot.llm.client import Client
from brandpilot.llm.errors import RateLimitError
from brandpilot.llm.types import CompletionResponse
from brandpilot.model.agent import AccountContext, AgentType, AIProvider


def make_llm_caller(
    responses: list,
    provider: str = "anthropic",
    config: BrandPilotConfig | None = None,
) -> tuple[LLMAgentCaller, StubAdapter]:
    adapter = StubAdapter(name=provider, responses=responses)
    client = Client({provider: adapter})
    config = config or BrandPilotConfig(anthropic_api_key="sk-ant", openai_api_key="sk-oai")
    return LLMAgentCaller(client, config), adapter


# ---------------------------------------------------------------------------
# Request / result types
# ---------------------------------------------------------------------------


class TestRequestAndResult:
    def test_request_to_dict(self):
        request = AgentCallRequest(
            node_type=AgentType.SCHEDULER,
            config={"timezone": "PST"},
            provider=AIProvider.OPENAI,
            previous_output="caption",
            account_context=AccountContext(handle="@fit", niche="fitness"),
        )
        data = request.to_dict()
        assert data["type"] == "scheduler"
        assert data["provider"] == "openai"
        assert data["previousOutput"] == "caption"
        assert data["accountContext"]["handle"] == "@fit"
        assert AgentCallRequest.from_dict(data) == request

    def test_request_from_minimal_dict(self):
        request = AgentCallRequest.from_dict({"type": "publisher"})
        assert request.provider == AIProvider.ANTHROPIC
        assert request.config is None
        assert request.account_context is None

    def test_request_unknown_type(self):
        with pytest.raises(ValueError):
            AgentCallRequest.from_dict({"type": "nope"})

    def test_result_shapes(self):
        assert AgentCallResult.ok("out").to_dict() == {"success": True, "output": "out", "rawResponse": "out"}
        assert AgentCallResult.failure("bad").to_dict() == {"success": False, "error": "bad"}
        assert AgentCallResult.failure("").error == "Agent execution failed"


# ---------------------------------------------------------------------------
# LLMAgentCaller
# ---------------------------------------------------------------------------


class TestLLMAgentCaller:
    def test_pretty_prints_json(self):
        caller, _ = make_llm_caller([CompletionResponse(text='```json\n{"caption":"Hi"}\n```')])
        result = caller.call(AgentCallRequest(node_type=AgentType.CONTENT_WRITER))
        assert result.success
        assert result.output == '{\n  "caption": "Hi"\n}'
        assert result.raw_response == '```json\n{"caption":"Hi"}\n```'

    def test_non_json_passed_through(self):
        caller, _ = make_llm_caller([CompletionResponse(text="Just words")])
        result = caller.call(AgentCallRequest(node_type=AgentType.CONTENT_WRITER))
        assert result.output == "Just words"

    def test_request_uses_configured_model_and_prompt(self):
        caller, adapter = make_llm_caller([CompletionResponse(text="{}")])
        caller.call(AgentCallRequest(node_type=AgentType.CONTENT_WRITER, previous_output="Trend: 5am club"))
        sent = adapter.requests[0]
        assert sent.model == "claude-sonnet-4-5-20250929"
        assert sent.provider == "anthropic"
        assert sent.max_tokens == 2048
        assert "Trend: 5am club" in sent.prompt
        assert "copywriter" in sent.system

    def test_openai_model(self):
        caller, adapter = make_llm_caller([CompletionResponse(text="{}")], provider="openai")
        caller.call(AgentCallRequest(node_type=AgentType.SCHEDULER, provider=AIProvider.OPENAI))
        assert adapter.requests[0].model == "gpt-4o-mini"

    def test_missing_key_fails(self):
        caller, adapter = make_llm_caller([], config=BrandPilotConfig())
        result = caller.call(AgentCallRequest(node_type=AgentType.CONTENT_WRITER))
        assert not result.success
        assert result.error == "No Anthropic API key found. Add your key in Settings."
        assert adapter.requests == []

    def test_missing_openai_key_message(self):
        caller, _ = make_llm_caller([], config=BrandPilotConfig(anthropic_api_key="sk-ant"))
        result = caller.call(AgentCallRequest(node_type=AgentType.CONTENT_WRITER, provider=AIProvider.OPENAI))
        assert result.error == "No OpenAI API key found. Add your key in Settings."

    def test_provider_error_becomes_failure(self):
        caller, _ = make_llm_caller([RateLimitError("rate limited", provider="anthropic", status_code=429)])
        result = caller.call(AgentCallRequest(node_type=AgentType.PUBLISHER))
        assert not result.success
        assert result.error == "rate limited"

    def test_reports_progress(self):
        caller, _ = make_llm_caller([CompletionResponse(text="{}")])
        lines: list[str] = []
        caller.call(AgentCallRequest(node_type=AgentType.PUBLISHER), lines.append)
        assert lines == ["Sending request to Anthropic (claude-sonnet-4-5-20250929)..."]

    def test_for_api_key_registers_provider(self):
        caller = LLMAgentCaller.for_api_key(BrandPilotConfig(), AIProvider.OPENAI, "sk-live")
        try:
            assert caller._config.openai_api_key == "sk-live"
            assert caller._client.has_provider("openai")
            assert not caller._client.has_provider("anthropic")
        finally:
            caller.close()


# ---------------------------------------------------------------------------
# StubAgentCaller
# ---------------------------------------------------------------------------


class TestStubAgentCaller:
    def test_canned_output(self):
        caller = StubAgentCaller()
        lines: list[str] = []
        result = caller.call(AgentCallRequest(node_type=AgentType.CONTENT_WRITER), lines.append)
        canned = CANNED_OUTPUTS[AgentType.CONTENT_WRITER]
        assert result.success
        assert result.output == canned.result
        assert lines == list(canned.lines)

    def test_every_type_has_canned_output(self):
        assert set(CANNED_OUTPUTS) == set(AgentType)

    def test_scripted_failure_then_canned(self):
        caller = StubAgentCaller.failing(AgentType.PUBLISHER, error="rate limited")
        request = AgentCallRequest(node_type=AgentType.PUBLISHER)
        first = caller.call(request)
        second = caller.call(request)
        assert first.error == "rate limited"
        assert second.success
        assert len(caller.calls) == 2

    def test_scripted_exception_raised(self):
        caller = StubAgentCaller({AgentType.SCHEDULER: [TimeoutError("slow")]})
        with pytest.raises(TimeoutError):
            caller.call(AgentCallRequest(node_type=AgentType.SCHEDULER))


# ---------------------------------------------------------------------------
# HttpAgentCaller
# ---------------------------------------------------------------------------


def _transport(status_code: int, body: dict, seen: list[httpx.Request] | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=body)

    return httpx.MockTransport(handler)


class TestHttpAgentCaller:
    def test_posts_request_with_key(self):
        seen: list[httpx.Request] = []
        transport = _transport(200, {"success": True, "output": "{}", "rawResponse": "{}"}, seen)
        caller = HttpAgentCaller("http://localhost:5000", "sk-test", transport=transport)
        request = AgentCallRequest(node_type=AgentType.CONTENT_WRITER, previous_output="trend")
        result = caller.call(request)

        assert result.success
        assert seen[0].url.path == "/api/agents/execute-node"
        assert seen[0].headers["x-ai-api-key"] == "sk-test"
        assert json.loads(seen[0].content) == request.to_dict()

    def test_maps_success_body(self):
        transport = _transport(200, {"success": True, "output": '{\n  "a": 1\n}', "rawResponse": '{"a":1}'})
        result = HttpAgentCaller("http://x", "k", transport=transport).call(
            AgentCallRequest(node_type=AgentType.CONTENT_WRITER)
        )
        assert result.output == '{\n  "a": 1\n}'
        assert result.raw_response == '{"a":1}'

    def test_agent_failure(self):
        transport = _transport(200, {"success": False, "error": "rate limited"})
        result = HttpAgentCaller("http://x", "k", transport=transport).call(
            AgentCallRequest(node_type=AgentType.PUBLISHER)
        )
        assert not result.success
        assert result.error == "rate limited"

    def test_http_error_status(self):
        transport = _transport(401, {"success": False, "error": "API key is required. Add your key in Settings."})
        result = HttpAgentCaller("http://x", "k", transport=transport).call(
            AgentCallRequest(node_type=AgentType.PUBLISHER)
        )
        assert result.error == "API key is required. Add your key in Settings."

    def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused")

        caller = HttpAgentCaller("http://x", "k", transport=httpx.MockTransport(handler))
        result = caller.call(AgentCallRequest(node_type=AgentType.PUBLISHER))
        assert not result.success
        assert "refused" in result.error
