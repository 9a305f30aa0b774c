"""Agent-call collaborator: run one node's task against an LLM."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Protocol

from brandpilot.agents.formatting import extract_json_string
from brandpilot.agents.prompts import build_agent_prompt
from brandpilot.config import BrandPilotConfig, provider_label
from brandpilot.llm.client import Client
from brandpilot.llm.types import CompletionRequest
from brandpilot.model.agent import AccountContext, AgentType, AIProvider

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


@dataclass(frozen=True)
class AgentCallRequest:
    node_type: AgentType
    config: dict[str, Any] | None = field(default=None, hash=False)
    provider: AIProvider = AIProvider.ANTHROPIC
    previous_output: str | None = None
    account_context: AccountContext | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AgentCallRequest:
        """Parse the execute-node request body. Raises ValueError/KeyError."""
        account = data.get("accountContext")
        return cls(
            node_type=AgentType(data["type"]),
            config=data.get("config"),
            provider=AIProvider(data.get("provider", AIProvider.ANTHROPIC)),
            previous_output=data.get("previousOutput"),
            account_context=AccountContext.from_dict(account) if account else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.node_type.value,
            "config": self.config,
            "provider": self.provider.value,
            "previousOutput": self.previous_output,
            "accountContext": self.account_context.to_dict() if self.account_context else None,
        }


@dataclass(frozen=True)
class AgentCallResult:
    success: bool
    output: str = ""
    raw_response: str = ""
    error: str = ""

    @classmethod
    def ok(cls, output: str, raw_response: str = "") -> AgentCallResult:
        return cls(success=True, output=output, raw_response=raw_response or output)

    @classmethod
    def failure(cls, error: str) -> AgentCallResult:
        return cls(success=False, error=error or "Agent execution failed")

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        return {"success": True, "output": self.output, "rawResponse": self.raw_response}


class AgentCaller(Protocol):
    """Runs one agent node's task.

    Implementations report failures as ``AgentCallResult.failure`` and may
    call *progress* with human-readable status lines while working.
    """

    def call(
        self,
        request: AgentCallRequest,
        progress: ProgressCallback | None = None,
    ) -> AgentCallResult: ...


def _normalise_output(text: str) -> str:
    """Pretty-print the JSON payload in *text*, or return *text* as-is."""
    candidate = extract_json_string(text)
    try:
        parsed = json.loads(candidate)
    except (json.JSONDecodeError, TypeError):
        return text
    return json.dumps(parsed, indent=2, ensure_ascii=False)


class LLMAgentCaller:
    """AgentCaller that prompts an LLM directly through the unified client.

    API keys are read from *config*; nothing is looked up from ambient state.
    """

    def __init__(self, client: Client, config: BrandPilotConfig) -> None:
        self._client = client
        self._config = config

    @classmethod
    def from_config(cls, config: BrandPilotConfig) -> LLMAgentCaller:
        from brandpilot.llm.middleware import logging_middleware

        client = Client.from_config(config, middleware=[logging_middleware()])
        return cls(client, config)

    @classmethod
    def for_api_key(
        cls, config: BrandPilotConfig, provider: AIProvider, api_key: str
    ) -> LLMAgentCaller:
        """Caller using *api_key* for *provider*, e.g. a key sent with a request."""
        if provider == AIProvider.ANTHROPIC:
            config = replace(config, anthropic_api_key=api_key, provider=provider)
        else:
            config = replace(config, openai_api_key=api_key, provider=provider)
        return cls.from_config(config)

    def call(
        self,
        request: AgentCallRequest,
        progress: ProgressCallback | None = None,
    ) -> AgentCallResult:
        report = progress or (lambda line: None)
        provider = request.provider
        label = provider_label(provider)

        if not self._config.api_key_for(provider) or not self._client.has_provider(provider.value):
            return AgentCallResult.failure(
                f"No {label} API key found. Add your key in Settings."
            )

        prompt = build_agent_prompt(
            request.node_type,
            request.config,
            request.previous_output,
            request.account_context,
        )
        model = self._config.model_for(provider)
        report(f"Sending request to {label} ({model})...")

        try:
            response = self._client.complete(
                CompletionRequest(
                    model=model,
                    prompt=prompt.user,
                    system=prompt.system,
                    provider=provider.value,
                    max_tokens=self._config.max_tokens,
                )
            )
        except Exception as exc:
            logger.warning("Agent call for %s failed: %s", request.node_type, exc)
            return AgentCallResult.failure(str(exc))

        return AgentCallResult.ok(_normalise_output(response.text), raw_response=response.text)

    def close(self) -> None:
        self._client.close()
