"""AgentCaller that delegates to a running execute-node endpoint."""
from __future__ import annotations

import logging

import httpx

from brandpilot.agents.caller import AgentCallRequest, AgentCallResult, ProgressCallback
from brandpilot.llm._http import ApiSession
from brandpilot.llm.errors import LLMError

logger = logging.getLogger(__name__)

EXECUTE_NODE_PATH = "/api/agents/execute-node"


class HttpAgentCaller:
    """Posts each agent call to ``POST /api/agents/execute-node``.

    The API key travels in the ``x-ai-api-key`` header. Transport and HTTP
    status errors are returned as failures, never raised.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._session = ApiSession(
            base_url,
            {"x-ai-api-key": api_key},
            provider="brandpilot",
            timeout=timeout,
            transport=transport,
        )

    def call(
        self,
        request: AgentCallRequest,
        progress: ProgressCallback | None = None,
    ) -> AgentCallResult:
        if progress is not None:
            progress("Waiting for agent response...")
        try:
            body = self._session.post_json(EXECUTE_NODE_PATH, request.to_dict())
        except LLMError as exc:
            logger.warning("execute-node request failed: %s", exc)
            return AgentCallResult.failure(str(exc))

        if not body.get("success"):
            return AgentCallResult.failure(body.get("error") or "")
        return AgentCallResult.ok(
            body.get("output", ""),
            raw_response=body.get("rawResponse", ""),
        )

    def close(self) -> None:
        self._session.close()
