"""Anthropic Messages API adapter."""
from __future__ import annotations

from typing import Any

import httpx

from brandpilot.llm._http import ApiSession
from brandpilot.llm.types import CompletionRequest, CompletionResponse, Usage

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicAdapter:
    name = "anthropic"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.anthropic.com",
        timeout: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._session = ApiSession(
            base_url,
            {"x-api-key": api_key, "anthropic-version": ANTHROPIC_VERSION},
            provider=self.name,
            timeout=timeout,
            transport=transport,
        )

    def complete(self, request: CompletionRequest) -> CompletionResponse:
        payload: dict[str, Any] = {
            "model": request.model,
            "max_tokens": request.max_tokens,
            "messages": [{"role": "user", "content": request.prompt}],
        }
        if request.system:
            payload["system"] = request.system
        if request.temperature is not None:
            payload["temperature"] = request.temperature

        body = self._session.post_json("/v1/messages", payload)
        # Only text blocks carry the agent's answer.
        text = "".join(
            block.get("text", "") for block in body.get("content", []) if block.get("type") == "text"
        )
        usage = body.get("usage", {})
        return CompletionResponse(
            text=text,
            model=body.get("model", ""),
            provider=self.name,
            finish_reason=body.get("stop_reason") or "",
            usage=Usage(usage.get("input_tokens", 0), usage.get("output_tokens", 0)),
        )

    def close(self) -> None:
        self._session.close()
