"""OpenAI Chat Completions adapter."""
from __future__ import annotations

from typing import Any

import httpx

from brandpilot.llm._http import ApiSession
from brandpilot.llm.types import CompletionRequest, CompletionResponse, Usage


class OpenAIAdapter:
    name = "openai"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com",
        org_id: str | None = None,
        timeout: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"authorization": f"Bearer {api_key}"}
        if org_id:
            headers["openai-organization"] = org_id
        self._session = ApiSession(
            base_url, headers, provider=self.name, timeout=timeout, transport=transport
        )

    def complete(self, request: CompletionRequest) -> CompletionResponse:
        messages = [{"role": "user", "content": request.prompt}]
        if request.system:
            messages.insert(0, {"role": "system", "content": request.system})
        payload: dict[str, Any] = {
            "model": request.model,
            "max_tokens": request.max_tokens,
            "messages": messages,
        }
        if request.temperature is not None:
            payload["temperature"] = request.temperature

        body = self._session.post_json("/v1/chat/completions", payload)
        choice = (body.get("choices") or [{}])[0]
        usage = body.get("usage", {})
        return CompletionResponse(
            text=(choice.get("message") or {}).get("content") or "",
            model=body.get("model", ""),
            provider=self.name,
            finish_reason=choice.get("finish_reason") or "",
            usage=Usage(usage.get("prompt_tokens", 0), usage.get("completion_tokens", 0)),
        )

    def close(self) -> None:
        self._session.close()
