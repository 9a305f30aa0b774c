"""Built-in middleware."""
from __future__ import annotations

import logging
import time
from typing import Callable

from brandpilot.llm.types import CompletionRequest, CompletionResponse

Middleware = Callable[
    [CompletionRequest, Callable[[CompletionRequest], CompletionResponse]],
    CompletionResponse,
]


def logging_middleware(logger: logging.Logger | None = None) -> Middleware:
    """Create middleware that logs request/response details."""
    log = logger or logging.getLogger("brandpilot.llm")

    def middleware(
        request: CompletionRequest,
        next_fn: Callable[[CompletionRequest], CompletionResponse],
    ) -> CompletionResponse:
        provider = request.provider or "default"
        log.info("LLM request: provider=%s model=%s", provider, request.model)
        start = time.monotonic()
        try:
            response = next_fn(request)
        except Exception as exc:
            log.warning(
                "LLM request failed: provider=%s error=%s latency=%.2fs",
                provider,
                exc,
                time.monotonic() - start,
            )
            raise
        log.info(
            "LLM response: tokens=%d latency=%.2fs",
            response.usage.total_tokens,
            time.monotonic() - start,
        )
        return response

    return middleware
