"""Provider adapter interface."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from brandpilot.llm.types import CompletionRequest, CompletionResponse


@runtime_checkable
class ProviderAdapter(Protocol):
    """Anything that turns a CompletionRequest into a CompletionResponse.

    ``name`` is the routing key used by :class:`~brandpilot.llm.client.Client`.
    """

    name: str

    def complete(self, request: CompletionRequest) -> CompletionResponse: ...


class StubAdapter:
    """In-memory adapter for testing.

    Returns the queued responses in order, cycling when exhausted. A queued
    exception is raised instead of returned.
    """

    def __init__(
        self,
        name: str = "stub",
        responses: list[CompletionResponse | Exception] | None = None,
    ) -> None:
        self.name = name
        self._responses = responses or []
        self._idx = 0
        self.requests: list[CompletionRequest] = []

    def complete(self, request: CompletionRequest) -> CompletionResponse:
        self.requests.append(request)
        if not self._responses:
            return CompletionResponse(provider=self.name)
        item = self._responses[self._idx % len(self._responses)]
        self._idx += 1
        if isinstance(item, Exception):
            raise item
        return item
