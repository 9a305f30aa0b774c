"""Provider routing for single-turn completions."""
from __future__ import annotations

from functools import reduce
from typing import TYPE_CHECKING, Callable, Iterable, Mapping

from brandpilot.llm.adapter import ProviderAdapter
from brandpilot.llm.errors import ConfigurationError
from brandpilot.llm.middleware import Middleware
from brandpilot.llm.types import CompletionRequest, CompletionResponse

if TYPE_CHECKING:
    from brandpilot.config import BrandPilotConfig

Handler = Callable[[CompletionRequest], CompletionResponse]


def _wrap(inner: Handler, mw: Middleware) -> Handler:
    return lambda req: mw(req, inner)


class Client:
    """Sends each request to the adapter named by ``request.provider``.

    Requests without a provider go to ``fallback``. Middleware is composed
    once, the first entry outermost.
    """

    def __init__(
        self,
        adapters: Mapping[str, ProviderAdapter] | None = None,
        *,
        fallback: str | None = None,
        middleware: Iterable[Middleware] = (),
    ) -> None:
        self._adapters = dict(adapters or {})
        self.fallback = fallback
        self._handler = reduce(_wrap, reversed(list(middleware)), self._dispatch)

    @classmethod
    def from_config(
        cls,
        config: BrandPilotConfig,
        *,
        middleware: Iterable[Middleware] = (),
    ) -> Client:
        """One adapter per provider whose key is set in *config*."""
        from brandpilot.llm.providers.anthropic import AnthropicAdapter
        from brandpilot.llm.providers.openai import OpenAIAdapter

        adapters: dict[str, ProviderAdapter] = {}
        if config.anthropic_api_key:
            adapters[AnthropicAdapter.name] = AnthropicAdapter(
                config.anthropic_api_key,
                base_url=config.anthropic_base_url,
                timeout=config.request_timeout,
            )
        if config.openai_api_key:
            adapters[OpenAIAdapter.name] = OpenAIAdapter(
                config.openai_api_key,
                base_url=config.openai_base_url,
                timeout=config.request_timeout,
            )
        fallback = config.provider.value if config.provider.value in adapters else None
        return cls(adapters, fallback=fallback, middleware=middleware)

    def has_provider(self, name: str) -> bool:
        return name in self._adapters

    def complete(self, request: CompletionRequest) -> CompletionResponse:
        return self._handler(request)

    def close(self) -> None:
        for adapter in self._adapters.values():
            close = getattr(adapter, "close", None)
            if close is not None:
                close()

    def _dispatch(self, request: CompletionRequest) -> CompletionResponse:
        name = request.provider or self.fallback
        if name is None:
            raise ConfigurationError("Request names no provider and no fallback is set")
        adapter = self._adapters.get(name)
        if adapter is None:
            raise ConfigurationError(f"Unknown provider: {name}")
        return adapter.complete(request)
