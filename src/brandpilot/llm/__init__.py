"""Single-turn LLM completions over httpx for the Anthropic and OpenAI APIs."""
from __future__ import annotations

from brandpilot.llm.adapter import ProviderAdapter, StubAdapter
from brandpilot.llm.client import Client
from brandpilot.llm.errors import ConfigurationError, LLMError, ProviderError, error_from_status_code
from brandpilot.llm.middleware import logging_middleware
from brandpilot.llm.providers import AnthropicAdapter, OpenAIAdapter
from brandpilot.llm.types import CompletionRequest, CompletionResponse, Usage

__all__ = [
    "AnthropicAdapter",
    "Client",
    "CompletionRequest",
    "CompletionResponse",
    "ConfigurationError",
    "LLMError",
    "OpenAIAdapter",
    "ProviderAdapter",
    "ProviderError",
    "StubAdapter",
    "Usage",
    "error_from_status_code",
    "logging_middleware",
]
