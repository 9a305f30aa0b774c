"""Request and response types for single-turn completions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CompletionRequest:
    """A provider-agnostic single-turn request: one system and one user prompt."""

    model: str
    prompt: str
    system: str = ""
    provider: str | None = None
    max_tokens: int = 2048
    temperature: float | None = None


@dataclass(frozen=True)
class Usage:
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


@dataclass(frozen=True)
class CompletionResponse:
    text: str = ""
    model: str = ""
    provider: str = ""
    finish_reason: str = ""
    usage: Usage = Usage()
