from __future__ import annotations

import os
from dataclasses import dataclass

from brandpilot.model.agent import AIProvider

_PROVIDER_LABELS = {
    AIProvider.ANTHROPIC: "Anthropic",
    AIProvider.OPENAI: "OpenAI",
}


@dataclass(frozen=True)
class BrandPilotConfig:
    provider: AIProvider = AIProvider.ANTHROPIC
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5-20250929"
    openai_model: str = "gpt-4o-mini"
    anthropic_base_url: str = "https://api.anthropic.com"
    openai_base_url: str = "https://api.openai.com"
    max_tokens: int = 2048
    request_timeout: float = 120.0
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> BrandPilotConfig:
        """Build a config from environment variables.

        Reads ANTHROPIC_API_KEY / OPENAI_API_KEY (and the matching *_BASE_URL)
        plus BRANDPILOT_PROVIDER, BRANDPILOT_MAX_TOKENS, BRANDPILOT_HOST,
        BRANDPILOT_PORT and BRANDPILOT_LOG_LEVEL. Unset variables keep the
        dataclass defaults.
        """
        defaults = cls()
        return cls(
            provider=AIProvider(os.environ.get("BRANDPILOT_PROVIDER", defaults.provider.value)),
            anthropic_api_key=os.environ.get("ANTHROPIC_API_KEY", ""),
            openai_api_key=os.environ.get("OPENAI_API_KEY", ""),
            anthropic_model=os.environ.get("BRANDPILOT_ANTHROPIC_MODEL", defaults.anthropic_model),
            openai_model=os.environ.get("BRANDPILOT_OPENAI_MODEL", defaults.openai_model),
            anthropic_base_url=os.environ.get("ANTHROPIC_BASE_URL", defaults.anthropic_base_url),
            openai_base_url=os.environ.get("OPENAI_BASE_URL", defaults.openai_base_url),
            max_tokens=int(os.environ.get("BRANDPILOT_MAX_TOKENS", defaults.max_tokens)),
            host=os.environ.get("BRANDPILOT_HOST", defaults.host),
            port=int(os.environ.get("BRANDPILOT_PORT", defaults.port)),
            log_level=os.environ.get("BRANDPILOT_LOG_LEVEL", defaults.log_level),
        )

    def api_key_for(self, provider: AIProvider) -> str:
        """Return the configured API key for *provider* ("" when unset)."""
        if provider == AIProvider.ANTHROPIC:
            return self.anthropic_api_key
        return self.openai_api_key

    def model_for(self, provider: AIProvider) -> str:
        if provider == AIProvider.ANTHROPIC:
            return self.anthropic_model
        return self.openai_model


def provider_label(provider: AIProvider) -> str:
    """Human-readable provider name used in user-facing messages."""
    return _PROVIDER_LABELS.get(provider, str(provider))
