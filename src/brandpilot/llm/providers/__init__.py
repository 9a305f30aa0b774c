from brandpilot.llm.providers.anthropic import AnthropicAdapter
from brandpilot.llm.providers.openai import OpenAIAdapter

__all__ = ["AnthropicAdapter", "OpenAIAdapter"]
