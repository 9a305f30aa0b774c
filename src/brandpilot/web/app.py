from __future__ import annotations

from typing import Callable

from flask import Flask, current_app

from brandpilot.agents.caller import AgentCaller, LLMAgentCaller
from brandpilot.config import BrandPilotConfig
from brandpilot.model.agent import AIProvider

CallerFactory = Callable[[AIProvider, str], AgentCaller]


def default_caller_factory(provider: AIProvider, api_key: str) -> AgentCaller:
    """Build an ``LLMAgentCaller`` from the app's config and the request's key."""
    config: BrandPilotConfig = current_app.extensions["brandpilot_config"]
    return LLMAgentCaller.for_api_key(config, provider, api_key)


def create_app(
    config: BrandPilotConfig | None = None,
    caller_factory: CallerFactory | None = None,
) -> Flask:
    """Create and configure the Flask app.

    *caller_factory* builds the agent caller for one request from the
    provider and the API key the client sent; it defaults to
    :func:`default_caller_factory`.
    """
    app = Flask(__name__)

    app.extensions["brandpilot_config"] = config or BrandPilotConfig.from_env()
    app.extensions["caller_factory"] = caller_factory or default_caller_factory

    from brandpilot.web.routes.agents import agents_bp

    app.register_blueprint(agents_bp, url_prefix="/api/agents")

    return app
