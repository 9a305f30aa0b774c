from __future__ import annotations

import pytest

from brandpilot.agents.stub import StubAgentCaller
from brandpilot.config import BrandPilotConfig
from brandpilot.web.app import create_app


class RecordingFactory:
    """Caller factory that hands out one shared stub and records its arguments."""

    def __init__(self, caller=None) -> None:
        self.caller = caller or StubAgentCaller()
        self.calls: list[tuple] = []

    def __call__(self, provider, api_key):
        self.calls.append((provider, api_key))
        return self.caller


@pytest.fixture
def factory():
    return RecordingFactory()


@pytest.fixture
def app(factory):
    """Create a Flask app for testing."""
    application = create_app(config=BrandPilotConfig(), caller_factory=factory)
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()
