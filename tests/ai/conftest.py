"""Shared fixtures for AI module tests."""
from unittest.mock import patch

import pytest


# =============================================================================
# Mock Settings Fixtures
# =============================================================================


@pytest.fixture
def mock_settings_helicone_enabled():
    """Mock settings with Helicone enabled."""
    with patch("workout_formatter_api.ai.client_factory.settings") as mock:
        mock.OPENROUTER_API_KEY = "sk-or-test"
        mock.OPENAI_API_KEY = "sk-test-openai"
        mock.ANTHROPIC_API_KEY = "sk-test-anthropic"
        mock.HELICONE_ENABLED = True
        mock.HELICONE_API_KEY = "sk-test-helicone"
        mock.ENVIRONMENT = "staging"
        yield mock


@pytest.fixture
def mock_settings_helicone_disabled():
    """Mock settings with Helicone disabled."""
    with patch("workout_formatter_api.ai.client_factory.settings") as mock:
        mock.OPENROUTER_API_KEY = "sk-or-test"
        mock.OPENAI_API_KEY = "sk-test-openai"
        mock.ANTHROPIC_API_KEY = "sk-test-anthropic"
        mock.HELICONE_ENABLED = False
        mock.HELICONE_API_KEY = None
        mock.ENVIRONMENT = "development"
        yield mock


# Error simulation fixtures


@pytest.fixture
def rate_limit_error():
    """Simulate OpenRouter rate limit error."""
    return Exception("Error code: 429 - Rate limit exceeded: free-models-per-min")


@pytest.fixture
def server_error_503():
    """Simulate 503 Service Unavailable."""
    return Exception("Error code: 503 - Service temporarily unavailable")


@pytest.fixture
def auth_error():
    """Simulate authentication error."""
    return Exception("Error code: 401 - Invalid API key provided")
