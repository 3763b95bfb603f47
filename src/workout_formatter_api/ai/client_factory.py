"""AI client factory with Helicone integration support."""
import logging
from dataclasses import dataclass, field
from typing import Any

from workout_formatter_api.config import settings
from workout_formatter_api.errors import ConfigurationError


logger = logging.getLogger(__name__)

# Provider endpoints
_OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

# Helicone proxy URLs (private - implementation detail)
_HELICONE_OPENAI_BASE_URL = "https://oai.helicone.ai/v1"
_HELICONE_OPENROUTER_BASE_URL = "https://openrouter.helicone.ai/api/v1"
_HELICONE_ANTHROPIC_BASE_URL = "https://anthropic.helicone.ai"

# Default client timeout
DEFAULT_TIMEOUT = 60.0


@dataclass
class AIRequestContext:
    """Context for AI requests, used for tracking and observability."""

    session_id: str | None = None
    feature_name: str | None = None
    request_id: str | None = None
    custom_properties: dict[str, str] = field(default_factory=dict)

    def to_tracking_headers(self) -> dict[str, str]:
        """Convert context to provider-specific tracking headers.

        Currently generates Helicone headers when Helicone is enabled.
        The public API is provider-agnostic to allow future observability
        provider changes without affecting callers.
        """
        headers: dict[str, str] = {}

        if self.session_id:
            headers["Helicone-Session-Id"] = self.session_id

        if self.feature_name:
            headers["Helicone-Property-Feature"] = self.feature_name

        if self.request_id:
            headers["Helicone-Request-Id"] = self.request_id

        # Add environment for filtering in Helicone dashboard
        headers["Helicone-Property-Environment"] = settings.ENVIRONMENT

        for key, value in self.custom_properties.items():
            header_key = f"Helicone-Property-{key.replace('_', '-').title()}"
            headers[header_key] = str(value)

        return headers


def _apply_helicone(
    client_kwargs: dict[str, Any],
    proxy_base_url: str,
    provider_label: str,
    context: AIRequestContext | None,
) -> None:
    """Route the client through Helicone when enabled and configured."""
    if not settings.HELICONE_ENABLED:
        return

    if not settings.HELICONE_API_KEY:
        logger.warning(
            "HELICONE_ENABLED=true but HELICONE_API_KEY not set. "
            f"Falling back to direct {provider_label} API calls."
        )
        return

    client_kwargs["base_url"] = proxy_base_url

    default_headers = {
        "Helicone-Auth": f"Bearer {settings.HELICONE_API_KEY}",
    }
    if context:
        default_headers.update(context.to_tracking_headers())

    client_kwargs["default_headers"] = default_headers
    logger.debug(f"Creating {provider_label} client with Helicone proxy")


class AIClientFactory:
    """Factory for creating AI clients with optional Helicone integration."""

    @staticmethod
    def create_openrouter_client(
        context: AIRequestContext | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Any:
        """
        Create an OpenAI-compatible client pointed at OpenRouter.

        Raises:
            ImportError: If openai package is not installed
            ConfigurationError: If OPENROUTER_API_KEY is not configured
        """
        try:
            import openai
        except ImportError as e:
            raise ImportError("OpenAI library not installed. Run: pip install openai") from e

        api_key = settings.OPENROUTER_API_KEY
        if not api_key:
            raise ConfigurationError("OPENROUTER_API_KEY not configured on server")

        client_kwargs: dict[str, Any] = {
            "api_key": api_key,
            "timeout": timeout,
            "base_url": _OPENROUTER_BASE_URL,
        }
        _apply_helicone(client_kwargs, _HELICONE_OPENROUTER_BASE_URL, "OpenRouter", context)

        if "default_headers" not in client_kwargs:
            logger.debug("Creating OpenRouter client (direct)")
        return openai.OpenAI(**client_kwargs)

    @staticmethod
    def create_openai_client(
        context: AIRequestContext | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Any:
        """
        Create an OpenAI client, optionally proxied through Helicone.

        Args:
            context: Request context for tracking and observability
            timeout: Client timeout in seconds

        Returns:
            OpenAI client instance

        Raises:
            ImportError: If openai package is not installed
            ConfigurationError: If OPENAI_API_KEY is not configured
        """
        try:
            import openai
        except ImportError as e:
            raise ImportError("OpenAI library not installed. Run: pip install openai") from e

        api_key = settings.OPENAI_API_KEY
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY not configured on server")

        client_kwargs: dict[str, Any] = {
            "api_key": api_key,
            "timeout": timeout,
        }
        _apply_helicone(client_kwargs, _HELICONE_OPENAI_BASE_URL, "OpenAI", context)

        if "base_url" not in client_kwargs:
            logger.debug("Creating OpenAI client (direct)")
        return openai.OpenAI(**client_kwargs)

    @staticmethod
    def create_anthropic_client(
        context: AIRequestContext | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Any:
        """
        Create an Anthropic client, optionally proxied through Helicone.

        Raises:
            ImportError: If anthropic package is not installed
            ConfigurationError: If ANTHROPIC_API_KEY is not configured
        """
        try:
            from anthropic import Anthropic
        except ImportError as e:
            raise ImportError("Anthropic library not installed. Run: pip install anthropic") from e

        api_key = settings.ANTHROPIC_API_KEY
        if not api_key:
            raise ConfigurationError("ANTHROPIC_API_KEY not configured on server")

        client_kwargs: dict[str, Any] = {
            "api_key": api_key,
            "timeout": timeout,
        }
        _apply_helicone(client_kwargs, _HELICONE_ANTHROPIC_BASE_URL, "Anthropic", context)

        if "base_url" not in client_kwargs:
            logger.debug("Creating Anthropic client (direct)")
        return Anthropic(**client_kwargs)
