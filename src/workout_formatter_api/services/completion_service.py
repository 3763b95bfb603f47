"""Completion invoker: one chat completion per workout import."""
import logging
from typing import Any, Optional, Protocol

from workout_formatter_api.ai import AIClientFactory, AIRequestContext
from workout_formatter_api.config import DEFAULT_MODELS, settings
from workout_formatter_api.errors import ConfigurationError, ProviderError


logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.3
ANTHROPIC_MAX_TOKENS = 4096


class CompletionClient(Protocol):
    """Anything that turns a system + user message into completion text."""

    def complete(self, system: str, user: str, temperature: float) -> str:
        ...


class ChatCompletionClient:
    """OpenAI-compatible chat completions (OpenAI, OpenRouter)."""

    def __init__(self, client: Any, model: str):
        self.client = client
        self.model = model

    def complete(self, system: str, user: str, temperature: float) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            temperature=temperature,
        )
        return response.choices[0].message.content or ""


class AnthropicCompletionClient:
    """Anthropic messages API."""

    def __init__(self, client: Any, model: str, max_tokens: int = ANTHROPIC_MAX_TOKENS):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    def complete(self, system: str, user: str, temperature: float) -> str:
        message = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system,
            messages=[{"role": "user", "content": user}],
            temperature=temperature,
        )
        return "".join(getattr(block, "text", "") for block in message.content)


def create_completion_client(
    provider: Optional[str] = None,
    model: Optional[str] = None,
    context: Optional[AIRequestContext] = None,
) -> CompletionClient:
    """
    Build the completion client for the configured provider.

    Raises:
        ConfigurationError: Unknown provider or missing credential
    """
    provider = (provider or settings.FORMAT_PROVIDER).lower()
    if provider not in DEFAULT_MODELS:
        raise ConfigurationError(
            f"Unknown completion provider: {provider}. Use 'openrouter', 'openai' or 'anthropic'."
        )
    if model is None:
        model = settings.FORMAT_MODEL if provider == settings.FORMAT_PROVIDER else DEFAULT_MODELS[provider]

    if context is None:
        context = AIRequestContext(feature_name="format_workout")
    context.custom_properties.setdefault("model", model)

    if provider == "anthropic":
        return AnthropicCompletionClient(AIClientFactory.create_anthropic_client(context=context), model)
    if provider == "openai":
        return ChatCompletionClient(AIClientFactory.create_openai_client(context=context), model)
    return ChatCompletionClient(AIClientFactory.create_openrouter_client(context=context), model)


def invoke_completion(
    client: CompletionClient,
    system: str,
    user: str,
    temperature: float = DEFAULT_TEMPERATURE,
) -> str:
    """
    Make exactly one completion call and return the raw text.

    No retries, no caching. Any provider failure, or an empty completion,
    is raised as ProviderError.
    """
    try:
        text = client.complete(system, user, temperature)
    except Exception as e:
        logger.error(f"Completion provider call failed: {e}")
        raise ProviderError(f"completion provider error: {e}") from e

    if not text or not text.strip():
        raise ProviderError("completion provider error: empty completion")

    logger.debug(f"Received completion ({len(text)} chars)")
    return text
