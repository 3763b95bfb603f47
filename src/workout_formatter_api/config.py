"""Configuration settings for the workout formatter API."""
import os
from typing import Literal


EnvironmentType = Literal["development", "staging", "production"]
ProviderType = Literal["openrouter", "openai", "anthropic"]

# Default model per completion provider
DEFAULT_MODELS: dict[str, str] = {
    "openrouter": "google/gemini-flash-1.5-8b",
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-sonnet-20241022",
}


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


class Settings:
    """Application settings."""

    # Feature flags
    HELICONE_ENABLED: bool = False

    # Environment
    ENVIRONMENT: EnvironmentType = "development"

    # Completion provider
    FORMAT_PROVIDER: ProviderType = "openrouter"
    FORMAT_MODEL: str = DEFAULT_MODELS["openrouter"]
    FORMAT_TEMPERATURE: float = 0.3
    FORMAT_GROUNDING_LIMIT: int = 200
    FORMAT_MAX_RAW_TEXT_CHARS: int = 20000
    FORMAT_MAX_ATTEMPTS: int = 1

    # API Keys
    OPENROUTER_API_KEY: str | None = None
    OPENAI_API_KEY: str | None = None
    ANTHROPIC_API_KEY: str | None = None
    HELICONE_API_KEY: str | None = None

    def __init__(self):
        # Environment
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env in ("development", "staging", "production"):
            self.ENVIRONMENT = env  # type: ignore
        else:
            self.ENVIRONMENT = "development"

        # Feature flags
        self.HELICONE_ENABLED = os.getenv("HELICONE_ENABLED", "false").lower() == "true"

        # Completion provider
        provider = os.getenv("FORMAT_PROVIDER", "openrouter").lower()
        if provider in DEFAULT_MODELS:
            self.FORMAT_PROVIDER = provider  # type: ignore
        else:
            self.FORMAT_PROVIDER = "openrouter"
        self.FORMAT_MODEL = os.getenv("FORMAT_MODEL") or DEFAULT_MODELS[self.FORMAT_PROVIDER]
        self.FORMAT_TEMPERATURE = _float_env("FORMAT_TEMPERATURE", 0.3)
        self.FORMAT_GROUNDING_LIMIT = _int_env("FORMAT_GROUNDING_LIMIT", 200)
        self.FORMAT_MAX_RAW_TEXT_CHARS = _int_env("FORMAT_MAX_RAW_TEXT_CHARS", 20000)
        self.FORMAT_MAX_ATTEMPTS = max(1, _int_env("FORMAT_MAX_ATTEMPTS", 1))

        # API Keys
        self.OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")
        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
        self.ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
        self.HELICONE_API_KEY = os.getenv("HELICONE_API_KEY")


settings = Settings()
