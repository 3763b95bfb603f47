"""AI client management for workout formatter API."""
from .client_factory import AIClientFactory, AIRequestContext
from .retry import (
    create_retry_decorator,
    is_retryable_error,
    with_retries,
)

__all__ = [
    "AIClientFactory",
    "AIRequestContext",
    "create_retry_decorator",
    "is_retryable_error",
    "with_retries",
]
