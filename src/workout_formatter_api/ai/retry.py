"""Retry utilities for completion calls with exponential backoff.

The formatting pipeline itself never retries. Callers that want retries wrap
the completion client with `with_retries`, so each attempt is still one plain
provider call.
"""
import logging
import re
from typing import Any, Callable, TypeVar

from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    before_sleep_log,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Default retry configuration
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_MIN_WAIT_SECONDS = 1
DEFAULT_MAX_WAIT_SECONDS = 10

# "Error code: 503", "Status 429", "Server error: 500"
_STATUS_CODE_PATTERN = re.compile(r"\b(?:error code|status(?: code)?|error)\s*:?\s*(\d{3})\b")


def _status_code(exception: BaseException, error_str: str) -> int | None:
    status = getattr(exception, "status_code", None)
    if isinstance(status, int):
        return status
    match = _STATUS_CODE_PATTERN.search(error_str)
    return int(match.group(1)) if match else None


def is_retryable_error(exception: BaseException) -> bool:
    """
    Determine if an exception is retryable.

    Retryable errors include:
    - Rate limit errors (429)
    - Server errors (5xx)
    - Timeout errors
    - Connection errors

    Non-retryable errors include:
    - Authentication errors (401)
    - Bad request errors (400)
    - Not found errors (404)
    - Insufficient quota errors
    """
    error_str = str(exception).lower()
    exception_type = type(exception).__name__.lower()

    # Known HTTP status: only rate limits (429) and server errors (5xx)
    status = _status_code(exception, error_str)
    if status is not None:
        return status == 429 or 500 <= status < 600

    if "rate" in error_str and "limit" in error_str:
        return True

    # Timeouts
    if "timeout" in error_str or "timed out" in error_str:
        return True
    if "timeout" in exception_type:
        return True

    # Connection errors
    if "connection" in error_str or "connect" in exception_type:
        return True

    # DNS resolution failures
    if "name or service not known" in error_str:
        return True
    if "temporary failure in name resolution" in error_str:
        return True
    if "getaddrinfo failed" in error_str:
        return True

    # Default: don't retry auth, bad request, quota or unknown errors
    return False


def create_retry_decorator(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_wait_seconds: float = DEFAULT_MIN_WAIT_SECONDS,
    max_wait_seconds: float = DEFAULT_MAX_WAIT_SECONDS,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Create a retry decorator with exponential backoff.

    Only errors classified by `is_retryable_error` are retried; the last
    exception is re-raised once attempts run out.
    """
    return retry(
        retry=retry_if_exception(is_retryable_error),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(
            multiplier=1,
            min=min_wait_seconds,
            max=max_wait_seconds,
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


class _RetryingCompletionClient:
    """Completion client whose `complete` is wrapped by a retry decorator."""

    def __init__(self, client: Any, decorator: Callable[[Callable[..., str]], Callable[..., str]]):
        self._client = client
        self.complete = decorator(client.complete)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._client, name)


def with_retries(
    client: Any,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_wait_seconds: float = DEFAULT_MIN_WAIT_SECONDS,
    max_wait_seconds: float = DEFAULT_MAX_WAIT_SECONDS,
) -> Any:
    """Return `client` unchanged for a single attempt, else a retrying wrapper."""
    if max_attempts <= 1:
        return client
    decorator = create_retry_decorator(max_attempts, min_wait_seconds, max_wait_seconds)
    return _RetryingCompletionClient(client, decorator)
