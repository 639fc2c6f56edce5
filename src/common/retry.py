"""Bounded exponential-backoff retry for upstream calls."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

import aiohttp

from common.errors import LookupServiceError, NetworkError, RateLimitError
from common.logging_utils import extra_context
from constants import Constants

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_fatal(error: BaseException) -> bool:
    """Client errors (4xx except 429) are never retried."""
    status = getattr(error, "status_code", None)
    return isinstance(status, int) and 400 <= status < 500 and status != 429


def is_retryable(error: BaseException) -> bool:
    """Return True for failures that are worth another attempt."""
    if isinstance(error, (RateLimitError, NetworkError)):
        return True
    status = getattr(error, "status_code", None)
    return isinstance(status, int) and (status == 429 or status >= 500)


def translate_error(error: BaseException, context: str) -> LookupServiceError:
    """Convert an arbitrary exception into the typed taxonomy."""
    if isinstance(error, LookupServiceError):
        return error
    if isinstance(error, (asyncio.TimeoutError, aiohttp.ServerTimeoutError)):
        return NetworkError(f"Request timeout for {context}", error)
    if isinstance(error, (aiohttp.ClientError, OSError)):
        return NetworkError(f"Failed to fetch data from {context}: {error}", error)
    message = str(error) or type(error).__name__
    return NetworkError(message, error)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = Constants.HTTP_RETRY_MAX,
    base_delay: float = Constants.HTTP_RETRY_BASE_DELAY_SEC,
    context: str = "operation",
    sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
) -> T:
    """Run ``operation`` up to ``max_attempts`` times.

    Args:
        operation: Zero-argument coroutine function performing one attempt.
        max_attempts: Total number of tries (not retries); at least 1.
        base_delay: Delay in seconds before the second attempt; doubles after.
        context: Human-readable label used in logs and translated errors.
        sleep: Awaitable sleep, replaceable in tests.

    Returns:
        Whatever ``operation`` returns on its first success.

    Raises:
        LookupServiceError: the fatal error as-is, or the last retryable
            error translated into a typed error.
    """
    attempts = max(1, int(max_attempts))
    sleeper = sleep or asyncio.sleep
    last_error: Optional[BaseException] = None

    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # pylint: disable=broad-exception-caught
            last_error = exc
            if is_fatal(exc):
                raise

            if attempt == attempts:
                logger.error(
                    "All retry attempts failed for %s",
                    context,
                    extra=extra_context(
                        event="retry_exhausted",
                        component="retry",
                        attempts=attempts,
                        error=str(exc),
                    ),
                )
                break

            delay = base_delay * (2 ** (attempt - 1))
            logger.warning(
                "Retry attempt %d/%d for %s after %.2fs",
                attempt,
                attempts,
                context,
                delay,
                extra=extra_context(
                    event="retry",
                    component="retry",
                    attempt=attempt,
                    error=str(exc),
                ),
            )
            await sleeper(delay)

    assert last_error is not None
    typed = translate_error(last_error, context)
    if typed is last_error:
        raise typed
    raise typed from last_error
