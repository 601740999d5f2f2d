"""Bounded retry helpers shared by the registry and the fetcher."""
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from coin_tickers.providers.core.exceptions import PROVIDER_EXCEPTIONS

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Initial attempt plus exactly one retry.
DEFAULT_ATTEMPTS = 2


async def retry_or_default(
    operation: Callable[[], Awaitable[T]],
    default: Callable[[], T],
    *,
    description: str,
    attempts: int = DEFAULT_ATTEMPTS,
) -> T:
    """Run operation up to `attempts` times; return default() if every attempt fails.

    Only PROVIDER_EXCEPTIONS are absorbed. No backoff between attempts.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt.
        default: Factory for the fallback value.
        description: Used in log messages (e.g. "prices page 2").
        attempts: Total number of attempts.
    """
    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except PROVIDER_EXCEPTIONS as exc:
            logger.warning(
                "Fetching %s failed (attempt %d/%d): %s",
                description,
                attempt,
                attempts,
                exc,
            )
    logger.warning("Giving up on %s; using empty result", description)
    return default()
