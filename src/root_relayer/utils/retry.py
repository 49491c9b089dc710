"""
Bounded retry for async operations.
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

DEFAULT_ATTEMPTS = 3
DEFAULT_DELAY = 1.0  # seconds, fixed between attempts


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    attempts: int = DEFAULT_ATTEMPTS,
    delay: float = DEFAULT_DELAY,
) -> T:
    """
    Await ``operation`` until it succeeds or ``attempts`` are used up.

    Sleeps ``delay`` seconds between attempts; the delay does not grow.

    Args:
        operation: Zero-argument callable returning a fresh awaitable per call
        attempts: Total number of attempts, at least 1
        delay: Seconds to wait between attempts

    Returns:
        The first successful result

    Raises:
        Exception: The error of the last attempt once all attempts fail
    """
    if attempts < 1:
        raise ValueError(f"attempts must be at least 1, got {attempts}")

    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except Exception as e:
            if attempt == attempts:
                logger.error(f"Giving up after {attempts} attempts: {e}")
                raise
            logger.warning(f"Attempt {attempt}/{attempts} failed: {e}; retrying in {delay}s")
            await asyncio.sleep(delay)
