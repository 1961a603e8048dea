from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_with_backoff(
    fn: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    initial_delay: float = 1.0,
) -> T:
    """
    Await ``fn()`` up to ``max_retries`` times.

    The delay between attempts starts at ``initial_delay`` seconds and doubles
    each time. The last error is re-raised once attempts run out.
    """
    if max_retries < 1:
        raise ValueError("max_retries must be at least 1")

    attempt = 0
    while True:
        try:
            return await fn()
        except Exception as exc:  # pylint: disable=broad-except
            attempt += 1
            if attempt >= max_retries:
                raise
            delay = initial_delay * (2 ** (attempt - 1))
            logger.info("Attempt %d failed (%s), retrying in %.1fs", attempt, exc, delay)
            await asyncio.sleep(delay)
