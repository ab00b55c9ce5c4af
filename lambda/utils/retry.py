import asyncio
from typing import Awaitable, Callable, TypeVar

from utils import logging

T = TypeVar("T")


async def retry_with_backoff(fn: Callable[[], Awaitable[T]], max_retries: int = 5, base_delay_ms: int = 1000) -> T:
    """
    Await fn() until it succeeds or max_retries attempts have failed.

    After failed attempt n (0-based) the wrapper waits base_delay_ms * 2**n
    milliseconds, except after the last attempt. When every attempt fails the
    last exception is re-raised.
    """
    if max_retries < 1:
        raise ValueError(f"max_retries must be at least 1, got {max_retries}")

    last_error = None
    for attempt in range(max_retries):
        try:
            return await fn()
        except Exception as e:
            last_error = e
            logging.warning(f"Attempt {attempt + 1}/{max_retries} failed: {str(e)}")
            if attempt < max_retries - 1:
                delay = base_delay_ms * 2 ** attempt
                logging.info(f"Waiting {delay}ms before retry...")
                await asyncio.sleep(delay / 1000)

    raise last_error
