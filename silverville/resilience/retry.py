"""Retry for remote service calls

Only transient failures are retried: timeouts, dropped connections, rate
limiting and 5xx responses. Each retry waits an exponentially growing,
jittered delay. A session must never wait long on the network, so the
defaults give up after two retries and a few seconds.
"""

import asyncio
import random
import logging
from typing import Callable, Any, TypeVar
from functools import wraps
import httpx

logger = logging.getLogger(__name__)

T = TypeVar('T')

MAX_RETRIES = 2
BASE_DELAY = 0.5  # seconds
MAX_DELAY = 5.0  # seconds
JITTER = 0.1  # +/- fraction of the delay

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def is_retryable_error(exc: Exception) -> bool:
    """True for failures that may succeed on a second attempt"""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRYABLE_STATUS_CODES
    return isinstance(exc, (httpx.TimeoutException, httpx.NetworkError))


def calculate_backoff(attempt: int) -> float:
    """
    Delay before retry number `attempt` (0-indexed)

    min(BASE_DELAY * 2**attempt, MAX_DELAY), then +/- JITTER of that.
    """
    delay = min(BASE_DELAY * (2 ** attempt), MAX_DELAY)
    return max(delay + random.uniform(-JITTER * delay, JITTER * delay), 0.0)


async def retry_with_backoff(
    func: Callable[..., T],
    *args: Any,
    max_retries: int = MAX_RETRIES,
    **kwargs: Any
) -> T:
    """
    Await func(*args, **kwargs), retrying transient failures

    Raises:
        The last error once retries run out, or the first non-retryable one
    """
    name = getattr(func, "__name__", repr(func))
    attempt = 0
    while True:
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            if not is_retryable_error(e):
                logger.warning(f"[RETRY] {name} failed with non-retryable {type(e).__name__}: {e}")
                raise
            if attempt >= max_retries:
                logger.error(f"[RETRY] {name} still failing after {max_retries} retries")
                raise

            backoff = calculate_backoff(attempt)
            attempt += 1
            logger.info(
                f"[RETRY] {name} retry {attempt}/{max_retries} in {backoff:.2f}s "
                f"({type(e).__name__})"
            )
            await asyncio.sleep(backoff)


def with_retry(max_retries: int = MAX_RETRIES) -> Callable:
    """
    Decorator form of retry_with_backoff

    Example:
        @with_retry(max_retries=1)
        async def fetch_catalog():
            ...
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await retry_with_backoff(func, *args, max_retries=max_retries, **kwargs)
        return wrapper
    return decorator
