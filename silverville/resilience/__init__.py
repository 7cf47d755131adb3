"""Resilience patterns for remote service calls

This module provides retry logic and fallback strategies so a flaky or
unreachable scoring service degrades to local data instead of stalling a
session.
"""

from silverville.resilience.retry import retry_with_backoff, with_retry
from silverville.resilience.fallback import execute_with_fallbacks, FallbackStrategy

__all__ = [
    # Retry
    "retry_with_backoff",
    "with_retry",
    # Fallback
    "execute_with_fallbacks",
    "FallbackStrategy",
]
