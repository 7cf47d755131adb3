"""Fallback chains for remote-or-local data

A chain lists ways to obtain the same result, best first: usually the remote
service, then a local substitute (food table, built-in quiz catalog, round
generator). The first strategy that returns wins.
"""

import logging
from typing import Any, Callable, List, TypeVar
from dataclasses import dataclass

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class FallbackStrategy:
    """
    One way to produce a result

    Attributes:
        name: Label used in logs
        handler: Async callable producing the result
        priority: Lower runs first
    """
    name: str
    handler: Callable[..., T]
    priority: int


async def execute_with_fallbacks(
    strategies: List[FallbackStrategy],
    *args: Any,
    **kwargs: Any
) -> T:
    """
    Run strategies by priority until one succeeds

    Every handler receives the same arguments.

    Raises:
        The last strategy's error if all fail; RuntimeError if none were given

    Example:
        analysis = await execute_with_fallbacks([
            FallbackStrategy("remote_analysis", analyze_remote, priority=1),
            FallbackStrategy("local_mock", analyze_local, priority=2),
        ], image_b64)
    """
    if not strategies:
        raise RuntimeError("No fallback strategies given")

    ordered = sorted(strategies, key=lambda s: s.priority)
    last_error: Exception = RuntimeError("All fallback strategies failed")

    for strategy in ordered:
        try:
            result = await strategy.handler(*args, **kwargs)
        except Exception as e:
            logger.warning(f"[FALLBACK] {strategy.name} failed: {type(e).__name__}: {e}")
            last_error = e
            continue

        if strategy is not ordered[0]:
            logger.info(f"[FALLBACK] Using {strategy.name} result")
        return result

    logger.error(f"[FALLBACK] All {len(ordered)} strategies failed")
    raise last_error
