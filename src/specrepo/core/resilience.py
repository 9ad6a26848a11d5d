"""
Resilience primitives for operations that touch the network or spawn
processes.

Timeout Budget Categories
=========================

    FAST_TIMEOUT (5s)     - Version metadata fetches
    MEDIUM_TIMEOUT (30s)  - Local git operations (checkout, pull)
    SLOW_TIMEOUT (120s)   - Clones and other large transfers
"""

import logging
import random
import time
from typing import Callable, List, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

#: Fast operations: metadata lookups (default 5s)
FAST_TIMEOUT: float = 5.0

#: Medium operations: local git commands (default 30s)
MEDIUM_TIMEOUT: float = 30.0

#: Slow operations: clones (default 120s)
SLOW_TIMEOUT: float = 120.0


T = TypeVar("T")


def backoff_delay(
    attempt: int,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    jitter: bool = True,
) -> float:
    """Delay before retry number ``attempt + 1``, doubling from ``base_delay``."""
    delay = min(base_delay * (2**attempt), max_delay)
    if jitter:
        delay *= 0.5 + random.random()
    return delay


def retry_with_backoff(
    func: Callable[[], T],
    *,
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    jitter: bool = True,
    retryable_exceptions: Optional[List[Type[Exception]]] = None,
    operation: str = "operation",
) -> T:
    """Call ``func`` until it succeeds or ``max_retries`` retries are spent.

    Args:
        func: Zero-argument callable; wrap arguments in a lambda.
        max_retries: Retries after the first attempt (0 disables retrying).
        base_delay: Delay before the first retry, in seconds.
        max_delay: Upper bound for any single delay.
        jitter: Scale each delay by a random factor in [0.5, 1.5).
        retryable_exceptions: Exception types worth retrying (default: all).
        operation: Label used in the retry log lines.

    Raises:
        Exception: Whatever the final attempt raised.

    Example:
        >>> document = retry_with_backoff(
        ...     lambda: httpx.get(url, timeout=FAST_TIMEOUT).json(),
        ...     max_retries=1,
        ...     retryable_exceptions=[httpx.TransportError],
        ...     operation="version fetch",
        ... )
    """
    retryable = tuple(retryable_exceptions or [Exception])
    attempt = 0
    while True:
        try:
            return func()
        except retryable as e:
            if attempt >= max_retries:
                raise
            delay = backoff_delay(attempt, base_delay, max_delay, jitter)
            logger.debug(
                "%s failed (%s), retry %d/%d in %.2fs",
                operation,
                e,
                attempt + 1,
                max_retries,
                delay,
            )
            time.sleep(delay)
            attempt += 1
