"""CLI resilience wrappers.

Provides interrupt handling for long-running CLI commands.
"""

import sys
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

__all__ = ["handle_keyboard_interrupt"]

T = TypeVar("T")


def handle_keyboard_interrupt(
    cleanup: Optional[Callable[[], None]] = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator to gracefully handle Ctrl+C in CLI commands.

    Catches KeyboardInterrupt, optionally runs cleanup, and exits
    with code 130 (128 + SIGINT).

    Example:
        >>> @handle_keyboard_interrupt(cleanup=lambda: print("Cancelled"))
        ... def lint_all():
        ...     ...
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return func(*args, **kwargs)
            except KeyboardInterrupt:
                if cleanup:
                    cleanup()
                sys.exit(130)

        return wrapper

    return decorator
