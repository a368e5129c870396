"""Decorator utilities for cross-cutting concerns."""
import functools
import logging
import time
from typing import Any, Callable, TypeVar, cast

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def log_execution_time(func: F) -> F:
    """Decorator to log how long a (blocking) store call took.

    Args:
        func: The function to decorate

    Returns:
        Decorated function that logs its duration, and its failure if it raises
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.error("%s failed after %.3fs: %s", func.__name__, duration, e)
            raise
        logger.debug("%s completed in %.3fs", func.__name__, time.perf_counter() - start_time)
        return result
    return cast(F, wrapper)
