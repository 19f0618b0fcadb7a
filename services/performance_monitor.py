"""
Database call timing.

``monitor_query`` wraps an async service method, logs its duration at debug level and
promotes it to a warning when it exceeds the slow threshold.
"""

import time
from functools import wraps

from logging_config import logger

SLOW_QUERY_THRESHOLD = 1.0


def monitor_query(operation_name: str, slow_threshold: float | None = None):
    """
    Decorator to time an async database operation

    Usage:
        @monitor_query("list_halls")
        async def get_halls_page(self, page, size, sort):
            ...
    """
    threshold = slow_threshold or SLOW_QUERY_THRESHOLD

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Query failed: {operation_name} after {time.perf_counter() - start:.3f}s ({e})"
                )
                raise

            elapsed = time.perf_counter() - start
            if elapsed > threshold:
                logger.warning(f"Slow query detected: {operation_name} took {elapsed:.3f}s")
            else:
                logger.debug(f"Query completed: {operation_name} in {elapsed:.3f}s")
            return result

        return wrapper

    return decorator
