"""Logging setup and latency tracking for the AI relay."""

import logging
import time
from functools import wraps
from typing import Callable, Union


def setup_logging(level: Union[int, str] = logging.INFO):
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        # getLevelName returns "Level X" for unknown names
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def log_latency(operation_name: str):
    """Log how long the wrapped call took and whether it raised."""
    def decorator(func: Callable):
        logger = logging.getLogger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                latency_ms = (time.perf_counter() - start) * 1000
                logger.error(f"{operation_name} | latency_ms={latency_ms:.2f} | status=error | error={e}")
                raise
            latency_ms = (time.perf_counter() - start) * 1000
            status = "success" if getattr(result, "ok", True) else "failed"
            logger.info(f"{operation_name} | latency_ms={latency_ms:.2f} | status={status}")
            return result

        return wrapper

    return decorator
