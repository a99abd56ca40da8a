"""Async exponential backoff retry decorator."""

from __future__ import annotations

import asyncio
import functools
import random
from typing import Any, Callable, TypeVar

from svcgraph.utils.logging import get_logger

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def async_retry(
    max_attempts: int = 3,
    base_delay: float = 0.1,
    max_delay: float = 2.0,
    retryable_exceptions: tuple[type[Exception], ...] = (Exception,),
) -> Callable[[F], F]:
    """Decorator for async functions with exponential backoff + jitter.

    Only exceptions listed in ``retryable_exceptions`` are retried; anything
    else propagates on the first attempt.
    """

    def decorator(func: F) -> F:
        name = getattr(func, "__qualname__", repr(func))

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            last_exc: Exception | None = None
            for attempt in range(1, max_attempts + 1):
                try:
                    return await func(*args, **kwargs)
                except retryable_exceptions as exc:
                    last_exc = exc
                    if attempt == max_attempts:
                        raise

                    delay = min(base_delay * (2 ** (attempt - 1)), max_delay)
                    jitter = random.uniform(0, delay * 0.5)
                    total_delay = delay + jitter
                    logger.warning(
                        "retry_attempt",
                        func=name,
                        attempt=attempt,
                        delay=round(total_delay, 2),
                        error=str(exc),
                    )
                    await asyncio.sleep(total_delay)

            raise RuntimeError(f"Exhausted retries for {name}") from last_exc

        return wrapper  # type: ignore[return-value]

    return decorator
