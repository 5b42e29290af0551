"""Retry decorator with exponential backoff for network collaborators."""
from __future__ import annotations

import functools
import random
import time
from typing import Any, Callable, Tuple, Type

from jobradar.log import get_logger

log = get_logger(__name__)


class RateLimited(Exception):
    """Raised by a client when the remote side asks us to slow down.

    ``retry_after`` (seconds) overrides the computed backoff delay.
    """

    def __init__(self, message: str, retry_after: float | None = None) -> None:
        super().__init__(message)
        self.retry_after = retry_after


def _backoff(attempt: int, base_delay: float, factor: float, max_delay: float, jitter: bool) -> float:
    delay = min(base_delay * (factor ** (attempt - 1)), max_delay)
    if jitter:
        delay *= 0.5 + random.random()
    return delay


def retry(
    *,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    backoff_factor: float = 2.0,
    jitter: bool = True,
    retryable: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], None] | None = None,
) -> Callable:
    """Decorator: retries the wrapped call, honouring ``RateLimited.retry_after``."""

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            for attempt in range(1, max_attempts + 1):
                try:
                    return fn(*args, **kwargs)
                except (RateLimited,) + tuple(retryable) as exc:
                    if attempt == max_attempts:
                        log.error("%s failed after %d attempts: %s", fn.__qualname__, max_attempts, exc)
                        raise
                    retry_after = getattr(exc, "retry_after", None)
                    if retry_after is not None:
                        delay = min(float(retry_after), max_delay)
                    else:
                        delay = _backoff(attempt, base_delay, backoff_factor, max_delay, jitter)
                    log.warning(
                        "%s attempt %d/%d failed (%s), retrying in %.1fs",
                        fn.__qualname__,
                        attempt,
                        max_attempts,
                        exc,
                        delay,
                    )
                    (sleep or time.sleep)(delay)
            raise RuntimeError("unreachable")  # pragma: no cover

        return wrapper

    return decorator
