"""Retry policy for unavailable servers and dropped connections."""

from __future__ import annotations

import random
from collections.abc import Collection

from ..config import RetryConfig

# The server answers 503 while it restarts or a forest is unavailable.
RETRYABLE_HTTP_STATUS = 503


def parse_retry_after(value: str | None) -> float | None:
    """Seconds from a ``Retry-After`` header; HTTP dates are ignored."""

    if not value:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


class RetryPolicy:
    """Decides whether and when one operation is attempted again."""

    def __init__(self, config: RetryConfig, *, rng: random.Random | None = None) -> None:
        self._config = config
        self._rng = rng or random.Random()

    def is_retryable_status(self, http_status: int, valid_status_codes: Collection[int]) -> bool:
        # a status the operation accepts is never retried
        return http_status == RETRYABLE_HTTP_STATUS and http_status not in valid_status_codes

    def allows(self, *, attempt: int, elapsed_seconds: float) -> bool:
        if attempt >= self._config.max_attempts:
            return False
        return elapsed_seconds <= self._config.total_retry_budget_seconds

    def delay(self, attempt: int, *, retry_after: float | None = None) -> float:
        """Backoff before attempt ``attempt + 1``.

        A server-provided ``Retry-After`` wins over the exponential
        schedule; both are capped by ``max_backoff_seconds``.
        """

        cap = self._config.max_backoff_seconds
        if cap <= 0:
            return 0.0
        if retry_after is not None:
            return min(cap, retry_after)
        base = min(cap, float(2 ** (attempt - 1)))
        jitter = base * 0.1 * (self._rng.random() * 2.0 - 1.0)
        return max(0.0, base + jitter)


__all__ = [
    "RETRYABLE_HTTP_STATUS",
    "parse_retry_after",
    "RetryPolicy",
]
