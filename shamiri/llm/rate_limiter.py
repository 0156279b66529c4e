"""
Token-bucket rate limiter for content creation.

Features:
- One bucket per user, refilled continuously
- Denies instead of waiting: an empty bucket raises RateLimitError
- Async-safe with asyncio.Lock
- Buckets that have refilled to capacity are dropped

Only entry and category creation go through this. Questions to the
assistant are not throttled.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

from shamiri.errors import RateLimitError
from server.config import config
from server.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class TokenBucket:
    """
    Bucket for a single user.

    Args:
        capacity: Maximum tokens held
        refill_per_hour: Tokens restored per hour, spread evenly
    """
    capacity: int
    refill_per_hour: int

    _tokens: float = field(init=False)
    _last_update: float = field(init=False)

    def __post_init__(self):
        # Start with a full bucket
        self._tokens = float(self.capacity)
        self._last_update = time.monotonic()
        self._tokens_per_sec = self.refill_per_hour / 3600.0

    def _refill(self):
        now = time.monotonic()
        elapsed = now - self._last_update
        self._last_update = now
        self._tokens = min(self.capacity, self._tokens + elapsed * self._tokens_per_sec)

    def try_consume(self, requested: int = 1) -> float:
        """
        Take ``requested`` tokens if available.

        Returns:
            0 on success, otherwise the seconds until enough tokens exist
        """
        self._refill()
        if self._tokens >= requested:
            self._tokens -= requested
            return 0.0
        if self._tokens_per_sec <= 0:
            return float("inf")
        return (requested - self._tokens) / self._tokens_per_sec

    @property
    def remaining(self) -> int:
        self._refill()
        return int(self._tokens)

    @property
    def is_full(self) -> bool:
        return self.remaining >= self.capacity


class CreationRateLimiter:
    """
    Registry of per-user buckets.

    Usage:
        limiter = get_creation_rate_limiter()
        await limiter.check(user_id)   # raises RateLimitError when empty
    """

    def __init__(self, capacity: int, refill_per_hour: int):
        self.capacity = capacity
        self.refill_per_hour = refill_per_hour
        self._buckets: Dict[str, TokenBucket] = {}
        self._lock = asyncio.Lock()

    def _prune(self) -> None:
        # A full bucket is indistinguishable from a fresh one
        for user_id in [u for u, bucket in self._buckets.items() if bucket.is_full]:
            del self._buckets[user_id]

    async def check(self, user_id: str, requested: int = 1) -> None:
        async with self._lock:
            self._prune()
            bucket = self._buckets.get(user_id)
            if bucket is None:
                bucket = TokenBucket(capacity=self.capacity, refill_per_hour=self.refill_per_hour)
                self._buckets[user_id] = bucket

            wait_time = bucket.try_consume(requested)

        if wait_time > 0:
            logger.warning(f"RATE_LIMIT_EXCEEDED user={user_id} remaining=0 reset_in={wait_time:.0f}s")
            raise RateLimitError(retry_after=wait_time)


# Global limiter
_limiter: Optional[CreationRateLimiter] = None


def get_creation_rate_limiter() -> CreationRateLimiter:
    """Get the global creation rate limiter."""
    global _limiter
    if _limiter is None:
        _limiter = CreationRateLimiter(
            capacity=config.RATE_LIMIT.CAPACITY,
            refill_per_hour=config.RATE_LIMIT.REFILL_PER_HOUR,
        )
    return _limiter


def reset_creation_rate_limiter():
    """Forget all buckets (useful for testing)"""
    global _limiter
    _limiter = None
