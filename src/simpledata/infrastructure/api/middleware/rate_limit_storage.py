"""In-memory storage for rate limiting counters.

Thread-safe token buckets keyed by caller (API key or client IP).
"""

import time
from dataclasses import dataclass
from threading import Lock


@dataclass
class TokenBucket:
    """Token bucket for a specific key."""

    tokens: float
    last_updated: float


class RateLimitStorage:
    """Thread-safe in-memory storage for rate limit counters."""

    def __init__(self, cleanup_interval: int = 3600):
        """Initialize storage.

        Args:
            cleanup_interval: Interval in seconds to clean up stale entries.
        """
        self._storage: dict[str, TokenBucket] = {}
        self._lock = Lock()
        self._last_cleanup = time.time()
        self._cleanup_interval = cleanup_interval

    def consume(
        self, key: str, rate_per_minute: float, burst: float = 1.0
    ) -> tuple[bool, int, float]:
        """Attempt to consume a token for the given key.

        Args:
            key: The unique key (API key or client address).
            rate_per_minute: Refill rate in tokens per minute.
            burst: Bucket capacity.

        Returns:
            A tuple of (is_allowed, remaining_tokens, seconds). ``seconds``
            is the time until the bucket is full when allowed, and the
            time until the next token when denied.
        """
        now = time.time()
        rate_per_second = rate_per_minute / 60.0
        capacity = max(1.0, burst)

        with self._lock:
            if now - self._last_cleanup > self._cleanup_interval:
                self._cleanup_stale(now)

            bucket = self._storage.get(key)
            if bucket is None:
                bucket = TokenBucket(tokens=capacity, last_updated=now)
                self._storage[key] = bucket
            else:
                elapsed = now - bucket.last_updated
                bucket.tokens = min(capacity, bucket.tokens + elapsed * rate_per_second)
                bucket.last_updated = now

            if bucket.tokens >= 1.0:
                bucket.tokens -= 1.0
                return True, int(bucket.tokens), (capacity - bucket.tokens) / rate_per_second

            return False, 0, (1.0 - bucket.tokens) / rate_per_second

    def reset(self) -> None:
        """Forget every bucket."""
        with self._lock:
            self._storage.clear()

    def _cleanup_stale(self, now: float) -> None:
        """Remove entries not updated in the last hour."""
        stale_threshold = 3600
        to_delete = [k for k, v in self._storage.items() if now - v.last_updated > stale_threshold]
        for k in to_delete:
            del self._storage[k]
        self._last_cleanup = now


# Global instance
rate_limit_storage = RateLimitStorage()
