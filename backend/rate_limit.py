"""
In-process token-bucket rate limiting.

Each limit is a (capacity, period) pair applied per key, where the key is the
authenticated user, the client IP or a single global bucket. Buckets refill
continuously at ``capacity / period`` tokens per second.

Usage:
    limiter = RateLimiter()
    allowed, retry_after = limiter.check_rate_limit(ACCOUNT_CREATION, "USER:auth0|123")

Buckets live in process memory: with several workers each one enforces its
own budget.
"""
import logging
import math
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from starlette.requests import Request

logger = logging.getLogger(__name__)

MAX_BUCKETS = 10_000
LOW_TOKEN_WARNING_RATIO = 0.2


class KeyType(str, Enum):
    """What a rate limit is keyed on."""

    USER = "USER"
    IP = "IP"
    GLOBAL = "GLOBAL"


@dataclass(frozen=True)
class RateLimitRule:
    """A named budget of ``capacity`` requests per ``period_seconds``."""

    name: str
    capacity: int
    period_seconds: float
    key_type: KeyType = KeyType.USER

    @property
    def refill_per_second(self) -> float:
        return self.capacity / self.period_seconds


# Budgets used by the routers
ACCOUNT_CREATION = RateLimitRule("account-creation", 10, 3600, KeyType.USER)
ACCOUNT_DELETION = RateLimitRule("account-deletion", 10, 3600, KeyType.USER)
EXISTENCE_CHECK = RateLimitRule("existence-check", 10, 60, KeyType.IP)
WORKOUT_CREATION = RateLimitRule("workout-creation", 100, 60, KeyType.USER)


@dataclass
class TokenBucket:
    tokens: float
    updated_at: float


def client_ip(request: Request) -> str:
    """First X-Forwarded-For hop, then X-Real-IP, then the peer address."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else "unknown"


def build_key(rule: RateLimitRule, request: Request, subject: Optional[str] = None) -> str:
    """Bucket key for ``rule``; the rule name keeps endpoint budgets apart."""
    if rule.key_type == KeyType.GLOBAL:
        key = "GLOBAL"
    elif rule.key_type == KeyType.IP:
        key = f"IP:{client_ip(request)}"
    else:
        key = f"USER:{subject or 'ANONYMOUS'}"
    return f"{rule.name}:{key}"


class RateLimiter:
    """Thread-safe token buckets with LRU eviction."""

    def __init__(
        self,
        max_buckets: int = MAX_BUCKETS,
        time_source: Callable[[], float] = time.monotonic,
    ):
        self._buckets: "OrderedDict[str, TokenBucket]" = OrderedDict()
        self._max_buckets = max_buckets
        self._time = time_source
        self._lock = threading.Lock()

    def _bucket(self, key: str, rule: RateLimitRule, now: float) -> TokenBucket:
        bucket = self._buckets.get(key)
        if bucket is None:
            bucket = TokenBucket(tokens=float(rule.capacity), updated_at=now)
            self._buckets[key] = bucket
            while len(self._buckets) > self._max_buckets:
                self._buckets.popitem(last=False)
        else:
            self._buckets.move_to_end(key)
            elapsed = max(0.0, now - bucket.updated_at)
            bucket.tokens = min(rule.capacity, bucket.tokens + elapsed * rule.refill_per_second)
            bucket.updated_at = now
        return bucket

    def check_rate_limit(self, rule: RateLimitRule, key: str) -> tuple[bool, Optional[int]]:
        """
        Consume one token for ``key`` if available.

        Args:
            rule: Budget to apply
            key: Bucket key (see build_key)

        Returns:
            Tuple of (is_allowed, retry_after_seconds)
        """
        with self._lock:
            now = self._time()
            bucket = self._bucket(key, rule, now)
            if bucket.tokens >= 1:
                bucket.tokens -= 1
                if bucket.tokens < rule.capacity * LOW_TOKEN_WARNING_RATIO:
                    logger.warning(
                        f"Rate limit {rule.name} nearly exhausted for {key}: "
                        f"{int(bucket.tokens)} of {rule.capacity} left"
                    )
                return True, None
            retry_after = math.ceil((1 - bucket.tokens) / rule.refill_per_second)
        logger.warning(f"Rate limit {rule.name} exceeded for {key}")
        return False, max(1, retry_after)

    def reset(self) -> None:
        with self._lock:
            self._buckets.clear()

    def __len__(self) -> int:
        return len(self._buckets)


_limiter = RateLimiter()


def get_rate_limiter() -> RateLimiter:
    """Process-wide limiter shared by all routers."""
    return _limiter
