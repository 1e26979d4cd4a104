"""
Fixed-window request rate limiting.

The counter store is process state created by ``init_rate_limiter`` during
application startup. Without ``REDIS_URL`` counts live in memory and expired
windows are dropped by the periodic sweep job; with ``REDIS_URL`` every
instance shares counts through Redis keys that expire on their own.
"""
import logging
import math
import time
from typing import Callable, Dict, Optional, Tuple

from fastapi import Request
from redis import asyncio as aioredis

from skillbridge.core.config import settings
from skillbridge.core.exceptions import RateLimitError

logger = logging.getLogger(__name__)


class InMemoryRateLimitStore:
    """Per-process counters keyed by client identity"""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._windows: Dict[str, Tuple[int, float]] = {}

    async def hit(self, key: str, window_seconds: int) -> Tuple[int, float]:
        """Count a request; returns (count in window, seconds until reset)"""
        now = self._clock()
        count, reset_at = self._windows.get(key, (0, 0.0))
        if reset_at <= now:
            count, reset_at = 0, now + window_seconds
        count += 1
        self._windows[key] = (count, reset_at)
        return count, reset_at - now

    async def sweep(self) -> int:
        """Drop expired windows, returning how many were removed"""
        now = self._clock()
        expired = [key for key, (_, reset_at) in self._windows.items() if reset_at <= now]
        for key in expired:
            del self._windows[key]
        return len(expired)

    async def reset(self) -> None:
        self._windows.clear()

    def __len__(self) -> int:
        return len(self._windows)

    async def close(self) -> None:
        self._windows.clear()


class RedisRateLimitStore:
    """Counters shared by every instance through Redis"""

    def __init__(self, client: aioredis.Redis, prefix: str = "ratelimit:"):
        self.client = client
        self.prefix = prefix

    async def hit(self, key: str, window_seconds: int) -> Tuple[int, float]:
        redis_key = f"{self.prefix}{key}"
        count = await self.client.incr(redis_key)
        if count == 1:
            await self.client.expire(redis_key, window_seconds)
        ttl = await self.client.ttl(redis_key)
        return count, float(ttl if ttl and ttl > 0 else window_seconds)

    async def sweep(self) -> int:
        # Keys carry their own TTL
        return 0

    async def reset(self) -> None:
        async for redis_key in self.client.scan_iter(match=f"{self.prefix}*"):
            await self.client.delete(redis_key)

    async def close(self) -> None:
        await self.client.close()


_store = None


async def init_rate_limiter(redis_url: Optional[str] = None):
    """Create the process-wide store; Redis when a URL is configured"""
    global _store
    redis_url = settings.REDIS_URL if redis_url is None else redis_url
    if redis_url:
        client = aioredis.from_url(redis_url, encoding="utf-8", decode_responses=True)
        _store = RedisRateLimitStore(client)
        logger.info("Rate limiter using Redis store")
    else:
        _store = InMemoryRateLimitStore()
        logger.info("Rate limiter using in-memory store")
    return _store


async def close_rate_limiter() -> None:
    global _store
    if _store is not None:
        await _store.close()
        _store = None


def get_rate_limit_store():
    if _store is None:
        raise RuntimeError("Rate limiter not initialised; call init_rate_limiter() at startup")
    return _store


def client_identity(request: Request) -> str:
    """Socket peer address; forwarded hops are honoured only from trusted proxies"""
    peer = request.client.host if request.client else "unknown"
    trusted = set(settings.TRUSTED_PROXIES)
    if peer not in trusted:
        return peer

    forwarded = request.headers.get("X-Forwarded-For", "")
    hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
    # Rightmost untrusted hop is the client
    for hop in reversed(hops):
        if hop not in trusted:
            return hop
    return hops[0] if hops else peer


class RateLimiter:
    """FastAPI dependency enforcing ``max_requests`` per ``window_seconds``"""

    def __init__(self, name: str, max_requests: int, window_seconds: int):
        self.name = name
        self.max_requests = max_requests
        self.window_seconds = window_seconds

    async def __call__(self, request: Request) -> None:
        if not settings.RATE_LIMIT_ENABLED:
            return

        key = f"{self.name}:{client_identity(request)}"
        count, reset_in = await get_rate_limit_store().hit(key, self.window_seconds)

        if count > self.max_requests:
            retry_after = max(1, math.ceil(reset_in))
            logger.warning(f"Rate limit exceeded for {key} ({count}/{self.max_requests})")
            raise RateLimitError(
                f"Too many requests, please try again in {retry_after} seconds",
                retry_after=retry_after,
            )


api_rate_limit = RateLimiter(
    "api",
    max_requests=settings.API_RATE_LIMIT_MAX_REQUESTS,
    window_seconds=settings.API_RATE_LIMIT_WINDOW_SECONDS,
)

auth_rate_limit = RateLimiter(
    "auth",
    max_requests=settings.AUTH_RATE_LIMIT_MAX_REQUESTS,
    window_seconds=settings.AUTH_RATE_LIMIT_WINDOW_SECONDS,
)
