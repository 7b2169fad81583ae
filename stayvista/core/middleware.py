"""Starlette middleware and per-route throttles."""

import logging
import time
from collections.abc import Collection

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

import redis.asyncio as redis

from stayvista.config import Settings
from stayvista.core.exceptions import RateLimitExceeded

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60

# Health checks and docs are never throttled
OPEN_PATHS = frozenset({"/", "/health", "/docs", "/redoc", "/openapi.json"})


def client_address(request: Request, trusted_proxies: Collection[str] = ()) -> str:
    """Caller address used as the rate-limit key.

    Forwarding headers are honored only when the direct peer is a trusted proxy.
    """
    peer = request.client.host if request.client else "unknown"
    if peer not in trusted_proxies:
        return peer
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.headers.get("X-Real-IP") or peer


class SlidingWindow:
    """Per-key request counter over the last minute, stored in a redis sorted set."""

    def __init__(self, redis_url: str, limit: int, namespace: str) -> None:
        self.redis_url = redis_url
        self.limit = limit
        self.namespace = namespace
        self._client: redis.Redis | None = None

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(self.redis_url, encoding="utf-8", decode_responses=True)
        return self._client

    async def hit(self, key: str) -> int:
        """Record one request for ``key`` and return how many came before it in the window.

        Raises:
            redis.RedisError: redis is unreachable
        """
        now = time.time()
        bucket = f"{self.namespace}:{key}"
        async with self.client.pipeline(transaction=True) as pipe:
            pipe.zremrangebyscore(bucket, 0, now - WINDOW_SECONDS)
            pipe.zcard(bucket)
            pipe.zadd(bucket, {str(time.time_ns()): now})
            pipe.expire(bucket, WINDOW_SECONDS)
            _, seen, _, _ = await pipe.execute()
        return seen


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Global per-address limit; lets traffic through when redis is down."""

    def __init__(
        self,
        app,
        redis_url: str,
        requests_per_minute: int = 100,
        trusted_proxies: Collection[str] = (),
    ):
        super().__init__(app)
        self.window = SlidingWindow(redis_url, requests_per_minute, "rate_limit")
        self.trusted_proxies = frozenset(trusted_proxies)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in OPEN_PATHS:
            return await call_next(request)

        try:
            seen = await self.window.hit(client_address(request, self.trusted_proxies))
        except redis.RedisError as e:
            logger.warning(f"Rate limiter unavailable, allowing request: {e}")
            return await call_next(request)

        limit = self.window.limit
        reset_at = str(int(time.time()) + WINDOW_SECONDS)
        if seen >= limit:
            return JSONResponse(
                status_code=429,
                content={"detail": RateLimitExceeded().detail, "retry_after": WINDOW_SECONDS},
                headers={
                    "Retry-After": str(WINDOW_SECONDS),
                    "X-RateLimit-Limit": str(limit),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": reset_at,
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(limit)
        response.headers["X-RateLimit-Remaining"] = str(max(0, limit - seen - 1))
        response.headers["X-RateLimit-Reset"] = reset_at
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags each response with a request id and its duration; warns on slow calls."""

    def __init__(self, app, slow_request_seconds: float = 1.0):
        super().__init__(app)
        self.slow_request_seconds = slow_request_seconds

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or str(time.time_ns())
        request.state.request_id = request_id

        response = await call_next(request)

        elapsed = time.perf_counter() - started
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{elapsed:.3f}s"

        summary = f"{request.method} {request.url.path} -> {response.status_code} in {elapsed:.3f}s"
        if elapsed > self.slow_request_seconds:
            logger.warning(f"Slow request [{request_id}]: {summary}")
        else:
            logger.debug(summary)
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds browser hardening headers; HSTS only when serving over TLS."""

    HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "strict-origin-when-cross-origin",
    }

    def __init__(self, app, hsts: bool = False):
        super().__init__(app)
        self.hsts = hsts

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers.update(self.HEADERS)
        if self.hsts:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


class RateLimiter:
    """Tighter limit for a single route, used as a dependency.

    Skipped entirely unless ``settings.rate_limiting_active``, the same switch
    that installs the global limiter.
    """

    def __init__(self, requests_per_minute: int = 10, key_prefix: str = "api"):
        self.requests_per_minute = requests_per_minute
        self.key_prefix = key_prefix
        self._window: SlidingWindow | None = None

    def window(self, settings: Settings) -> SlidingWindow:
        if self._window is None:
            self._window = SlidingWindow(
                settings.redis_url, self.requests_per_minute, f"rate:{self.key_prefix}"
            )
        return self._window

    async def __call__(self, request: Request) -> None:
        settings: Settings = request.app.state.settings
        if not settings.rate_limiting_active:
            return

        try:
            seen = await self.window(settings).hit(
                client_address(request, settings.trusted_proxies)
            )
        except redis.RedisError as e:
            logger.warning(f"Rate limiter '{self.key_prefix}' unavailable: {e}")
            return

        if seen >= self.requests_per_minute:
            raise RateLimitExceeded()


session_limiter = RateLimiter(requests_per_minute=10, key_prefix="session")
payment_limiter = RateLimiter(requests_per_minute=10, key_prefix="payment_intent")
booking_limiter = RateLimiter(requests_per_minute=10, key_prefix="booking")
