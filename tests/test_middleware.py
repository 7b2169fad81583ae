from types import SimpleNamespace

import pytest
from starlette.requests import Request

from stayvista.config import Settings
from stayvista.core.exceptions import RateLimitExceeded
from stayvista.core.middleware import RateLimiter, client_address


class FakeWindow:
    def __init__(self, seen: int = 0) -> None:
        self.seen = seen
        self.keys: list[str] = []

    async def hit(self, key: str) -> int:
        self.keys.append(key)
        return self.seen


def _request(peer: str, headers: dict[str, str] | None = None, settings: Settings | None = None) -> Request:
    return Request(
        {
            "type": "http",
            "method": "POST",
            "path": "/booking",
            "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
            "client": (peer, 50000),
            "app": SimpleNamespace(state=SimpleNamespace(settings=settings)),
        }
    )


def test_forwarding_headers_ignored_from_untrusted_peer():
    request = _request("203.0.113.9", {"X-Forwarded-For": "1.1.1.1", "X-Real-IP": "2.2.2.2"})

    assert client_address(request) == "203.0.113.9"
    assert client_address(request, trusted_proxies=["10.0.0.1"]) == "203.0.113.9"


def test_forwarding_headers_honored_from_trusted_proxy():
    forwarded = _request("10.0.0.1", {"X-Forwarded-For": "198.51.100.7, 10.0.0.1"})
    real_ip = _request("10.0.0.1", {"X-Real-IP": "198.51.100.8"})
    bare = _request("10.0.0.1")

    assert client_address(forwarded, ["10.0.0.1"]) == "198.51.100.7"
    assert client_address(real_ip, ["10.0.0.1"]) == "198.51.100.8"
    assert client_address(bare, ["10.0.0.1"]) == "10.0.0.1"


def test_rate_limiting_active_only_outside_development():
    assert Settings(_env_file=None, environment="development").rate_limiting_active is False
    assert Settings(_env_file=None, environment="production").rate_limiting_active is True
    assert (
        Settings(_env_file=None, environment="production", rate_limit_enabled=False).rate_limiting_active
        is False
    )


@pytest.mark.asyncio
async def test_route_limiter_skips_redis_in_development():
    limiter = RateLimiter(requests_per_minute=1, key_prefix="booking")
    window = FakeWindow(seen=100)
    limiter._window = window
    settings = Settings(_env_file=None, environment="development", rate_limit_enabled=True)

    await limiter(_request("203.0.113.9", settings=settings))

    assert window.keys == []


@pytest.mark.asyncio
async def test_route_limiter_rejects_over_limit_and_keys_on_peer():
    limiter = RateLimiter(requests_per_minute=10, key_prefix="booking")
    limiter._window = FakeWindow(seen=10)
    settings = Settings(_env_file=None, environment="production", trusted_proxies=["10.0.0.1"])

    with pytest.raises(RateLimitExceeded):
        await limiter(_request("203.0.113.9", {"X-Forwarded-For": "1.1.1.1"}, settings=settings))

    assert limiter._window.keys == ["203.0.113.9"]


@pytest.mark.asyncio
async def test_route_limiter_allows_under_limit():
    limiter = RateLimiter(requests_per_minute=10, key_prefix="payment_intent")
    limiter._window = FakeWindow(seen=3)
    settings = Settings(_env_file=None, environment="staging")

    await limiter(_request("203.0.113.9", settings=settings))

    assert limiter._window.keys == ["203.0.113.9"]
