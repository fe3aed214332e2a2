"""Tests for the hybrid memory/Redis rate limiter and the JSON cache"""

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from dsolar import rate_limiter
from dsolar.cache import cache


def make_request(ip="203.0.113.7", forwarded=None):
    headers = [(b"x-forwarded-for", forwarded.encode())] if forwarded else []
    return Request({"type": "http", "method": "POST", "path": "/", "headers": headers, "client": (ip, 5000)})


def test_check_rate_limit_counts_until_limit(fake_redis):
    results = [rate_limiter.check_rate_limit("test:key", 3, 60, fake_redis) for _ in range(4)]

    assert [allowed for allowed, _, _ in results] == [True, True, True, False]
    assert results[2][1] == 3
    assert 0 < results[3][2] <= 60


def test_check_rate_limit_resumes_from_redis(fake_redis):
    fake_redis.set("test:shared", 5, ex=120)

    allowed, count, ttl = rate_limiter.check_rate_limit("test:shared", 5, 60, fake_redis)

    assert allowed is False
    assert count == 5
    assert ttl > 60


def test_client_ip_prefers_forwarded_header():
    assert rate_limiter.get_client_ip(make_request()) == "203.0.113.7"
    assert rate_limiter.get_client_ip(make_request(forwarded="198.51.100.1, 10.0.0.1")) == "198.51.100.1"


@pytest.mark.asyncio
async def test_dependency_raises_429_with_retry_after():
    limiter = rate_limiter.create_rate_limiter(limit=1, window_seconds=30, key_prefix="unit")
    await limiter(make_request())

    with pytest.raises(HTTPException) as exc_info:
        await limiter(make_request())

    assert exc_info.value.status_code == 429
    assert exc_info.value.detail["retry_after"] <= 30
    assert exc_info.value.headers["Retry-After"]


@pytest.mark.asyncio
async def test_limits_are_per_ip():
    limiter = rate_limiter.create_rate_limiter(limit=1, window_seconds=30, key_prefix="unit")

    await limiter(make_request(ip="192.0.2.1"))
    await limiter(make_request(ip="192.0.2.2"))


@pytest.mark.asyncio
async def test_redis_outage_fails_closed(monkeypatch):
    def unreachable():
        raise ConnectionError("redis down")

    monkeypatch.setattr(rate_limiter, "get_redis_client", unreachable)
    monkeypatch.setattr(rate_limiter, "RATE_LIMIT_FAIL_OPEN", False)
    limiter = rate_limiter.create_rate_limiter(limit=5, window_seconds=30, key_prefix="unit")

    with pytest.raises(HTTPException) as exc_info:
        await limiter(make_request())
    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_redis_outage_fail_open(monkeypatch):
    def unreachable():
        raise ConnectionError("redis down")

    monkeypatch.setattr(rate_limiter, "get_redis_client", unreachable)
    monkeypatch.setattr(rate_limiter, "RATE_LIMIT_FAIL_OPEN", True)
    limiter = rate_limiter.create_rate_limiter(limit=5, window_seconds=30, key_prefix="unit")

    assert await limiter(make_request()) is None


def test_cache_roundtrip(fake_redis):
    assert cache.set("unit:value", {"hybrid": [1, 2]}, ttl=60) is True
    assert cache.get("unit:value") == {"hybrid": [1, 2]}
    assert 0 < fake_redis.ttl("unit:value") <= 60

    assert cache.delete("unit:value") is True
    assert cache.get("unit:value") is None


def test_cache_degrades_to_miss_without_redis(monkeypatch):
    def unreachable():
        raise ConnectionError("redis down")

    monkeypatch.setattr(rate_limiter, "get_redis_client", unreachable)

    assert cache.get("unit:value") is None
    assert cache.set("unit:value", 1) is False
    assert cache.delete("unit:value") is False
