"""Unit tests for tipline.cache.factory.build_cache_store."""

from __future__ import annotations

import pytest

from tipline.cache import InMemoryCacheStore, RedisCacheStore, build_cache_store


def test_memory_url_builds_in_memory_store() -> None:
    """memory:// selects the in-process adapter."""
    assert isinstance(build_cache_store("memory://"), InMemoryCacheStore)


@pytest.mark.parametrize(
    "url",
    [
        "redis://localhost:6379/0",
        "rediss://cache.example:6380/1",
    ],
)
def test_redis_urls_build_redis_store(url: str) -> None:
    """Redis URLs select the Redis adapter without connecting."""
    assert isinstance(build_cache_store(url), RedisCacheStore)


def test_unknown_scheme_is_rejected() -> None:
    """Unsupported schemes raise ValueError."""
    with pytest.raises(ValueError, match="Unsupported cache URL scheme"):
        build_cache_store("memcached://localhost")
