"""Cache store port and adapters used by the report repository.

Public API
----------
CacheStore
    Protocol implemented by every adapter.
CacheError
    Raised by adapters when the backend fails.
InMemoryCacheStore
    In-process adapter.
RedisCacheStore
    Redis/Valkey adapter.
build_cache_store
    Construct an adapter from a URL.
"""

from tipline.cache.errors import CacheError
from tipline.cache.factory import build_cache_store
from tipline.cache.memory import InMemoryCacheStore
from tipline.cache.protocol import CacheStore
from tipline.cache.redis_store import RedisCacheStore

__all__ = [
    "CacheError",
    "CacheStore",
    "InMemoryCacheStore",
    "RedisCacheStore",
    "build_cache_store",
]
