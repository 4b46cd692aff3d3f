"""Build a CacheStore from a connection URL.

Supported schemes:

- ``memory://`` -- :class:`~tipline.cache.memory.InMemoryCacheStore`
- ``redis://``, ``rediss://``, ``unix://`` --
  :class:`~tipline.cache.redis_store.RedisCacheStore`

"""

from __future__ import annotations

import typing as typ
from urllib.parse import urlsplit

from tipline.cache.memory import InMemoryCacheStore

if typ.TYPE_CHECKING:
    from tipline.cache.protocol import CacheStore

_REDIS_SCHEMES = frozenset({"redis", "rediss", "unix"})


def build_cache_store(url: str, *, namespace: str = "") -> CacheStore:
    """Return the cache adapter addressed by *url*.

    Parameters
    ----------
    url
        Cache location, for example ``redis://cache:6379/0``.
    namespace
        Key prefix applied by network-backed adapters.

    Raises
    ------
    ValueError
        If the URL scheme is not supported.

    """
    scheme = urlsplit(url).scheme.lower()
    if scheme == "memory":
        return InMemoryCacheStore()
    if scheme in _REDIS_SCHEMES:
        import redis.asyncio as redis

        from tipline.cache.redis_store import RedisCacheStore

        client = redis.Redis.from_url(url, decode_responses=True)
        return RedisCacheStore(client, namespace=namespace)

    msg = f"Unsupported cache URL scheme: {scheme!r}"
    raise ValueError(msg)
