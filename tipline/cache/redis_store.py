"""Redis/Valkey CacheStore adapter built on ``redis.asyncio``.

Keys are written without expiry. Prefix deletion walks the keyspace with
``SCAN`` rather than ``KEYS`` so large caches do not block the server, and
deletes in batches.

Usage
-----
>>> import redis.asyncio as redis
>>> store = RedisCacheStore(redis.Redis.from_url("redis://localhost:6379/0"))
>>> await store.set("report:1", "{}")

"""

from __future__ import annotations

import re
import typing as typ

from redis.exceptions import RedisError

from tipline.cache.errors import CacheError

if typ.TYPE_CHECKING:
    import redis.asyncio as redis

_GLOB_SPECIALS = re.compile(r"([*?\[\]\\])")
_DELETE_BATCH = 500


def escape_glob(prefix: str) -> str:
    """Escape Redis glob metacharacters so *prefix* matches literally."""
    return _GLOB_SPECIALS.sub(r"\\\1", prefix)


class RedisCacheStore:
    """Cache store backed by a Redis-compatible server.

    Parameters
    ----------
    client
        ``redis.asyncio.Redis`` client. It should be created with
        ``decode_responses=True``; byte responses are decoded as UTF-8
        otherwise.
    namespace
        Optional string prepended to every key so several deployments can
        share one server.

    """

    def __init__(self, client: redis.Redis, *, namespace: str = "") -> None:
        """Bind the adapter to *client*."""
        self._client = client
        self._namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}{key}"

    async def get(self, key: str) -> str | None:
        """Return the value for *key*, or ``None``."""
        try:
            value = await self._client.get(self._key(key))
        except RedisError as exc:
            raise CacheError("get", str(exc)) from exc
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        """Store *value* under *key* with no expiry."""
        try:
            await self._client.set(self._key(key), value)
        except RedisError as exc:
            raise CacheError("set", str(exc)) from exc

    async def update(self, key: str, value: str) -> None:
        """Overwrite *key* only if it exists (``SET ... XX``)."""
        try:
            await self._client.set(self._key(key), value, xx=True)
        except RedisError as exc:
            raise CacheError("update", str(exc)) from exc

    async def remove_starting_with(self, prefix: str) -> None:
        """Delete all keys beginning with *prefix*."""
        pattern = f"{escape_glob(self._key(prefix))}*"
        batch: list[str | bytes] = []
        try:
            async for key in self._client.scan_iter(match=pattern, count=_DELETE_BATCH):
                batch.append(key)
                if len(batch) >= _DELETE_BATCH:
                    await self._client.delete(*batch)
                    batch.clear()
            if batch:
                await self._client.delete(*batch)
        except RedisError as exc:
            raise CacheError("remove_starting_with", str(exc)) from exc

    async def close(self) -> None:
        """Release the underlying connection pool."""
        try:
            await self._client.aclose()
        except RedisError as exc:
            raise CacheError("close", str(exc)) from exc
