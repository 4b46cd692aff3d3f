"""CacheStore protocol for the report read-through cache.

The repository layer depends only on this port. Entries never expire on
their own; the repository removes or overwrites them explicitly after each
write, so adapters must not add a TTL.

Usage
-----
>>> from tipline.cache import CacheStore, InMemoryCacheStore
>>> isinstance(InMemoryCacheStore(), CacheStore)
True

"""

from __future__ import annotations

import typing as typ


@typ.runtime_checkable
class CacheStore(typ.Protocol):
    """Asynchronous string key-value store with prefix deletion."""

    async def get(self, key: str) -> str | None:
        """Return the value stored under *key*, or ``None`` when absent."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        ...

    async def update(self, key: str, value: str) -> None:
        """Overwrite *key* only if it already exists."""
        ...

    async def remove_starting_with(self, prefix: str) -> None:
        """Delete every key that begins with the literal *prefix*."""
        ...

    async def close(self) -> None:
        """Release connections held by the store."""
        ...
