"""In-process CacheStore adapter.

Suitable for single-process deployments and tests. Every method completes
without awaiting, so each call is atomic with respect to other tasks on the
same event loop.
"""

from __future__ import annotations


class InMemoryCacheStore:
    """Dictionary-backed cache store."""

    def __init__(self) -> None:
        """Start with an empty store."""
        self._entries: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        """Return the cached value for *key*."""
        return self._entries.get(key)

    async def set(self, key: str, value: str) -> None:
        """Store *value* under *key*."""
        self._entries[key] = value

    async def update(self, key: str, value: str) -> None:
        """Overwrite *key* when present; otherwise do nothing."""
        if key in self._entries:
            self._entries[key] = value

    async def remove_starting_with(self, prefix: str) -> None:
        """Drop all keys beginning with *prefix*."""
        for key in [k for k in self._entries if k.startswith(prefix)]:
            del self._entries[key]

    async def close(self) -> None:
        """Drop every entry; the store stays usable."""
        self._entries.clear()

    def keys(self) -> list[str]:
        """Return a snapshot of the stored keys.

        Not part of :class:`~tipline.cache.protocol.CacheStore`; tests use
        it to inspect what the repository cached.
        """
        return list(self._entries)
