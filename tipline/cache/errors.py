"""Errors raised by cache store adapters."""

from __future__ import annotations


class CacheError(Exception):
    """Raised when a cache backend call fails."""

    def __init__(self, operation: str, reason: str) -> None:
        """Initialise with the failed operation name and backend reason."""
        self.operation = operation
        self.reason = reason
        super().__init__(f"Cache {operation} failed: {reason}")
