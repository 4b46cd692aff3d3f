"""Common time utilities."""

from __future__ import annotations

import datetime as dt
import typing as typ


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp."""
    return dt.datetime.now(dt.UTC)


def epoch_millis() -> int:
    """Return the current Unix time in whole milliseconds."""
    return int(utcnow().timestamp() * 1000)


class EpochClock(typ.Protocol):
    """Callable returning Unix time in milliseconds."""

    def __call__(self) -> int: ...


class MonotonicEpochClock:
    """Epoch-millisecond clock that never returns a smaller value than before.

    Each reading is clamped to the previous one, so a wall clock stepping
    backwards cannot reorder listings.

    Parameters
    ----------
    source
        Underlying wall clock; defaults to :func:`epoch_millis`.

    """

    def __init__(self, source: EpochClock = epoch_millis) -> None:
        """Wrap *source* with a high-water mark."""
        self._source = source
        self._last = 0

    def __call__(self) -> int:
        """Return the next non-decreasing timestamp."""
        now = max(self._source(), self._last)
        self._last = now
        return now
