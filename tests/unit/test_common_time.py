"""Unit tests for tipline.common.time."""

from __future__ import annotations

import itertools

from tipline.common.time import MonotonicEpochClock, epoch_millis


def test_epoch_millis_is_in_milliseconds() -> None:
    """The reading is a 13-digit millisecond count for current dates."""
    assert len(str(epoch_millis())) == 13


def test_monotonic_clock_never_goes_backwards() -> None:
    """A wall clock stepping backwards is clamped to the last reading."""
    readings = iter([100, 105, 90, 110])
    clock = MonotonicEpochClock(lambda: next(readings))
    assert [clock() for _ in range(4)] == [100, 105, 105, 110]


def test_monotonic_clock_passes_through_increasing_time() -> None:
    """Increasing readings are returned unchanged."""
    counter = itertools.count(1)
    clock = MonotonicEpochClock(lambda: next(counter))
    assert [clock(), clock(), clock()] == [1, 2, 3]
