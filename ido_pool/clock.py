"""Trusted clock sources for phase gating.

Operations never accept a timestamp from the caller; the program reads the
time once, at entry, from one of these.
"""

from __future__ import annotations

import threading
import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of unix timestamps (seconds) that never moves backwards."""

    def now(self) -> int: ...


class SystemClock:
    """Wall clock, clamped so successive reads are non-decreasing."""

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            current = int(time.time())
            if current > self._last:
                self._last = current
            return self._last


class FixedClock:
    """Manually driven clock for simulations and tests.

    Args:
        start: Initial unix timestamp
    """

    def __init__(self, start: int = 0) -> None:
        self._now = start

    def now(self) -> int:
        return self._now

    def set(self, timestamp: int) -> None:
        """Move the clock to timestamp.

        Raises:
            ValueError: If timestamp is earlier than the current time
        """
        if timestamp < self._now:
            raise ValueError(f"Clock cannot move backwards: {timestamp} < {self._now}")
        self._now = timestamp

    def advance(self, seconds: int) -> int:
        """Advance the clock and return the new time."""
        self.set(self._now + seconds)
        return self._now
