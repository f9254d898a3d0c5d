"""
Clock — источник текущего времени для проверки permit deadline.

Время — Unix timestamp в секундах (int), как block.timestamp.
"""

import time
from typing import Protocol


class Clock(Protocol):
    """Поставщик текущего времени."""

    def now(self) -> int:
        ...


class SystemClock:
    """Wall-clock время хоста (UTC seconds)."""

    def now(self) -> int:
        return int(time.time())


class FixedClock:
    """
    Управляемые часы для тестов и детерминированного replay.

    Время монотонно: set() назад во времени запрещён.
    """

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError(f"start must be non-negative, got {start}")
        self._now = start

    def now(self) -> int:
        return self._now

    def set(self, ts: int) -> None:
        if ts < self._now:
            raise ValueError(f"clock cannot move backwards: {ts} < {self._now}")
        self._now = ts

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError(f"seconds must be non-negative, got {seconds}")
        self._now += seconds
        return self._now
