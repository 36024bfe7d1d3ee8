"""Monotonic microsecond clock used to time line intervals."""

from __future__ import annotations

from time import perf_counter_ns


class Clock:
    """Supplies monotonic timestamps in whole microseconds."""

    @staticmethod
    def now_micros() -> int:
        return perf_counter_ns() // 1000
