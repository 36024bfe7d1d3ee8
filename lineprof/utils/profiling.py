"""Helpers to time the phases of building a report."""

from __future__ import annotations

from collections import defaultdict
from contextlib import contextmanager
from time import perf_counter
from typing import Dict, Iterator


class ProfileCollector:
    """Collects phase timings (in milliseconds) for named sections."""

    def __init__(self) -> None:
        self._phases: Dict[str, float] = defaultdict(float)

    @contextmanager
    def track(self, name: str) -> Iterator[None]:
        """Context manager adding the block's duration to phase ``name``."""

        start = perf_counter()
        try:
            yield
        finally:
            self._phases[name] += (perf_counter() - start) * 1000.0

    def snapshot(self) -> Dict[str, float]:
        """Return timings rounded to microsecond precision."""

        return {key: round(value, 3) for key, value in self._phases.items()}
