"""Per-line statistics accumulated while profiling."""

from __future__ import annotations

from typing import Dict, List, Tuple


class LineStats:
    """Invocation count and total elapsed microseconds for one line identity."""

    __slots__ = ("count", "total_micros", "path")

    def __init__(self, path: str) -> None:
        self.count = 0
        self.total_micros = 0.0
        self.path = path

    @property
    def average_micros(self) -> float:
        return self.total_micros / self.count

    def __repr__(self) -> str:
        return f"LineStats(count={self.count}, total_micros={self.total_micros}, path={self.path!r})"


class AggregationStore:
    """Mapping of line identity to :class:`LineStats`.

    Entries are created the first time an interval is closed for an identity,
    in the same step as their first increment, so every stored entry has a
    count of at least one.
    """

    def __init__(self) -> None:
        self._lines: Dict[str, LineStats] = {}

    def record(self, identity: str, path: str, elapsed_micros: float) -> None:
        stats = self._lines.get(identity)
        if stats is None:
            stats = self._lines[identity] = LineStats(path)
        stats.count += 1
        stats.total_micros += elapsed_micros

    def get(self, identity: str) -> LineStats | None:
        return self._lines.get(identity)

    def snapshot(self) -> List[Tuple[str, LineStats]]:
        """Return the current ``(identity, stats)`` pairs in insertion order."""

        return list(self._lines.items())

    def __contains__(self, identity: object) -> bool:
        return identity in self._lines

    def __len__(self) -> int:
        return len(self._lines)
