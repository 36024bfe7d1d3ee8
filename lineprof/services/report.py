"""Turns accumulated line statistics into a ranked, bounded report."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..cache import SourceLineCache
from ..filters import IgnoreFilter
from ..models import ProfileReport, ReportRow
from ..stats import LineStats
from ..utils import ProfileCollector, read_lines

if TYPE_CHECKING:
    from ..engine import Profiler

LOGGER = logging.getLogger(__name__)

RankedEntry = Tuple[str, LineStats]


class ReportBuilder:
    """Snapshots a profiler's statistics, ranks them and resolves source text."""

    def __init__(self, reader: Optional[Callable[[str], List[str]]] = None) -> None:
        self.reader = reader or read_lines

    def build(self, profiler: "Profiler", max_rows: Optional[int] = None) -> ProfileReport:
        """Return the top ``max_rows`` lines by total elapsed time.

        Rows whose source line is hidden by a line-ignore rule, or cannot be
        read anymore, are dropped after truncation; the freed slots are not
        refilled from lower-ranked lines.
        """

        limit = max(profiler.max_rows if max_rows is None else max_rows, 0)
        LOGGER.info("Building report for %s profiled lines (max %s rows)", len(profiler.store), limit)

        timings = ProfileCollector()
        with timings.track("total_ms"):
            with timings.track("snapshot_ms"):
                entries = profiler.store.snapshot()
            with timings.track("rank_ms"):
                ranked = self.rank(entries, limit)
            with timings.track("resolve_ms"):
                rows = list(self._resolve_rows(ranked, profiler.ignore_filter))

        dropped = len(ranked) - len(rows)
        if dropped:
            LOGGER.info("Dropped %s ranked lines without displayable source", dropped)

        return ProfileReport(
            rows=rows,
            max_rows=limit,
            session_ms=profiler.session_ms,
            profiling=timings.snapshot(),
        )

    @staticmethod
    def rank(entries: Iterable[RankedEntry], max_rows: int) -> List[RankedEntry]:
        """Sort by total elapsed time, then hit count, highest first, and keep ``max_rows`` entries.

        The sort is stable, so lines tied on both keep their snapshot order.
        """

        ranked = sorted(entries, key=lambda entry: (entry[1].total_micros, entry[1].count), reverse=True)
        return ranked[:max_rows]

    def _resolve_rows(self, ranked: Sequence[RankedEntry], ignore_filter: IgnoreFilter) -> Iterator[ReportRow]:
        sources = SourceLineCache(lambda path: self._load_source(path, ignore_filter))

        for identity, stats in ranked:
            line_number = parse_line_number(identity)
            lines = sources.get_lines(stats.path)
            if not 1 <= line_number <= len(lines):
                LOGGER.debug("No source text for %s in %s", identity, stats.path)
                continue

            text = lines[line_number - 1]
            if text is None:
                LOGGER.debug("Line %s hidden by a line-ignore rule", identity)
                continue

            yield ReportRow(
                identity=identity,
                count=stats.count,
                total_ms=stats.total_micros / 1000,
                average_ms=stats.average_micros / 1000,
                source=text,
            )

    def _load_source(self, path: str, ignore_filter: IgnoreFilter) -> List[Optional[str]]:
        return [
            None if ignore_filter.should_ignore_line(line) else line.strip()
            for line in self.reader(path)
        ]


def parse_line_number(identity: str) -> int:
    """Return the line number after the last ``:`` of a line identity."""

    _, separator, suffix = identity.rpartition(":")
    if not separator or not suffix.isdigit():
        raise ValueError(f"malformed line identity '{identity}'")
    return int(suffix)
