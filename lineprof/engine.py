"""Line-level profiler: lifecycle, configuration and the per-line hot path."""

from __future__ import annotations

import logging
import os
import sys
from types import FrameType, TracebackType
from typing import Iterable, Optional, Type

from .cache import LineKeyCache
from .clock import Clock
from .config import Settings, get_settings
from .filters import IgnoreFilter
from .hooks import LineHook
from .models import ProfileReport
from .renderers import HTMLRenderer, Renderer
from .services.report import ReportBuilder
from .stats import AggregationStore

LOGGER = logging.getLogger(__name__)

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__)) + os.sep


class Profiler:
    """Accumulates per-line counts and elapsed time for the traced program.

    Usage:
        profiler = Profiler().add_file_ignore("/vendor/").set_max_rows(20)
        profiler.start()
        run_workload()
        profiler.stop().dump("profile.html")

    The time attributed to a line is the interval between its line event and
    the next line event of a non-ignored file. The interval still open when
    :meth:`stop` is called is discarded. Statistics accumulate across
    repeated start/stop cycles.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        hook: Optional[LineHook] = None,
        ignore_filter: Optional[IgnoreFilter] = None,
        report_builder: Optional[ReportBuilder] = None,
        max_rows: int = 30,
    ) -> None:
        self.clock = clock or Clock()
        self.hook = hook or LineHook()
        self.ignore_filter = ignore_filter or IgnoreFilter()
        self.report_builder = report_builder or ReportBuilder()
        self.short_names = LineKeyCache()
        self.store = AggregationStore()
        self.max_rows = max_rows

        self.start_micros: Optional[int] = None
        self.stop_micros: Optional[int] = None

        self._current_line: Optional[str] = None
        self._current_path = ""
        self._current_start = 0

        self.hook.subscribe(self._on_trace_line)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "Profiler":
        """Build a profiler configured from ``LINEPROF_*`` settings."""

        settings = settings or get_settings()
        profiler = cls(max_rows=settings.max_rows, **kwargs)
        profiler.add_file_ignores(settings.ignore_files)
        for pattern in settings.ignore_lines:
            profiler.add_line_ignore(pattern)
        return profiler

    # Configuration

    def add_file_ignore(self, pattern: str) -> "Profiler":
        self.ignore_filter.add_file_ignore(pattern)
        return self

    def add_file_ignores(self, patterns: Iterable[str]) -> "Profiler":
        self.ignore_filter.add_file_ignores(patterns)
        return self

    def add_line_ignore(self, pattern: str) -> "Profiler":
        self.ignore_filter.add_line_ignore(pattern)
        return self

    def set_max_rows(self, max_rows: int) -> "Profiler":
        if isinstance(max_rows, bool) or not isinstance(max_rows, int):
            raise TypeError(f"max_rows must be an int, got {type(max_rows).__name__}")
        self.max_rows = max_rows
        return self

    # Lifecycle

    def start(self) -> "Profiler":
        """Begin tracing the calling thread from the caller's next line on."""

        self.add_file_ignore(PACKAGE_DIR)
        self.start_micros = self.clock.now_micros()
        self.stop_micros = None
        self._current_line = None
        self._current_path = ""
        self._current_start = 0
        self.hook.install(sys._getframe(1))
        LOGGER.debug("Profiling started")
        return self

    def stop(self) -> "Profiler":
        self.stop_micros = self.clock.now_micros()
        self.hook.uninstall()
        LOGGER.debug("Profiling stopped with %s lines recorded", len(self.store))
        return self

    def __enter__(self) -> "Profiler":
        return self.start()

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.stop()

    @property
    def session_ms(self) -> Optional[float]:
        """Length of the latest start/stop cycle, ``None`` until stopped."""

        if self.start_micros is None or self.stop_micros is None:
            return None
        return (self.stop_micros - self.start_micros) / 1000

    # Hot path

    def on_line_event(self, full_path: str, line_number: int, now_micros: int) -> None:
        """Close the interval of the previous line and open one for this line."""

        if self.ignore_filter.should_ignore_file(full_path):
            return

        identity = f"{self.short_names.short_name_for(full_path)}:{line_number}"

        if self._current_line is not None:
            self.store.record(self._current_line, self._current_path, now_micros - self._current_start)

        self._current_line = identity
        self._current_path = full_path
        self._current_start = self.clock.now_micros()

    def _on_trace_line(self, frame: FrameType) -> None:
        now = self.clock.now_micros()
        self.on_line_event(frame.f_code.co_filename, frame.f_lineno, now)

    # Reporting

    def report(self, max_rows: Optional[int] = None) -> ProfileReport:
        return self.report_builder.build(self, max_rows)

    def dump(self, path: str, renderer: Optional[Renderer] = None) -> Optional["Profiler"]:
        """Write a report to ``path``.

        Returns ``None`` after logging the error when the file cannot be
        written, so a failing report never takes down the profiled program.
        """

        renderer = renderer or HTMLRenderer()
        report = self.report()
        try:
            renderer.write(report, path)
        except OSError as exc:
            LOGGER.error("Failed to open output file %s: %s", path, exc)
            return None
        LOGGER.info("Wrote %s profiled lines to %s", len(report.rows), path)
        return self
