"""Line-event hook built on ``sys.settrace``.

The hook fans every ``"line"`` trace event out to its subscribers in the
order they subscribed. A subscriber that raises is logged and skipped for
that event; the remaining subscribers still run.

A tracer that was already installed (a coverage tool, a debugger) stays in
the chain: it receives every event before the subscribers, and its
frame-local tracers are tracked per frame and handed back on ``uninstall``.
"""

from __future__ import annotations

import logging
import sys
from types import FrameType
from typing import Any, Callable, Dict, List, Optional, Set

LOGGER = logging.getLogger(__name__)

LineCallback = Callable[[FrameType], None]
TraceFunction = Callable[[FrameType, str, Any], Any]


class LineHook:
    """Installs a per-line tracer for the current thread."""

    def __init__(self) -> None:
        self._subscribers: List[LineCallback] = []
        self._failed: Set[Callable[..., Any]] = set()
        self._previous: Optional[TraceFunction] = None
        # Frame -> local tracer of the previous tracer for that frame.
        self._chained: Dict[FrameType, TraceFunction] = {}
        self._installed = False

    @property
    def installed(self) -> bool:
        return self._installed

    def subscribe(self, callback: LineCallback) -> None:
        """Append ``callback`` to the subscribers receiving each executed line's frame."""

        self._subscribers.append(callback)

    def install(self, frame: Optional[FrameType] = None) -> None:
        """Start delivering line events.

        Frames already on the stack (starting at ``frame``, or the caller's
        frame) get the line tracer too, so the code following ``install`` in
        those frames is traced. Their current local tracers keep receiving
        events through the hook.
        """

        if self._installed:
            return
        self._previous = sys.gettrace()
        frame = frame or sys._getframe(1)
        while frame is not None:
            if frame.f_trace is not None and frame.f_trace != self._trace_line:
                self._chained[frame] = frame.f_trace
            frame.f_trace = self._trace_line
            frame = frame.f_back
        self._installed = True
        sys.settrace(self._trace_call)

    def uninstall(self) -> None:
        """Stop delivering line events and restore the previous tracer.

        Frames on the stack get their previous local tracer back right away.
        Any other frame still pointing at the hook (a suspended generator, or
        a frame entered while tracing) hands itself back on its next event.
        """

        if not self._installed:
            return
        self._installed = False
        sys.settrace(self._previous)
        self._previous = None
        frame = sys._getframe()
        while frame is not None:
            if frame.f_trace == self._trace_line:
                frame.f_trace = self._chained.pop(frame, None)
            frame = frame.f_back

    def _trace_call(self, frame: FrameType, event: str, arg: Any) -> Optional[TraceFunction]:
        if not self._installed:
            return None
        if self._previous is not None:
            local = self._forward(self._previous, frame, event, arg)
            if local is not None:
                self._chained[frame] = local
        return self._trace_line

    def _trace_line(self, frame: FrameType, event: str, arg: Any) -> Optional[TraceFunction]:
        if not self._installed:
            return self._detach(frame, event, arg)

        local = self._chained.get(frame)
        if local is not None:
            result = self._forward(local, frame, event, arg)
            if result is not None:
                self._chained[frame] = result

        if event == "line":
            for callback in self._subscribers:
                try:
                    callback(frame)
                except Exception:
                    self._report_failure(callback)
        elif event == "return":
            self._chained.pop(frame, None)
        return self._trace_line

    def _detach(self, frame: FrameType, event: str, arg: Any) -> Optional[TraceFunction]:
        # A None result keeps the f_trace assigned here.
        local = self._chained.pop(frame, None)
        frame.f_trace = local
        if local is None:
            return None
        return self._forward(local, frame, event, arg)

    def _forward(self, tracer: TraceFunction, frame: FrameType, event: str, arg: Any) -> Optional[TraceFunction]:
        try:
            return tracer(frame, event, arg)
        except Exception:
            self._report_failure(tracer)
            return None

    def _report_failure(self, callback: Callable[..., Any]) -> None:
        if callback in self._failed:
            return
        self._failed.add(callback)
        LOGGER.exception("Trace callback %r failed; later failures are not logged", callback)
