"""Plain-text report renderer for terminals."""

from __future__ import annotations

from ..models import ProfileReport
from .base import Renderer


class TextRenderer(Renderer):
    """Fixed-width table, one ranked line per row."""

    IDENTITY_WIDTH = 30
    SOURCE_WIDTH = 60

    def render(self, report: ProfileReport) -> str:
        header = (
            f"{'file:line':<{self.IDENTITY_WIDTH}} {'count':>8} {'total (ms)':>12} "
            f"{'avg (ms)':>10}  line"
        )
        lines = [header, "-" * (len(header) + self.SOURCE_WIDTH - 4)]
        for row in report.rows:
            source = row.source
            if len(source) > self.SOURCE_WIDTH:
                source = source[: self.SOURCE_WIDTH - 3] + "..."
            lines.append(
                f"{row.identity:<{self.IDENTITY_WIDTH}} {row.count:8d} {row.total_ms:12.3f} "
                f"{row.average_ms:10.3f}  {source}"
            )
        if report.session_ms is not None:
            lines.append("")
            lines.append(f"Session time: {report.session_ms:.3f} ms")
        return "\n".join(lines) + "\n"
