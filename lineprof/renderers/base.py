"""Base class for report renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from ..models import ProfileReport


class Renderer(ABC):
    """Turns a :class:`ProfileReport` into a written artifact."""

    @abstractmethod
    def render(self, report: ProfileReport) -> str:
        """Return the rendered report."""

    def write(self, report: ProfileReport, path: str) -> None:
        """Render ``report`` into ``path``; ``OSError`` propagates to the caller."""

        content = self.render(report)
        Path(path).write_text(content, encoding="utf-8")
