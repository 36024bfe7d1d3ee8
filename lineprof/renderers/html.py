"""HTML report renderer built on a jinja2 template."""

from __future__ import annotations

from jinja2 import Environment, PackageLoader

from ..models import ProfileReport
from .base import Renderer


class HTMLRenderer(Renderer):
    """Renders a static page with a client-side sortable table.

    The table is ordered by total elapsed time then count, both descending,
    matching the order of the report rows.
    """

    TEMPLATE_NAME = "report.html.j2"

    def __init__(self, title: str = "Line profile") -> None:
        self.title = title
        self._env = Environment(
            loader=PackageLoader("lineprof", "templates"),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, report: ProfileReport) -> str:
        template = self._env.get_template(self.TEMPLATE_NAME)
        return template.render(title=self.title, report=report)
