"""Line-level execution profiler."""

from .engine import Profiler
from .filters import IgnoreFilter
from .hooks import LineHook
from .models import ProfileReport, ReportRow
from .renderers import HTMLRenderer, TextRenderer
from .services.report import ReportBuilder

__all__ = [
    "HTMLRenderer",
    "IgnoreFilter",
    "LineHook",
    "ProfileReport",
    "Profiler",
    "ReportBuilder",
    "ReportRow",
    "TextRenderer",
]
