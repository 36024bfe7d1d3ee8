"""Utility helpers for the profiler."""

from .profiling import ProfileCollector
from .source import read_lines

__all__ = ["ProfileCollector", "read_lines"]
