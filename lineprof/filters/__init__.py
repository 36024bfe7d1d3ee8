"""Instrumentation filters."""

from .ignore import IgnoreFilter

__all__ = ["IgnoreFilter"]
