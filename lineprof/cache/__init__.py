"""Caching helpers."""

from .memory_cache import LineKeyCache, SourceLineCache

__all__ = ["LineKeyCache", "SourceLineCache"]
