"""Line statistics storage."""

from .store import AggregationStore, LineStats

__all__ = ["AggregationStore", "LineStats"]
