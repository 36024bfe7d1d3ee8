"""Pytest configuration for profiler tests."""

import sys
from pathlib import Path
from typing import Dict, Iterable, List

import pytest


def ensure_project_on_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


ensure_project_on_path()


class ScriptedClock:
    """Clock returning predetermined microsecond readings in order."""

    def __init__(self, readings: Iterable[int]) -> None:
        self._readings = iter(readings)
        self.reads = 0

    def now_micros(self) -> int:
        self.reads += 1
        return next(self._readings)


class StubHook:
    """Stands in for LineHook so lifecycle tests never touch sys.settrace."""

    def __init__(self) -> None:
        self.subscribers = []
        self.installs = 0
        self.uninstalls = 0
        self.installed = False

    def subscribe(self, callback) -> None:
        self.subscribers.append(callback)

    def install(self, frame=None) -> None:
        self.installs += 1
        self.installed = True

    def uninstall(self) -> None:
        self.uninstalls += 1
        self.installed = False


class StubReader:
    """In-memory file reader that counts how often each path is read."""

    def __init__(self, files: Dict[str, List[str]]) -> None:
        self.files = files
        self.calls: Dict[str, int] = {}

    def __call__(self, path: str) -> List[str]:
        self.calls[path] = self.calls.get(path, 0) + 1
        return list(self.files.get(path, []))


@pytest.fixture
def stub_hook() -> StubHook:
    return StubHook()


@pytest.fixture
def counting_clock():
    """Clock that advances by 100 microseconds on every read."""

    return ScriptedClock(range(0, 10_000_000, 100))
