"""In-memory caches owned by a profiler or a single report build."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

UNKNOWN_NAME = "?"


class LineKeyCache:
    """Maps full source paths to the short file name used in line identities.

    Memoized per full path and never invalidated. Distinct paths that share a
    file name map to the same short name, so their line statistics merge.
    """

    def __init__(self) -> None:
        self._short_names: Dict[str, str] = {}

    def short_name_for(self, full_path: str) -> str:
        short = self._short_names.get(full_path)
        if short is None:
            short = self._short_names[full_path] = _basename(full_path)
        return short

    def __len__(self) -> int:
        return len(self._short_names)


def _basename(full_path: str) -> str:
    cut = max(full_path.rfind("/"), full_path.rfind("\\"))
    return full_path[cut + 1 :] or UNKNOWN_NAME


class SourceLineCache:
    """Stores processed source lines so each file is read once per report.

    ``None`` entries mark lines hidden by a line-ignore rule.
    """

    def __init__(self, loader: Callable[[str], List[Optional[str]]]) -> None:
        self._loader = loader
        self._lines: Dict[str, List[Optional[str]]] = {}

    def get_lines(self, path: str) -> List[Optional[str]]:
        """Return cached lines for ``path``, loading them on first request."""

        lines = self._lines.get(path)
        if lines is None:
            lines = self._lines[path] = self._loader(path)
        return lines
