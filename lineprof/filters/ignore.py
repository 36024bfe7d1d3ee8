"""Rules deciding which files and source lines stay out of a profile."""

from __future__ import annotations

import re
from typing import Iterable, List, Pattern


class IgnoreFilter:
    """Holds file-path substrings and source-line patterns to skip.

    File rules are literal substrings tested against the full source path
    while profiling. Line rules are regular expressions tested against the
    raw, untrimmed source text while a report is generated.
    """

    DEFAULT_FILE_PATTERNS = (
        "/site-packages/",
        "/dist-packages/",
        "/_pytest/",
        "/pluggy/",
        "<frozen ",
    )
    DEFAULT_LINE_PATTERNS = (r"^\s*assert\b",)

    def __init__(self) -> None:
        self.file_patterns: List[str] = list(self.DEFAULT_FILE_PATTERNS)
        self.line_patterns: List[Pattern[str]] = [re.compile(p) for p in self.DEFAULT_LINE_PATTERNS]

    def add_file_ignore(self, pattern: str) -> None:
        """Exclude every file whose full path contains ``pattern``."""

        self.file_patterns.append(pattern)

    def add_file_ignores(self, patterns: Iterable[str]) -> None:
        for pattern in patterns:
            self.add_file_ignore(pattern)

    def add_line_ignore(self, pattern: str) -> None:
        """Hide source lines matching the regular expression ``pattern`` from reports."""

        self.line_patterns.append(re.compile(pattern))

    def should_ignore_file(self, path: str) -> bool:
        for pattern in self.file_patterns:
            if pattern in path:
                return True
        return False

    def should_ignore_line(self, raw_text: str) -> bool:
        for pattern in self.line_patterns:
            if pattern.search(raw_text):
                return True
        return False
