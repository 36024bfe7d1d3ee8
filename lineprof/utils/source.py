"""Reads source files for line-level access."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

LOGGER = logging.getLogger(__name__)


def read_lines(path: str) -> List[str]:
    """Return the raw lines of ``path`` without line endings, or ``[]`` if it does not exist."""

    source = Path(path)
    if not source.is_file():
        LOGGER.debug("Source file not found: %s", path)
        return []
    with source.open(encoding="utf-8", errors="replace") as handle:
        return [line.rstrip("\r\n") for line in handle]
