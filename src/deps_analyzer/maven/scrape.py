"""Scrape generated artifact paths out of captured Maven output."""

from __future__ import annotations

import re
from typing import Sequence

# Older license-maven-plugin releases print a colon after the phrase, newer ones do not.
DEFAULT_MARKERS: tuple[str, ...] = ("Writing third-party file to",)


def _marker_pattern(markers: Sequence[str]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(marker) for marker in markers)
    return re.compile(rf"(?:{alternatives}):?(?P<path>[^\n]*)")


def extract_artifact_paths(text: str, markers: Sequence[str] = DEFAULT_MARKERS) -> list[str]:
    """Return every path announced by a marker line, in order of appearance.

    Repeated paths are kept; a marker followed only by whitespace is ignored.
    """

    if not text or not markers:
        return []
    paths: list[str] = []
    for match in _marker_pattern(markers).finditer(text):
        path = match.group("path").strip()
        if path:
            paths.append(path)
    return paths
