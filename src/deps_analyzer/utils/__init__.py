"""Shared utility helpers."""

from deps_analyzer.utils.paths import write_text_atomically

__all__ = [
    "write_text_atomically",
]
