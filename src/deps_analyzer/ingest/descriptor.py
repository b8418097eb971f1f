"""Locate the build descriptor inside an extracted project tree."""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER = logging.getLogger(__name__)

DEFAULT_DESCRIPTOR_NAME = "pom.xml"
DEFAULT_BUILD_PREFIX = "build"


def _sorted_subdirectories(directory: Path) -> list[Path]:
    """Return child directories in name order, skipping symlinks and unreadable dirs."""

    try:
        children = sorted(directory.iterdir(), key=lambda child: child.name)
    except OSError:
        return []
    return [child for child in children if child.is_dir() and not child.is_symlink()]


def _find_in_build_dirs(directory: Path, descriptor_name: str, build_prefix: str) -> Path | None:
    """Check ``build*`` children of ``directory`` for a descriptor placed directly inside."""

    prefix = build_prefix.lower()
    for child in _sorted_subdirectories(directory):
        if not child.name.lower().startswith(prefix):
            continue
        candidate = child / descriptor_name
        if candidate.is_file():
            return candidate
    return None


def _depth_first_search(root_dir: Path, descriptor_name: str, build_prefix: str) -> Path | None:
    """Search the whole tree, finishing every subdirectory before a level's own file.

    Each directory gets the ``build*`` check on entry, so the preference holds at
    every depth and not only under the root.
    """

    # (directory, children_done)
    stack: list[tuple[Path, bool]] = [(root_dir, False)]
    while stack:
        directory, children_done = stack.pop()
        if children_done:
            candidate = directory / descriptor_name
            if candidate.is_file():
                return candidate
            continue
        found = _find_in_build_dirs(directory, descriptor_name, build_prefix)
        if found is not None:
            return found
        stack.append((directory, True))
        for child in reversed(_sorted_subdirectories(directory)):
            stack.append((child, False))
    return None


def find_descriptor(
    root_dir: Path,
    descriptor_name: str = DEFAULT_DESCRIPTOR_NAME,
    build_prefix: str = DEFAULT_BUILD_PREFIX,
    logger: logging.Logger | None = None,
) -> Path | None:
    """Return the first descriptor under ``root_dir``, or ``None`` when there is none.

    In every directory visited, children whose name starts with ``build`` (any case)
    are checked for a descriptor placed directly inside before the search descends
    further. Names are visited in sorted order so the answer does not depend on how
    the filesystem lists entries.
    """

    effective_logger = logger or LOGGER
    if not root_dir.is_dir():
        effective_logger.warning("descriptor.root_missing root=%s", root_dir)
        return None

    found = _depth_first_search(root_dir, descriptor_name, build_prefix)
    if found is None:
        effective_logger.info("descriptor.not_found root=%s name=%s", root_dir, descriptor_name)
    else:
        effective_logger.info("descriptor.found path=%s", found)
    return found


def locate_project_descriptor(
    project_dir: Path,
    descriptor_name: str = DEFAULT_DESCRIPTOR_NAME,
    build_prefix: str = DEFAULT_BUILD_PREFIX,
    logger: logging.Logger | None = None,
) -> Path | None:
    """Prefer ``project_dir/<descriptor>`` and fall back to :func:`find_descriptor`."""

    direct = project_dir / descriptor_name
    if direct.is_file():
        return direct
    return find_descriptor(project_dir, descriptor_name, build_prefix, logger=logger)
