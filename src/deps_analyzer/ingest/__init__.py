"""Ingestion package for archive extraction and descriptor lookup."""

from deps_analyzer.ingest.archive import ArchiveEntry, ExtractionResult, archive_base_name, extract_archive
from deps_analyzer.ingest.descriptor import (
    DEFAULT_BUILD_PREFIX,
    DEFAULT_DESCRIPTOR_NAME,
    find_descriptor,
    locate_project_descriptor,
)

__all__ = [
    "ArchiveEntry",
    "ExtractionResult",
    "archive_base_name",
    "extract_archive",
    "DEFAULT_BUILD_PREFIX",
    "DEFAULT_DESCRIPTOR_NAME",
    "find_descriptor",
    "locate_project_descriptor",
]
