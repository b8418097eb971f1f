"""License report materialization."""

from deps_analyzer.licenses.materialize import (
    DEFAULT_BUILD_OUTPUT_DIRS,
    MaterializationReport,
    MaterializedFile,
    license_file_name,
    materialize_artifacts,
    module_segment,
)

__all__ = [
    "DEFAULT_BUILD_OUTPUT_DIRS",
    "MaterializationReport",
    "MaterializedFile",
    "license_file_name",
    "materialize_artifacts",
    "module_segment",
]
