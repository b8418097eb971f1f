"""Copy scraped license reports into a stable output layout."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Sequence

from deps_analyzer.errors import MaterializationError

LOGGER = logging.getLogger(__name__)

DEFAULT_BUILD_OUTPUT_DIRS: tuple[str, ...] = ("target",)


@dataclass(frozen=True, slots=True)
class MaterializedFile:
    """Outcome of copying one artifact; ``error`` is set when the copy failed."""

    index: int
    source: Path
    destination: Path
    error: MaterializationError | None = None

    @property
    def written(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class MaterializationReport:
    """Per-artifact outcomes for one license run."""

    output_dir: Path
    files: tuple[MaterializedFile, ...]

    @property
    def total(self) -> int:
        return len(self.files)

    @property
    def written_count(self) -> int:
        return sum(1 for item in self.files if item.written)

    @property
    def failures(self) -> tuple[MaterializedFile, ...]:
        return tuple(item for item in self.files if not item.written)

    def summary(self) -> str:
        text = f"copied {self.written_count} of {self.total} files"
        if self.failures:
            text += "; failed: " + ", ".join(str(item.source) for item in self.failures)
        return text


def module_segment(
    artifact_path: str | PurePath,
    build_output_dirs: Sequence[str] = DEFAULT_BUILD_OUTPUT_DIRS,
) -> str | None:
    """Return the directory name just above the nearest build-output directory.

    ``.../module-1.0.0/target/generated-sources/license/THIRD-PARTY.txt`` gives
    ``module-1.0.0``. Returns ``None`` when no such component exists.
    """

    path = PurePath(artifact_path)
    parts = path.parts[:-1]
    output_dirs = set(build_output_dirs)
    for position in range(len(parts) - 1, 0, -1):
        if parts[position] in output_dirs:
            candidate = parts[position - 1]
            return None if candidate == path.anchor else candidate
    return None


def license_file_name(archive_base_name: str, segment: str) -> str:
    return f"{archive_base_name}-licenses-{segment}.txt"


def _copy_artifact(source: Path, destination: Path) -> None:
    if not source.is_file():
        raise MaterializationError(source, "source artifact does not exist")
    try:
        shutil.copyfile(source, destination)
    except OSError as exc:
        raise MaterializationError(source, str(exc)) from exc


def materialize_artifacts(
    artifacts: Sequence[str],
    archive_base_name: str,
    output_dir: Path,
    build_output_dirs: Sequence[str] = DEFAULT_BUILD_OUTPUT_DIRS,
    base_dir: Path | None = None,
    logger: logging.Logger | None = None,
) -> MaterializationReport:
    """Copy each artifact to ``{base}-licenses-{module}.txt`` under ``output_dir``.

    Relative artifact paths are taken against ``base_dir`` (the directory Maven ran
    in) rather than the process working directory. A failed copy is recorded and
    the remaining artifacts are still attempted.
    """

    effective_logger = logger or LOGGER
    output_dir.mkdir(parents=True, exist_ok=True)

    used_names: set[str] = set()
    outcomes: list[MaterializedFile] = []
    for index, artifact in enumerate(artifacts, start=1):
        source = Path(artifact)
        if base_dir is not None and not source.is_absolute():
            source = base_dir / source
        segment = module_segment(artifact, build_output_dirs) or str(index)
        name = license_file_name(archive_base_name, segment)
        suffix = index
        while name in used_names:
            name = license_file_name(archive_base_name, f"{segment}-{suffix}")
            suffix += 1
        used_names.add(name)
        destination = output_dir / name

        try:
            _copy_artifact(source, destination)
        except MaterializationError as exc:
            effective_logger.warning("materialize.copy_failed source=%s reason=%s", source, exc.reason)
            outcomes.append(MaterializedFile(index=index, source=source, destination=destination, error=exc))
            continue
        effective_logger.info("materialize.copied source=%s destination=%s", source, destination)
        outcomes.append(MaterializedFile(index=index, source=source, destination=destination))

    return MaterializationReport(output_dir=output_dir, files=tuple(outcomes))
