"""Dependency-tree and license-report pipelines over zipped Maven projects."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from deps_analyzer.config import AppSettings
from deps_analyzer.ingest.archive import archive_base_name, extract_archive
from deps_analyzer.ingest.descriptor import locate_project_descriptor
from deps_analyzer.licenses.materialize import MaterializationReport, materialize_artifacts
from deps_analyzer.maven.invoker import InvocationResult, LineHandler, MavenInvoker
from deps_analyzer.maven.scrape import extract_artifact_paths
from deps_analyzer.utils.paths import write_text_atomically

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DependencyRunResult:
    """Outcome of a ``dependency:tree`` run; ``descriptor`` is ``None`` when absent."""

    project_dir: Path
    descriptor: Path | None
    invocation: InvocationResult | None = None
    dump_path: Path | None = None


@dataclass(frozen=True, slots=True)
class LicenseRunResult:
    """Outcome of a ``license:add-third-party`` run."""

    base_name: str
    project_dir: Path
    descriptor: Path | None
    invocation: InvocationResult | None = None
    dump_path: Path | None = None
    artifacts: tuple[str, ...] = ()
    report: MaterializationReport | None = None


def build_invoker(settings: AppSettings, logger: logging.Logger | None = None) -> MavenInvoker:
    """Create an invoker from the ``maven`` settings section."""

    return MavenInvoker(settings.maven.home, extra_args=settings.maven.extra_args, logger=logger)


def dependency_dump_path(output_dir: Path, base_name: str) -> Path:
    return output_dir / f"{base_name}.txt"


def license_dump_path(output_dir: Path, base_name: str) -> Path:
    return output_dir / f"{base_name}-maven.txt"


def _project_dir_for(extract_dir: Path, base_name: str) -> Path:
    """Zips usually wrap the project in a folder named like the archive itself."""

    nested = extract_dir / base_name
    return nested if nested.is_dir() else extract_dir


def _extract_project(
    archive_path: Path,
    extract_dir: Path,
    logger: logging.Logger,
) -> tuple[str, Path]:
    extract_archive(archive_path, extract_dir, logger=logger)
    base_name = archive_base_name(archive_path)
    return base_name, _project_dir_for(extract_dir, base_name)


def run_dependency_tree(
    settings: AppSettings,
    project_dir: Path,
    *,
    dump_path: Path | None = None,
    on_line: LineHandler | None = None,
    logger: logging.Logger | None = None,
) -> DependencyRunResult:
    """Locate the descriptor under ``project_dir`` and run the dependency-tree goal.

    ``on_line`` receives each tree line as Maven prints it.

    Raises :class:`~deps_analyzer.errors.ToolExecutionFailure` on a non-zero exit,
    after the captured output has been written to ``dump_path``.
    """

    effective_logger = logger or LOGGER
    descriptor = locate_project_descriptor(
        project_dir,
        settings.descriptor.file_name,
        settings.descriptor.build_dir_prefix,
        logger=effective_logger,
    )
    if descriptor is None:
        return DependencyRunResult(project_dir=project_dir, descriptor=None)

    invocation = build_invoker(settings, effective_logger).invoke(
        descriptor, settings.maven.dependency_tree_goal, on_line=on_line
    )
    if dump_path is not None:
        write_text_atomically(dump_path, invocation.output)
        effective_logger.info("pipeline.dependency_dump path=%s", dump_path)
    invocation.raise_for_status(dump_path)
    return DependencyRunResult(
        project_dir=project_dir,
        descriptor=descriptor,
        invocation=invocation,
        dump_path=dump_path,
    )


def run_dependency_tree_from_zip(
    settings: AppSettings,
    archive_path: Path,
    extract_dir: Path,
    *,
    on_line: LineHandler | None = None,
    logger: logging.Logger | None = None,
) -> DependencyRunResult:
    """Extract ``archive_path`` into ``extract_dir`` and list its dependency tree."""

    effective_logger = logger or LOGGER
    base_name, project_dir = _extract_project(archive_path, extract_dir, effective_logger)
    return run_dependency_tree(
        settings,
        project_dir,
        dump_path=dependency_dump_path(extract_dir, base_name),
        on_line=on_line,
        logger=effective_logger,
    )


def run_license_report_from_zip(
    settings: AppSettings,
    archive_path: Path,
    extract_dir: Path,
    *,
    logger: logging.Logger | None = None,
) -> LicenseRunResult:
    """Extract, run the license goal, then copy every reported THIRD-PARTY file.

    Outputs land in ``extract_dir``: the raw Maven log as ``{base}-maven.txt`` and
    one ``{base}-licenses-{module}.txt`` per reported file.
    """

    effective_logger = logger or LOGGER
    base_name, project_dir = _extract_project(archive_path, extract_dir, effective_logger)
    descriptor = locate_project_descriptor(
        project_dir,
        settings.descriptor.file_name,
        settings.descriptor.build_dir_prefix,
        logger=effective_logger,
    )
    if descriptor is None:
        return LicenseRunResult(base_name=base_name, project_dir=project_dir, descriptor=None)

    invocation = build_invoker(settings, effective_logger).invoke(descriptor, settings.maven.license_goal)
    dump_path = write_text_atomically(license_dump_path(extract_dir, base_name), invocation.output)
    effective_logger.info("pipeline.license_dump path=%s", dump_path)
    invocation.raise_for_status(dump_path)

    artifacts = extract_artifact_paths(invocation.output, settings.licenses.markers)
    effective_logger.info("pipeline.artifacts_found count=%s", len(artifacts))
    report = materialize_artifacts(
        artifacts,
        base_name,
        extract_dir,
        build_output_dirs=settings.licenses.build_output_dirs,
        base_dir=descriptor.parent,
        logger=effective_logger,
    )
    return LicenseRunResult(
        base_name=base_name,
        project_dir=project_dir,
        descriptor=descriptor,
        invocation=invocation,
        dump_path=dump_path,
        artifacts=tuple(artifacts),
        report=report,
    )
