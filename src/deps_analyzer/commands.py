"""Status-string commands: every failure becomes a message for the operator."""

from __future__ import annotations

import logging
from pathlib import Path

from deps_analyzer import vcs
from deps_analyzer.config import AppSettings
from deps_analyzer.errors import DepsAnalyzerError
from deps_analyzer.maven.invoker import LineHandler
from deps_analyzer.pipeline import (
    run_dependency_tree,
    run_dependency_tree_from_zip,
    run_license_report_from_zip,
)

LOGGER = logging.getLogger(__name__)

# Filesystem errors from the output side (mkdir, copy target) surface as OSError.
COMMAND_ERRORS: tuple[type[Exception], ...] = (DepsAnalyzerError, OSError)


def clone(url: str, directory: Path, logger: logging.Logger | None = None) -> str:
    effective_logger = logger or LOGGER
    try:
        vcs.clone_repository(url, directory, logger=effective_logger)
    except COMMAND_ERRORS as exc:
        effective_logger.error("command.clone_failed url=%s error=%s", url, exc, exc_info=True)
        return f"Error cloning the repository: {exc}"
    return f"Repository successfully cloned to: {directory}"


def list_branches(directory: Path, logger: logging.Logger | None = None) -> str:
    effective_logger = logger or LOGGER
    effective_logger.info("command.list_branches directory=%s", directory)
    try:
        branches = vcs.list_branches(directory)
    except COMMAND_ERRORS as exc:
        effective_logger.error("command.list_branches_failed directory=%s error=%s", directory, exc, exc_info=True)
        return f"Error listing branches: {exc}"
    return "".join(f"{branch}\n" for branch in branches)


def list_commits(
    directory: Path,
    branch: str,
    limit: int | None = None,
    logger: logging.Logger | None = None,
) -> str:
    effective_logger = logger or LOGGER
    effective_logger.info("command.list_commits branch=%s directory=%s", branch, directory)
    try:
        commits = vcs.list_commits(directory, branch, limit=limit)
    except COMMAND_ERRORS as exc:
        effective_logger.error("command.list_commits_failed branch=%s error=%s", branch, exc, exc_info=True)
        return f"Error listing commits: {exc}"
    return "".join(f"{commit.message}\n" for commit in commits)


def list_dependencies_from_directory(
    settings: AppSettings,
    directory: Path,
    on_line: LineHandler | None = None,
    logger: logging.Logger | None = None,
) -> str:
    """Run the dependency-tree goal for a project already on disk.

    The tree itself is only delivered through ``on_line``; nothing is written to disk.
    """

    effective_logger = logger or LOGGER
    effective_logger.info("command.list_dependencies_dir directory=%s", directory)
    try:
        result = run_dependency_tree(settings, directory, on_line=on_line, logger=effective_logger)
    except COMMAND_ERRORS as exc:
        effective_logger.error("command.list_dependencies_dir_failed error=%s", exc, exc_info=True)
        return f"Error retrieving Maven dependencies: {exc}"
    if result.descriptor is None:
        return f"No {settings.descriptor.file_name} found under: {directory}"
    return "Maven dependencies successfully listed."


def list_dependencies_from_zip(
    settings: AppSettings,
    archive_path: Path,
    extract_dir: Path,
    on_line: LineHandler | None = None,
    logger: logging.Logger | None = None,
) -> str:
    """Extract a zipped project and run the dependency-tree goal on it."""

    effective_logger = logger or LOGGER
    effective_logger.info("command.list_dependencies_zip archive=%s directory=%s", archive_path, extract_dir)
    try:
        result = run_dependency_tree_from_zip(
            settings, archive_path, extract_dir, on_line=on_line, logger=effective_logger
        )
    except COMMAND_ERRORS as exc:
        effective_logger.error("command.list_dependencies_zip_failed error=%s", exc, exc_info=True)
        return f"Error processing the ZIP file: {exc}"
    if result.descriptor is None:
        return f"No {settings.descriptor.file_name} found under: {result.project_dir}"
    return f"Maven dependencies successfully listed. Output saved to: {result.dump_path}"


def list_licenses_from_zip(
    settings: AppSettings,
    archive_path: Path,
    extract_dir: Path,
    logger: logging.Logger | None = None,
) -> str:
    """Extract a zipped project, run the license goal and collect its reports."""

    effective_logger = logger or LOGGER
    effective_logger.info("command.list_licenses_zip archive=%s directory=%s", archive_path, extract_dir)
    try:
        result = run_license_report_from_zip(settings, archive_path, extract_dir, logger=effective_logger)
    except COMMAND_ERRORS as exc:
        effective_logger.error("command.list_licenses_zip_failed error=%s", exc, exc_info=True)
        return f"Error retrieving Maven dependency licenses: {exc}"
    if result.descriptor is None:
        return f"No {settings.descriptor.file_name} found under: {result.project_dir}"

    report = result.report
    if report is None or report.total == 0:
        return f"Licenses listed but no third-party files were reported. Maven output saved to: {result.dump_path}"
    if report.failures:
        return f"Licenses listed with errors: {report.summary()}. Output directory: {extract_dir}"
    return f"Licenses successfully listed and saved {report.written_count} files to: {extract_dir}"
