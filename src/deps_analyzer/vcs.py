"""Thin wrappers over the ``git`` executable."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from deps_analyzer.errors import VcsError

LOGGER = logging.getLogger(__name__)

GIT_EXECUTABLE = "git"
# Full commit messages can span lines, so records are split on NUL.
_RECORD_SEPARATOR = "\x00"
_FIELD_SEPARATOR = "\x1f"
_LOG_FORMAT = "--format=%H%x1f%an%x1f%B%x00"


@dataclass(frozen=True, slots=True)
class CommitInfo:
    """One commit as reported by ``git log``."""

    sha: str
    author: str
    message: str


def _run_git(args: list[str], cwd: Path | None = None) -> str:
    command = [GIT_EXECUTABLE, *args]
    try:
        result = subprocess.run(command, cwd=cwd, capture_output=True, text=True, check=True)
    except FileNotFoundError as exc:
        raise VcsError(f"git executable not found: {exc}") from exc
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or exc.stdout or "").strip() or f"exit code {exc.returncode}"
        raise VcsError(detail) from exc
    return result.stdout


def clone_repository(url: str, directory: Path, logger: logging.Logger | None = None) -> Path:
    """Clone ``url`` into ``directory`` and return the directory."""

    effective_logger = logger or LOGGER
    effective_logger.info("vcs.clone url=%s directory=%s", url, directory)
    _run_git(["clone", url, str(directory)])
    effective_logger.info("vcs.cloned directory=%s", directory)
    return directory


def list_branches(directory: Path) -> list[str]:
    """Return the full ref names of all local branches, e.g. ``refs/heads/main``."""

    output = _run_git(["-C", str(directory), "for-each-ref", "--format=%(refname)", "refs/heads"])
    return [line for line in output.splitlines() if line.strip()]


def list_commits(directory: Path, branch: str, limit: int | None = None) -> list[CommitInfo]:
    """Return commits reachable from ``branch``, newest first."""

    args = [
        "-C",
        str(directory),
        "log",
        _LOG_FORMAT,
    ]
    if limit is not None:
        args.append(f"--max-count={limit}")
    args.extend([branch, "--"])
    output = _run_git(args)

    commits: list[CommitInfo] = []
    for record in output.split(_RECORD_SEPARATOR):
        record = record.strip("\n")
        if not record:
            continue
        parts = record.split(_FIELD_SEPARATOR, 2)
        if len(parts) != 3:
            continue
        sha, author, message = parts
        commits.append(CommitInfo(sha=sha, author=author, message=message.strip()))
    return commits
