"""Exception taxonomy for pipeline stages.

A missing descriptor and an empty scrape are ordinary results (``None`` and ``[]``)
and have no exception type here.
"""

from __future__ import annotations

from pathlib import Path


class DepsAnalyzerError(Exception):
    """Base class for all stage-level failures."""


class ArchiveError(DepsAnalyzerError):
    """Archive could not be opened/read, or an entry could not be written."""


class ToolNotConfiguredError(DepsAnalyzerError):
    """The external build tool installation could not be resolved."""


class InvocationError(DepsAnalyzerError):
    """The external build tool process could not be started."""


class ToolExecutionFailure(DepsAnalyzerError):
    """The build tool ran but exited non-zero; captured output is kept."""

    def __init__(self, goal: str, exit_code: int, output: str, dump_path: Path | None = None) -> None:
        self.goal = goal
        self.exit_code = exit_code
        self.output = output
        self.dump_path = dump_path
        message = f"goal {goal} failed with exit code {exit_code}"
        if dump_path is not None:
            message += f" (output saved to {dump_path})"
        super().__init__(message)


class MaterializationError(DepsAnalyzerError):
    """A single artifact could not be copied into the output directory."""

    def __init__(self, source: Path, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class VcsError(DepsAnalyzerError):
    """A git operation failed."""
