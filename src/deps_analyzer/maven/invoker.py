"""Run Maven goals as an external process and capture their output."""

from __future__ import annotations

import logging
import os
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from deps_analyzer.errors import InvocationError, ToolExecutionFailure, ToolNotConfiguredError

LOGGER = logging.getLogger(__name__)

LineHandler = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class InvocationResult:
    """Exit status plus every stdout line the tool emitted, newline-terminated."""

    goal: str
    descriptor: Path
    exit_code: int
    output: str
    duration_sec: float

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    def raise_for_status(self, dump_path: Path | None = None) -> None:
        """Raise :class:`ToolExecutionFailure` for a non-zero exit."""

        if not self.succeeded:
            raise ToolExecutionFailure(self.goal, self.exit_code, self.output, dump_path=dump_path)


def launcher_name() -> str:
    """Return the platform-specific Maven launcher script name."""

    return "mvn.cmd" if os.name == "nt" else "mvn"


def resolve_maven_executable(maven_home: Path | None) -> Path:
    """Return ``<maven_home>/bin/mvn`` or raise when the installation is unusable."""

    if maven_home is None:
        raise ToolNotConfiguredError(
            "Maven home is not configured; set MAVEN_HOME or DEPS_ANALYZER_MAVEN__HOME."
        )
    executable = maven_home / "bin" / launcher_name()
    if not executable.is_file():
        raise ToolNotConfiguredError(f"Maven launcher not found at {executable}")
    return executable


class MavenInvoker:
    """Invoke goals against a ``pom.xml`` using one Maven installation."""

    def __init__(
        self,
        maven_home: Path | None,
        extra_args: Sequence[str] = ("--batch-mode",),
        logger: logging.Logger | None = None,
    ) -> None:
        self.maven_home = maven_home
        self.extra_args = tuple(extra_args)
        self.logger = logger or LOGGER

    def build_command(self, descriptor: Path, goal: str) -> list[str]:
        executable = resolve_maven_executable(self.maven_home)
        return [str(executable), *self.extra_args, "-f", str(descriptor), goal]

    def invoke(
        self,
        descriptor: Path,
        goal: str,
        working_dir: Path | None = None,
        on_line: LineHandler | None = None,
    ) -> InvocationResult:
        """Run ``goal`` and block until Maven exits.

        Stdout is read line by line while the process runs so a chatty build never
        stalls on a full pipe. Stderr is left attached to the terminal.
        """

        command = self.build_command(descriptor, goal)
        cwd = working_dir or descriptor.parent
        self.logger.info("maven.invoke goal=%s descriptor=%s cwd=%s", goal, descriptor, cwd)

        started_mono = time.monotonic()
        lines: list[str] = []
        try:
            process = subprocess.Popen(
                command,
                cwd=cwd,
                stdout=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as exc:
            raise InvocationError(f"Cannot start Maven ({command[0]}): {exc}") from exc

        with process:
            if process.stdout is None:
                raise InvocationError(f"Maven stdout was not captured ({command[0]})")
            for raw_line in process.stdout:
                line = raw_line.rstrip("\r\n")
                lines.append(line)
                self.logger.debug("maven.out %s", line)
                if on_line is not None:
                    on_line(line)
            exit_code = process.wait()

        duration_sec = round(time.monotonic() - started_mono, 3)
        self.logger.info(
            "maven.finished goal=%s exit_code=%s lines=%s duration_sec=%s",
            goal,
            exit_code,
            len(lines),
            duration_sec,
        )
        return InvocationResult(
            goal=goal,
            descriptor=descriptor,
            exit_code=exit_code,
            output="".join(f"{line}\n" for line in lines),
            duration_sec=duration_sec,
        )
