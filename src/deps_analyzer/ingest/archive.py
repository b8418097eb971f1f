"""Extract zip archives holding a build-project tree."""

from __future__ import annotations

import logging
import shutil
import zipfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from deps_analyzer.errors import ArchiveError

LOGGER = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """One member of an archive, in archive order."""

    name: str
    is_dir: bool


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Summary of one archive extraction."""

    archive_path: Path
    destination_dir: Path
    directories_created: int
    files_written: int


def archive_base_name(archive_path: str | Path) -> str:
    """Return the archive file name without its final extension.

    Both pipelines name their outputs from this value, so ``target/repo.zip``
    always maps to ``repo``.
    """

    name = PurePosixPath(str(archive_path).replace("\\", "/")).name
    stem, dot, _ = name.rpartition(".")
    return stem if dot and stem else name


def _entry_target(destination_dir: Path, entry_name: str) -> Path:
    """Resolve an entry name under the destination, rejecting escapes."""

    relative = PurePosixPath(entry_name.replace("\\", "/"))
    if relative.is_absolute() or ".." in relative.parts:
        raise ArchiveError(f"Archive entry escapes destination directory: {entry_name}")
    return destination_dir.joinpath(*relative.parts)


def extract_archive(
    archive_path: Path,
    destination_dir: Path,
    logger: logging.Logger | None = None,
) -> ExtractionResult:
    """Write every archive entry under ``destination_dir``, overwriting existing files."""

    effective_logger = logger or LOGGER
    directories_created = 0
    files_written = 0

    try:
        archive = zipfile.ZipFile(archive_path)
    except (OSError, zipfile.BadZipFile) as exc:
        raise ArchiveError(f"Cannot open archive {archive_path}: {exc}") from exc

    with archive:
        for info in archive.infolist():
            entry = ArchiveEntry(name=info.filename, is_dir=info.is_dir())
            target = _entry_target(destination_dir, entry.name)
            try:
                if entry.is_dir:
                    target.mkdir(parents=True, exist_ok=True)
                    directories_created += 1
                    continue
                target.parent.mkdir(parents=True, exist_ok=True)
                with archive.open(info) as source, target.open("wb") as sink:
                    shutil.copyfileobj(source, sink, COPY_CHUNK_SIZE)
                files_written += 1
            except (OSError, zipfile.BadZipFile) as exc:
                raise ArchiveError(f"Cannot extract entry {entry.name} from {archive_path}: {exc}") from exc

    effective_logger.info(
        "archive.extracted archive=%s destination=%s dirs=%s files=%s",
        archive_path,
        destination_dir,
        directories_created,
        files_written,
    )
    return ExtractionResult(
        archive_path=archive_path,
        destination_dir=destination_dir,
        directories_created=directories_created,
        files_written=files_written,
    )
