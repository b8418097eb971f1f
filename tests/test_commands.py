from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pytest

from deps_analyzer import commands
from deps_analyzer.config import AppSettings

posix_only = pytest.mark.skipif(os.name == "nt", reason="fake mvn launcher is a POSIX shell script")

SettingsFactory = Callable[[Path | None], AppSettings]


@posix_only
def test_list_licenses_reports_saved_files(
    tmp_path: Path,
    project_zip: Path,
    license_maven_home: Path,
    make_settings: SettingsFactory,
) -> None:
    out = tmp_path / "out"

    status = commands.list_licenses_from_zip(make_settings(license_maven_home), project_zip, out)

    assert status == f"Licenses successfully listed and saved 2 files to: {out}"


@posix_only
def test_list_licenses_reports_partial_failure(
    tmp_path: Path,
    project_zip: Path,
    make_maven_home: Callable[[str], Path],
    make_settings: SettingsFactory,
) -> None:
    missing = tmp_path / "gone" / "target" / "THIRD-PARTY.txt"
    home = make_maven_home(
        'dir="$PWD/core/target/generated-sources/license"\n'
        'mkdir -p "$dir"\n'
        'echo core > "$dir/THIRD-PARTY.txt"\n'
        'echo "[INFO] Writing third-party file to $dir/THIRD-PARTY.txt"\n'
        f'echo "[INFO] Writing third-party file to {missing}"\n'
    )
    out = tmp_path / "out"

    status = commands.list_licenses_from_zip(make_settings(home), project_zip, out)

    assert status == f"Licenses listed with errors: copied 1 of 2 files; failed: {missing}. Output directory: {out}"
    assert (out / "myproject-licenses-core.txt").exists()


@posix_only
def test_list_licenses_without_reported_files(
    tmp_path: Path,
    project_zip: Path,
    make_maven_home: Callable[[str], Path],
    make_settings: SettingsFactory,
) -> None:
    home = make_maven_home('echo "[INFO] BUILD SUCCESS"\n')
    out = tmp_path / "out"

    status = commands.list_licenses_from_zip(make_settings(home), project_zip, out)

    assert status.startswith("Licenses listed but no third-party files were reported")
    assert str(out / "myproject-maven.txt") in status


def test_list_licenses_without_maven_home_returns_error_message(
    tmp_path: Path,
    project_zip: Path,
    make_settings: SettingsFactory,
) -> None:
    status = commands.list_licenses_from_zip(make_settings(None), project_zip, tmp_path / "out")

    assert status.startswith("Error retrieving Maven dependency licenses: Maven home is not configured")


def test_list_licenses_with_corrupt_zip_returns_error_message(
    tmp_path: Path,
    make_settings: SettingsFactory,
) -> None:
    broken = tmp_path / "broken.zip"
    broken.write_bytes(b"nope")

    status = commands.list_licenses_from_zip(make_settings(None), broken, tmp_path / "out")

    assert status.startswith("Error retrieving Maven dependency licenses: Cannot open archive")


@posix_only
def test_list_dependencies_from_zip(
    tmp_path: Path,
    project_zip: Path,
    make_maven_home: Callable[[str], Path],
    make_settings: SettingsFactory,
) -> None:
    home = make_maven_home('echo "[INFO] tree"\n')
    out = tmp_path / "out"

    status = commands.list_dependencies_from_zip(make_settings(home), project_zip, out)

    assert status == f"Maven dependencies successfully listed. Output saved to: {out / 'myproject.txt'}"


@posix_only
def test_list_dependencies_failure_mentions_exit_code(
    tmp_path: Path,
    project_zip: Path,
    make_maven_home: Callable[[str], Path],
    make_settings: SettingsFactory,
) -> None:
    home = make_maven_home("exit 2\n")

    status = commands.list_dependencies_from_zip(make_settings(home), project_zip, tmp_path / "out")

    assert status.startswith("Error processing the ZIP file: goal dependency:tree failed with exit code 2")


def test_list_dependencies_from_directory_without_pom(tmp_path: Path, make_settings: SettingsFactory) -> None:
    project = tmp_path / "empty-project"
    project.mkdir()

    status = commands.list_dependencies_from_directory(make_settings(None), project)

    assert status == f"No pom.xml found under: {project}"


@posix_only
def test_list_dependencies_from_directory(
    tmp_path: Path,
    make_maven_home: Callable[[str], Path],
    make_settings: SettingsFactory,
) -> None:
    home = make_maven_home('echo "[INFO] tree"\n')
    project = tmp_path / "project"
    project.mkdir()
    (project / "pom.xml").write_text("<project/>")

    status = commands.list_dependencies_from_directory(make_settings(home), project)

    assert status == "Maven dependencies successfully listed."


@posix_only
def test_list_dependencies_from_directory_streams_tree_lines(
    tmp_path: Path,
    make_maven_home: Callable[[str], Path],
    make_settings: SettingsFactory,
) -> None:
    home = make_maven_home('echo "[INFO] com.example:app:jar:1.0"\necho "[INFO] +- junit:junit:jar:4.13:test"\n')
    project = tmp_path / "project"
    project.mkdir()
    (project / "pom.xml").write_text("<project/>")
    received: list[str] = []

    status = commands.list_dependencies_from_directory(make_settings(home), project, on_line=received.append)

    assert status == "Maven dependencies successfully listed."
    assert received == ["[INFO] com.example:app:jar:1.0", "[INFO] +- junit:junit:jar:4.13:test"]


def test_list_branches_on_missing_repository(tmp_path: Path) -> None:
    status = commands.list_branches(tmp_path / "not-a-repo")

    assert status.startswith("Error listing branches:")
