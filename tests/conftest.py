from __future__ import annotations

import os
import stat
import zipfile
from pathlib import Path
from typing import Callable

import pytest

from deps_analyzer.config import AppSettings, MavenConfig

LICENSE_GOAL_SCRIPT = """
echo "[INFO] Scanning for projects..."
for module in module-a module-b; do
  dir="$PWD/$module/target/generated-sources/license"
  mkdir -p "$dir"
  echo "licenses of $module" > "$dir/THIRD-PARTY.txt"
  echo "[INFO] Writing third-party file to $dir/THIRD-PARTY.txt"
done
echo "[INFO] BUILD SUCCESS"
"""


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("DEPS_ANALYZER_") or name == "MAVEN_HOME":
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_maven_home(tmp_path: Path) -> Callable[[str], Path]:
    """Return a factory writing ``<home>/bin/mvn`` with the given shell body."""

    def _make(body: str) -> Path:
        home = tmp_path / "maven-home"
        launcher = home / "bin" / "mvn"
        launcher.parent.mkdir(parents=True, exist_ok=True)
        launcher.write_text("#!/bin/sh\n" + body.lstrip("\n"), encoding="utf-8")
        launcher.chmod(launcher.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return home

    return _make


@pytest.fixture
def license_maven_home(make_maven_home: Callable[[str], Path]) -> Path:
    """Maven home whose launcher fakes a two-module license:add-third-party run."""

    return make_maven_home(LICENSE_GOAL_SCRIPT)


@pytest.fixture
def make_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[[Path | None], AppSettings]:
    """Build settings pointing at a Maven home, isolated from any repo config file."""

    monkeypatch.chdir(tmp_path)

    def _make(maven_home: Path | None) -> AppSettings:
        return AppSettings(maven=MavenConfig(home=maven_home))

    return _make


@pytest.fixture
def project_zip(tmp_path: Path) -> Path:
    """Zip laid out like an exported project: ``myproject/pom.xml`` plus sources."""

    archive_path = tmp_path / "input" / "myproject.zip"
    archive_path.parent.mkdir(parents=True)
    with zipfile.ZipFile(archive_path, "w") as archive:
        archive.writestr("myproject/", "")
        archive.writestr("myproject/pom.xml", "<project/>")
        archive.writestr("myproject/src/main/java/App.java", "class App {}")
    return archive_path
