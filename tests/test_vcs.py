from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from deps_analyzer import commands
from deps_analyzer.errors import VcsError
from deps_analyzer.vcs import clone_repository, list_branches, list_commits

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")

GIT_IDENTITY = [
    "-c",
    "user.name=Test User",
    "-c",
    "user.email=test@example.com",
    "-c",
    "commit.gpgsign=false",
]


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *GIT_IDENTITY, "-C", str(repo), *args], check=True, capture_output=True)


@pytest.fixture
def source_repo(tmp_path: Path) -> Path:
    repo = tmp_path / "source"
    repo.mkdir()
    _git(repo, "init")
    _git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    (repo / "pom.xml").write_text("<project/>")
    _git(repo, "add", "pom.xml")
    _git(repo, "commit", "-m", "Add pom\n\nInitial Maven descriptor.")
    (repo / "README.md").write_text("readme")
    _git(repo, "add", "README.md")
    _git(repo, "commit", "-m", "Add readme")
    _git(repo, "branch", "feature")
    return repo


def test_list_branches_returns_full_ref_names(source_repo: Path) -> None:
    assert list_branches(source_repo) == ["refs/heads/feature", "refs/heads/main"]


def test_list_commits_newest_first_with_full_messages(source_repo: Path) -> None:
    commits = list_commits(source_repo, "main")

    assert [commit.message for commit in commits] == ["Add readme", "Add pom\n\nInitial Maven descriptor."]
    assert all(commit.author == "Test User" for commit in commits)
    assert all(len(commit.sha) == 40 for commit in commits)


def test_list_commits_limit(source_repo: Path) -> None:
    assert [commit.message for commit in list_commits(source_repo, "main", limit=1)] == ["Add readme"]


def test_list_commits_unknown_branch(source_repo: Path) -> None:
    with pytest.raises(VcsError):
        list_commits(source_repo, "does-not-exist")


def test_clone_local_repository(tmp_path: Path, source_repo: Path) -> None:
    target = tmp_path / "clone"

    clone_repository(str(source_repo), target)

    assert (target / "pom.xml").read_text() == "<project/>"


def test_clone_command_status_messages(tmp_path: Path, source_repo: Path) -> None:
    target = tmp_path / "clone"

    assert commands.clone(str(source_repo), target) == f"Repository successfully cloned to: {target}"
    assert commands.clone(str(tmp_path / "missing"), tmp_path / "other").startswith("Error cloning the repository:")


def test_commit_and_branch_commands(source_repo: Path) -> None:
    assert commands.list_branches(source_repo) == "refs/heads/feature\nrefs/heads/main\n"
    assert commands.list_commits(source_repo, "main", limit=1) == "Add readme\n"
