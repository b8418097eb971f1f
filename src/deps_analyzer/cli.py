"""Typer CLI entrypoint for deps_analyzer."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
import yaml

from deps_analyzer import commands
from deps_analyzer.config import AppSettings, load_settings
from deps_analyzer.logging_utils import configure_logging

app = typer.Typer(
    add_completion=False,
    help="Inspect git repositories and Maven projects (dependencies and licenses).",
    no_args_is_help=True,
)

CONFIG_FILE_OPTION = typer.Option(
    None,
    "--config-file",
    help="Optional settings YAML path.",
    exists=False,
    file_okay=True,
    dir_okay=False,
    readable=True,
)


def _load_and_optionally_configure_logger(
    config_file: Path | None,
    configure: bool,
) -> tuple[AppSettings, logging.Logger]:
    settings = load_settings(config_file=config_file)
    if configure:
        logger = configure_logging(settings.paths.logs_root / "deps_analyzer.log")
    else:
        logger = logging.getLogger("deps_analyzer")
    return settings, logger


@app.command("show-config")
def show_config(config_file: Path | None = CONFIG_FILE_OPTION) -> None:
    """Print the effective configuration after env overrides."""

    settings, _ = _load_and_optionally_configure_logger(config_file, configure=False)
    rendered = yaml.safe_dump(settings.as_dict(), sort_keys=False)
    typer.echo(rendered)


@app.command("clone")
def clone_cmd(
    url: str = typer.Option(..., "--url", help="Repository URL to clone."),
    directory: Path = typer.Option(..., "--directory", help="Target directory for the clone."),
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """Clone a git repository."""

    _, logger = _load_and_optionally_configure_logger(config_file, configure=True)
    typer.echo(commands.clone(url, directory, logger=logger))


@app.command("list-branches")
def list_branches_cmd(
    directory: Path = typer.Option(..., "--directory", help="Local repository directory."),
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """List all branches of a local repository."""

    _, logger = _load_and_optionally_configure_logger(config_file, configure=True)
    typer.echo(commands.list_branches(directory, logger=logger), nl=False)


@app.command("list-commits")
def list_commits_cmd(
    directory: Path = typer.Option(..., "--directory", help="Local repository directory."),
    branch: str = typer.Option(..., "--branch", help="Branch or revision to walk."),
    limit: int | None = typer.Option(None, "--limit", min=1, help="Show at most N commits."),
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """List the latest commit messages of a branch."""

    _, logger = _load_and_optionally_configure_logger(config_file, configure=True)
    typer.echo(commands.list_commits(directory, branch, limit=limit, logger=logger), nl=False)


@app.command("list-dependencies-dir")
def list_dependencies_dir_cmd(
    directory: Path = typer.Option(..., "--directory", help="Project directory holding a pom.xml."),
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """List Maven dependencies of a project in a directory."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True)
    typer.echo(commands.list_dependencies_from_directory(settings, directory, on_line=typer.echo, logger=logger))


@app.command("list-dependencies-zip")
def list_dependencies_zip_cmd(
    zipfile: Path = typer.Option(..., "--zipfile", help="Zip archive containing the project."),
    directory: Path = typer.Option(..., "--directory", help="Extraction and output directory."),
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """List Maven dependencies from a zipped project."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True)
    typer.echo(commands.list_dependencies_from_zip(settings, zipfile, directory, on_line=typer.echo, logger=logger))


@app.command("list-licenses-zip")
def list_licenses_zip_cmd(
    zipfile: Path = typer.Option(..., "--zipfile", help="Zip archive containing the project."),
    directory: Path = typer.Option(..., "--directory", help="Extraction and output directory."),
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """List licenses of Maven dependencies from a zipped project."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True)
    typer.echo(commands.list_licenses_from_zip(settings, zipfile, directory, logger=logger))


def main() -> None:
    """CLI script entrypoint."""

    app()


if __name__ == "__main__":
    main()
