"""Configuration models and loading logic."""

from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_SETTINGS_FILE = Path("configs/settings.yaml")
SETTINGS_FILE_ENV = "DEPS_ANALYZER_SETTINGS_FILE"
MAVEN_HOME_ENV = "MAVEN_HOME"


class ProjectConfig(BaseModel):
    """Project metadata settings."""

    name: str = "deps_analyzer"
    env: str = "dev"


class PathsConfig(BaseModel):
    """Filesystem paths used by the CLI."""

    logs_root: Path = Path("./logs")

    def resolved(self, project_root: Path) -> "PathsConfig":
        """Return a copy with project-relative paths resolved to absolute paths."""

        updates: dict[str, Path] = {}
        for field_name in type(self).model_fields:
            value = getattr(self, field_name)
            updates[field_name] = value if value.is_absolute() else (project_root / value).resolve()
        return self.model_copy(update=updates)


class MavenConfig(BaseModel):
    """External Maven installation and goal names."""

    home: Path | None = None
    dependency_tree_goal: str = "dependency:tree"
    license_goal: str = "license:add-third-party"
    extra_args: list[str] = Field(default_factory=lambda: ["--batch-mode"])


class DescriptorConfig(BaseModel):
    """Build descriptor lookup settings."""

    file_name: str = Field(default="pom.xml", min_length=1)
    build_dir_prefix: str = "build"


class LicensesConfig(BaseModel):
    """License report scraping and materialization settings."""

    markers: list[str] = Field(
        default_factory=lambda: ["Writing third-party file to"],
        min_length=1,
    )
    build_output_dirs: list[str] = Field(default_factory=lambda: ["target"], min_length=1)


class AppSettings(BaseSettings):
    """Top-level application settings."""

    _yaml_file_override: ClassVar[Path | None] = None

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    maven: MavenConfig = Field(default_factory=MavenConfig)
    descriptor: DescriptorConfig = Field(default_factory=DescriptorConfig)
    licenses: LicensesConfig = Field(default_factory=LicensesConfig)

    model_config = SettingsConfigDict(
        env_prefix="DEPS_ANALYZER_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Use YAML defaults while allowing env vars to override values."""

        yaml_file = resolve_settings_file(cls._yaml_file_override)
        yaml_settings = YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )

    def as_dict(self) -> dict[str, object]:
        """Return settings as a standard nested dictionary."""

        return self.model_dump(mode="json")


def find_project_root(start: Path | None = None) -> Path:
    """Locate the project root by traversing upward for config markers."""

    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / "configs/settings.yaml").exists():
            return candidate
    return current


def resolve_settings_file(override: Path | None = None) -> Path:
    """Resolve settings file from explicit override, env var, or default."""

    chosen = override
    if chosen is None:
        env_value = os.getenv(SETTINGS_FILE_ENV)
        if env_value:
            chosen = Path(env_value)
    if chosen is None:
        chosen = DEFAULT_SETTINGS_FILE

    if not chosen.is_absolute():
        chosen = (find_project_root() / chosen).resolve()
    return chosen


def load_settings(config_file: Path | None = None) -> AppSettings:
    """Load settings with YAML defaults and environment variable overrides.

    When no Maven home is configured, the conventional ``MAVEN_HOME`` variable is
    consulted here so that nothing below the CLI has to read the environment.
    """

    settings_file = resolve_settings_file(config_file)
    project_root = settings_file.parent.parent.resolve()
    AppSettings._yaml_file_override = settings_file
    try:
        settings = AppSettings()
    finally:
        AppSettings._yaml_file_override = None
    resolved_paths = settings.paths.resolved(project_root=project_root)
    updates: dict[str, object] = {"paths": resolved_paths}

    if settings.maven.home is None:
        maven_home_env = os.getenv(MAVEN_HOME_ENV)
        if maven_home_env:
            updates["maven"] = settings.maven.model_copy(update={"home": Path(maven_home_env)})
    return settings.model_copy(update=updates)
