"""Configuration management for cfpublish."""

import os
import tomllib
from pathlib import Path
from typing import Any

import httpx
import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_ENDPOINT,
    DEFAULT_PROPERTIES_FILE,
    DEFAULT_TOKEN_ENV,
    HTTP_TIMEOUT,
)
from .core import (
    PROVIDERS,
    DetectionContext,
    Publisher,
    VersionDetector,
    providers_from_names,
)
from .errors import ConfigurationError
from .models import Artifact, ChangelogType, RelationType, ReleaseType, parse_project_id


class ApiConfig(BaseModel):
    """Connection settings for the CurseForge API."""

    endpoint: str = DEFAULT_ENDPOINT
    token: str | None = Field(default=None, description="API token (prefer token_env)")
    token_env: str = Field(default=DEFAULT_TOKEN_ENV, description="Env var holding the token")
    token_file: Path | None = Field(default=None, description="File holding the token")
    timeout: float = HTTP_TIMEOUT


class VersionsConfig(BaseModel):
    """Which version types are valid and whether to detect versions."""

    providers: list[str] = Field(default_factory=lambda: list(PROVIDERS))
    extra_type_slugs: list[str] = Field(default_factory=list)
    detect: bool = True


class DetectionConfig(BaseModel):
    """Properties used for version detection.

    Any key besides ``properties_file`` is treated as a build property and
    overrides the value read from the properties file.
    """

    model_config = ConfigDict(extra="allow")

    properties_file: Path = Path(DEFAULT_PROPERTIES_FILE)

    @property
    def properties(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class RelationConfig(BaseModel):
    slug: str
    type: RelationType


class FileConfig(BaseModel):
    """Settings shared by top-level artifacts and additional files."""

    model_config = ConfigDict(extra="forbid")

    project_id: int | None = None
    file: Path
    changelog: str | None = None
    changelog_file: Path | None = None
    changelog_type: ChangelogType = ChangelogType.TEXT
    display_name: str | None = None
    release_type: ReleaseType = ReleaseType.ALPHA
    versions: list[str] = Field(default_factory=list)
    relations: list[RelationConfig] = Field(default_factory=list)

    @field_validator("project_id", mode="before")
    @classmethod
    def _parse_project_id(cls, value: Any) -> int | None:
        if value is None:
            return None
        try:
            return parse_project_id(value)
        except ConfigurationError as e:
            raise ValueError(str(e)) from None


class ArtifactConfig(FileConfig):
    """A top-level artifact and its additional files."""

    project_id: int
    additional_files: list[FileConfig] = Field(default_factory=list)


class PublishConfig(BaseModel):
    """Root configuration for cfpublish."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    dry_run: bool = False
    versions: VersionsConfig = Field(default_factory=VersionsConfig)
    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    artifacts: list[ArtifactConfig] = Field(default_factory=list)

    # Directory relative paths are resolved against
    base_dir: Path = Field(default=Path("."), exclude=True)

    def resolve_path(self, path: Path) -> Path:
        return path if path.is_absolute() else self.base_dir / path

    def resolve_token(self) -> str | None:
        """Find the API token.

        Precedence: ``api.token``, then ``api.token_file``, then the
        ``api.token_env`` environment variable.
        """
        if self.api.token:
            return self.api.token
        if self.api.token_file is not None:
            path = self.resolve_path(self.api.token_file)
            try:
                return path.read_text(encoding="utf-8").strip() or None
            except OSError as e:
                raise ConfigurationError(f"Could not read token file {path}: {e}") from e
        return os.environ.get(self.api.token_env) or None


def load_config(path: Path) -> PublishConfig:
    """Load config from a publish.toml file.

    Args:
        path: Path to the config file

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If the file is missing, not valid TOML, or invalid
    """
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e
    try:
        config = PublishConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config {path}:\n{e}") from e
    config.base_dir = path.resolve().parent
    return config


def _apply_file_config(artifact: Artifact, cfg: FileConfig, config: PublishConfig) -> None:
    if cfg.changelog_file is not None:
        artifact.with_changelog_file(config.resolve_path(cfg.changelog_file))
    else:
        artifact.with_changelog(cfg.changelog)
    artifact.with_changelog_type(cfg.changelog_type)
    artifact.with_display_name(cfg.display_name)
    artifact.with_release_type(cfg.release_type)
    artifact.add_game_version(*cfg.versions)
    for relation in cfg.relations:
        artifact.add_relation(relation.slug, relation.type)


def build_publisher(
    config: PublishConfig,
    token: str | None = None,
    endpoint: str | None = None,
    dry_run: bool | None = None,
    detect: bool | None = None,
    transport: httpx.BaseTransport | None = None,
) -> Publisher:
    """Create a configured Publisher. Keyword arguments override the config."""
    detection = DetectionContext.load(
        config.resolve_path(config.detection.properties_file), config.detection.properties
    )
    publisher = Publisher(
        endpoint=endpoint or config.api.endpoint,
        token=token or config.resolve_token(),
        dry_run=config.dry_run if dry_run is None else dry_run,
        detector=VersionDetector(detection),
        timeout=config.api.timeout,
        transport=transport,
        name=config.base_dir.name or "publish",
    )
    publisher.set_version_type_providers(
        *providers_from_names(config.versions.providers, config.versions.extra_type_slugs)
    )
    if not (config.versions.detect if detect is None else detect):
        publisher.disable_version_detection()

    for artifact_cfg in config.artifacts:
        artifact = publisher.upload(artifact_cfg.project_id, config.resolve_path(artifact_cfg.file))
        _apply_file_config(artifact, artifact_cfg, config)
        for child_cfg in artifact_cfg.additional_files:
            child = artifact.with_additional_file(
                config.resolve_path(child_cfg.file), child_cfg.project_id
            )
            _apply_file_config(child, child_cfg, config)
    return publisher


def write_config_template(path: Path) -> Path:
    """Write a starter publish.toml.

    Args:
        path: Directory or file path to write

    Returns:
        Path to the written config file
    """
    config_path = path / DEFAULT_CONFIG_FILE if path.is_dir() else path
    template = {
        "dry_run": False,
        "api": {"endpoint": DEFAULT_ENDPOINT, "token_env": DEFAULT_TOKEN_ENV},
        "versions": {"providers": list(PROVIDERS), "extra_type_slugs": [], "detect": True},
        "detection": {"properties_file": DEFAULT_PROPERTIES_FILE},
        "artifacts": [
            {
                "project_id": 123456,
                "file": "build/libs/your-mod-1.0.0.jar",
                "changelog_file": "CHANGELOG.md",
                "changelog_type": "markdown",
                "release_type": "beta",
                "versions": ["1.20.1"],
                "relations": [{"slug": "fabric-api", "type": "requiredDependency"}],
            }
        ],
    }
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
