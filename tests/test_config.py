"""Tests for cfpublish configuration."""

import tomllib
from pathlib import Path

import pytest
from fakes import FakeCurseForge

from cfpublish.config import (
    PublishConfig,
    build_publisher,
    load_config,
    write_config_template,
)
from cfpublish.constants import DEFAULT_ENDPOINT
from cfpublish.core import JavaVersionTypeProvider, SlugVersionTypeProvider
from cfpublish.errors import ConfigurationError
from cfpublish.models import ChangelogType, ReleaseType

CONFIG = """
dry_run = true

[api]
endpoint = "https://cf.test"
token = "from-config"

[versions]
providers = ["java"]
extra_type_slugs = ["bukkit-1-20"]

[detection]
properties_file = "props/gradle.properties"
java_version = "17"

[[artifacts]]
project_id = "123"
file = "a.jar"
changelog_file = "CHANGELOG.md"
changelog_type = "markdown"
release_type = "beta"
versions = ["Java 17"]
relations = [{ slug = "fabric-api", type = "requiredDependency" }]

[[artifacts.additional_files]]
file = "a1.jar"
display_name = "Sources"
"""


def write_config(tmp_path: Path, content: str = CONFIG) -> Path:
    path = tmp_path / "publish.toml"
    path.write_text(content)
    return path


@pytest.mark.unit
class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self) -> None:
        config = PublishConfig()
        assert config.api.endpoint == DEFAULT_ENDPOINT
        assert config.api.token_env == "CURSEFORGE_TOKEN"
        assert config.versions.providers == ["minecraft", "environment", "java", "modloader"]
        assert config.versions.detect is True
        assert config.dry_run is False
        assert config.artifacts == []

    def test_loads_file(self, tmp_path: Path) -> None:
        config = load_config(write_config(tmp_path))
        assert config.dry_run is True
        assert config.api.endpoint == "https://cf.test"
        assert config.base_dir == tmp_path.resolve()
        assert config.detection.properties == {"java_version": "17"}

        artifact = config.artifacts[0]
        assert artifact.project_id == 123
        assert artifact.changelog_type == ChangelogType.MARKDOWN
        assert artifact.release_type == ReleaseType.BETA
        assert artifact.relations[0].slug == "fabric-api"
        assert artifact.additional_files[0].display_name == "Sources"
        assert artifact.additional_files[0].project_id is None

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Config file not found"):
            load_config(tmp_path / "publish.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            load_config(write_config(tmp_path, "[api\n"))

    @pytest.mark.parametrize(
        "content",
        [
            '[[artifacts]]\nfile = "a.jar"\n',
            '[[artifacts]]\nproject_id = "abc"\nfile = "a.jar"\n',
            '[[artifacts]]\nproject_id = 1\nfile = "a.jar"\nrelease_type = "stable"\n',
            '[[artifacts]]\nproject_id = 1\nfile = "a.jar"\nunknown = 1\n',
        ],
    )
    def test_invalid_artifacts(self, tmp_path: Path, content: str) -> None:
        with pytest.raises(ConfigurationError, match="Invalid config"):
            load_config(write_config(tmp_path, content))


@pytest.mark.unit
class TestResolveToken:
    """Token precedence: config, token file, environment."""

    def test_config_token_first(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CURSEFORGE_TOKEN", "from-env")
        config = PublishConfig.model_validate({"api": {"token": "from-config"}})
        assert config.resolve_token() == "from-config"

    def test_token_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CURSEFORGE_TOKEN", "from-env")
        (tmp_path / "token.txt").write_text("from-file\n")
        config = PublishConfig.model_validate({"api": {"token_file": "token.txt"}})
        config.base_dir = tmp_path
        assert config.resolve_token() == "from-file"

    def test_unreadable_token_file(self, tmp_path: Path) -> None:
        config = PublishConfig.model_validate({"api": {"token_file": "missing.txt"}})
        config.base_dir = tmp_path
        with pytest.raises(ConfigurationError, match="Could not read token file"):
            config.resolve_token()

    def test_custom_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_TOKEN", "from-env")
        config = PublishConfig.model_validate({"api": {"token_env": "MY_TOKEN"}})
        assert config.resolve_token() == "from-env"

    def test_no_token(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CURSEFORGE_TOKEN", raising=False)
        assert PublishConfig().resolve_token() is None


@pytest.mark.unit
class TestBuildPublisher:
    """Tests for build_publisher."""

    @pytest.fixture
    def config(self, tmp_path: Path) -> PublishConfig:
        (tmp_path / "CHANGELOG.md").write_text("- Fixed a crash\n")
        (tmp_path / "props").mkdir()
        (tmp_path / "props" / "gradle.properties").write_text("minecraft_version=1.20.1\n")
        return load_config(write_config(tmp_path))

    def test_artifacts(self, config: PublishConfig, tmp_path: Path) -> None:
        publisher = build_publisher(config)

        parent, child = publisher.iter_artifacts()
        assert parent.project_id == 123
        assert parent.file == tmp_path.resolve() / "a.jar"
        assert parent.changelog == "- Fixed a crash\n"
        assert parent.changelog_type == ChangelogType.MARKDOWN
        assert parent.game_versions == {"Java 17"}
        assert parent.relations[0].type == "requiredDependency"
        assert child.parent is parent
        assert child.project_id == 123
        assert child.display_name == "Sources"

    def test_settings(self, config: PublishConfig) -> None:
        publisher = build_publisher(config)
        assert publisher.endpoint == "https://cf.test"
        assert publisher.token == "from-config"
        assert publisher.dry_run is True
        assert publisher.providers == {
            JavaVersionTypeProvider(),
            SlugVersionTypeProvider(["bukkit-1-20"]),
        }
        assert publisher.detector.enabled is True
        assert publisher.detector.context.properties == {
            "minecraft_version": "1.20.1",
            "java_version": "17",
        }

    def test_overrides(self, config: PublishConfig) -> None:
        publisher = build_publisher(
            config, token="cli", endpoint="https://other.test", dry_run=False, detect=False
        )
        assert publisher.token == "cli"
        assert publisher.endpoint == "https://other.test"
        assert publisher.dry_run is False
        assert publisher.detector.enabled is False

    def test_runs_against_api(self, config: PublishConfig, tmp_path: Path) -> None:
        (tmp_path / "a.jar").write_bytes(b"jar")
        (tmp_path / "a1.jar").write_bytes(b"jar")
        api = FakeCurseForge()

        report = build_publisher(config, dry_run=False, transport=api.transport).run()

        assert report.succeeded
        assert api.uploaded_files == ["a.jar", "a1.jar"]
        assert api.uploads[0]["metadata"]["gameVersions"] == [200]
        assert api.uploads[1]["metadata"]["displayName"] == "Sources"


@pytest.mark.unit
class TestWriteConfigTemplate:
    def test_writes_loadable_template(self, tmp_path: Path) -> None:
        path = write_config_template(tmp_path)
        assert path == tmp_path / "publish.toml"

        data = tomllib.loads(path.read_text())
        assert data["api"]["token_env"] == "CURSEFORGE_TOKEN"
        config = load_config(path)
        assert config.artifacts[0].project_id == 123456
        assert config.artifacts[0].release_type == ReleaseType.BETA

    def test_writes_to_explicit_file(self, tmp_path: Path) -> None:
        path = write_config_template(tmp_path / "custom.toml")
        assert path.name == "custom.toml"
        assert path.exists()
