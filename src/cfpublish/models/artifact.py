"""Artifacts declared for publishing.

An artifact is mutable while the publish run is being configured. Each
artifact exclusively owns its additional files, which are created through
``with_additional_file`` so a file can never have two parents.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import ConfigurationError
from .metadata import (
    ChangelogType,
    Relation,
    Relations,
    RelationType,
    ReleaseType,
    UploadMetadata,
)

if TYPE_CHECKING:
    from ..core.catalog import VersionCatalog

logger = logging.getLogger(__name__)


def parse_project_id(value: object) -> int:
    """Parse a project id from an int or a numeric string.

    Raises:
        ConfigurationError: If the value is not a whole number.
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"Could not parse project id from bool value {value}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ConfigurationError(f"Could not parse project id from '{value}'") from None
    raise ConfigurationError(
        f"Could not parse project id from {type(value).__name__} of value {value!r}"
    )


@dataclass(eq=False)
class Artifact:
    """A file to publish and the metadata sent with it.

    Attributes:
        project_id: Project the file is published to.
        file: Local path of the file.
        changelog: Changelog text.
        changelog_type: Format of the changelog.
        display_name: Name shown on the site. Defaults to the file name.
        release_type: Release channel.
        game_versions: Declared version labels (names or slugs).
        relations: Relations to other projects.
        additional_files: Child files published after this one.
        parent: Owning artifact for additional files.
        resolved_version_ids: Version ids, populated by ``prepare_for_upload``.
        file_id: Id assigned by the API once uploaded.
    """

    project_id: int
    file: Path
    changelog: str | None = None
    changelog_type: ChangelogType = ChangelogType.TEXT
    display_name: str | None = None
    release_type: ReleaseType = ReleaseType.ALPHA
    game_versions: set[str] = field(default_factory=set)
    relations: list[Relation] = field(default_factory=list)
    additional_files: list[Artifact] = field(default_factory=list)
    parent: Artifact | None = None
    resolved_version_ids: set[int] = field(default_factory=set)
    file_id: int | None = None

    def __post_init__(self) -> None:
        self.project_id = parse_project_id(self.project_id)
        if self.file is None:
            raise ConfigurationError("An artifact requires a file to upload")
        self.file = Path(self.file)

    @property
    def label(self) -> str:
        """Short description used in logs and reports."""
        return self.display_name or self.file.name

    @property
    def is_child(self) -> bool:
        return self.parent is not None

    def add_game_version(self, *labels: str) -> Artifact:
        """Add version labels. Duplicates are ignored."""
        self.game_versions.update(labels)
        return self

    def with_changelog(self, changelog: str | None) -> Artifact:
        self.changelog = changelog
        return self

    def with_changelog_file(self, path: Path | str) -> Artifact:
        """Read the changelog from a UTF-8 text file."""
        path = Path(path)
        try:
            self.changelog = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Could not read changelog file {path}: {e}") from e
        return self

    def with_changelog_type(self, changelog_type: ChangelogType | str) -> Artifact:
        self.changelog_type = _parse_enum(ChangelogType, changelog_type, "changelog type")
        return self

    def with_display_name(self, display_name: str | None) -> Artifact:
        self.display_name = display_name
        return self

    def with_release_type(self, release_type: ReleaseType | str) -> Artifact:
        self.release_type = _parse_enum(ReleaseType, release_type, "release type")
        return self

    def add_relation(self, slug: str, relation_type: RelationType | str) -> Artifact:
        """Declare a relation to another project by slug."""
        relation = Relation(
            slug=slug, type=_parse_enum(RelationType, relation_type, "relation type")
        )
        if relation not in self.relations:
            self.relations.append(relation)
        return self

    def add_requirement(self, *slugs: str) -> Artifact:
        for slug in slugs:
            self.add_relation(slug, RelationType.REQUIRED_DEPENDENCY)
        return self

    def add_optional(self, *slugs: str) -> Artifact:
        for slug in slugs:
            self.add_relation(slug, RelationType.OPTIONAL_DEPENDENCY)
        return self

    def add_embedded(self, *slugs: str) -> Artifact:
        for slug in slugs:
            self.add_relation(slug, RelationType.EMBEDDED_LIBRARY)
        return self

    def add_incompatibility(self, *slugs: str) -> Artifact:
        for slug in slugs:
            self.add_relation(slug, RelationType.INCOMPATIBLE)
        return self

    def add_tool(self, *slugs: str) -> Artifact:
        for slug in slugs:
            self.add_relation(slug, RelationType.TOOL)
        return self

    def with_additional_file(
        self, file: Path | str | None, project_id: int | str | None = None
    ) -> Artifact:
        """Create a child file published after this artifact.

        Args:
            file: Path of the child file.
            project_id: Project for the child. Defaults to this artifact's project.

        Returns:
            The new child artifact, for further configuration.

        Raises:
            ConfigurationError: If this artifact is itself a child.
        """
        if self.is_child:
            raise ConfigurationError(
                f"Additional file {self.label} can not have additional files of its own"
            )
        child = Artifact(
            project_id=self.project_id if project_id is None else project_id,
            file=file,
            parent=self,
        )
        self.additional_files.append(child)
        return child

    def prepare_for_upload(self, catalog: VersionCatalog) -> UploadMetadata:
        """Resolve version labels and build the upload metadata.

        Raises:
            VersionResolutionError: If any declared label is unknown.
        """
        self.resolved_version_ids = catalog.resolve_all(self.game_versions)

        metadata = UploadMetadata(
            changelog=self.changelog or "",
            changelog_type=self.changelog_type,
            display_name=self.display_name or self.file.name,
            release_type=self.release_type,
            relations=Relations(projects=list(self.relations)) if self.relations else None,
        )

        if self.parent is not None:
            # The API takes versions from the parent file.
            metadata.parent_file_id = self.parent.file_id
            if self.resolved_version_ids:
                logger.debug(
                    f"Not sending game versions for additional file {self.label}; "
                    "they are inherited from the parent file"
                )
        else:
            metadata.game_versions = sorted(self.resolved_version_ids)
            if not self.resolved_version_ids:
                logger.warning(f"No game versions were specified for {self.label}")

        return metadata


def _parse_enum(enum_cls: type, value: object, what: str):
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        raise ConfigurationError(f"Invalid {what} '{value}'. Expected one of: {valid}") from None
