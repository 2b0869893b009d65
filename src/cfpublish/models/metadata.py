"""Upload request payload models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ChangelogType(str, Enum):
    """Formats the API accepts for changelogs."""

    TEXT = "text"
    HTML = "html"
    MARKDOWN = "markdown"


class ReleaseType(str, Enum):
    """Release channels a file can be published to."""

    ALPHA = "alpha"
    BETA = "beta"
    RELEASE = "release"


class RelationType(str, Enum):
    """Kinds of relationship between a file and another project."""

    EMBEDDED_LIBRARY = "embeddedLibrary"
    INCOMPATIBLE = "incompatible"
    OPTIONAL_DEPENDENCY = "optionalDependency"
    REQUIRED_DEPENDENCY = "requiredDependency"
    TOOL = "tool"


class Relation(BaseModel):
    """A relation to another project, identified by its slug."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    slug: str = Field(description="Slug of the related project")
    type: RelationType = Field(description="Relation type")


class Relations(BaseModel):
    """Container matching the API's relations object."""

    projects: list[Relation] = Field(default_factory=list)


class UploadMetadata(BaseModel):
    """The metadata part of an upload request.

    Serialize with ``model_dump(by_alias=True, exclude_none=True)``. Files with
    a parent carry ``parentFileID`` and no ``gameVersions``.
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    changelog: str = ""
    changelog_type: ChangelogType = Field(default=ChangelogType.TEXT, alias="changelogType")
    display_name: str | None = Field(default=None, alias="displayName")
    release_type: ReleaseType = Field(default=ReleaseType.ALPHA, alias="releaseType")
    game_versions: list[int] | None = Field(default=None, alias="gameVersions")
    relations: Relations | None = None
    parent_file_id: int | None = Field(default=None, alias="parentFileID")

    def to_payload(self) -> dict:
        """Return the JSON-ready request body."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
