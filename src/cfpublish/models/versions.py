"""Game version models returned by the CurseForge API.

Both models are immutable and rebuilt from the API on every run.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class VersionType(BaseModel):
    """A category of game versions (e.g. Minecraft 1.20, Java, Modloader).

    Attributes:
        id: Remote identifier. Not stable across games or deployments.
        name: Human-readable name.
        slug: URL-safe name used to recognize the category.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Remote version type id")
    name: str = Field(description="Version type name")
    slug: str = Field(default="", description="Version type slug")


class Version(BaseModel):
    """A single game version that files can be tagged with.

    Attributes:
        id: Remote identifier sent in upload requests.
        name: Human-readable name (e.g. "1.20.1", "Fabric", "Java 17").
        slug: URL-safe name (e.g. "1-20-1", "fabric", "java-17").
        game_version_type_id: Id of the VersionType this version belongs to.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(description="Remote version id")
    name: str = Field(description="Version name")
    slug: str = Field(default="", description="Version slug")
    game_version_type_id: int = Field(
        validation_alias=AliasChoices(
            "gameVersionTypeID", "gameVersionTypeId", "game_version_type_id"
        ),
        serialization_alias="gameVersionTypeID",
        description="Owning version type id",
    )
