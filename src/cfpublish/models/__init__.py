"""Pydantic and dataclass models for cfpublish.

This package defines the data structures shared by the publisher:
- Game version catalog entries (VersionType, Version)
- Declared artifacts and their upload metadata (Artifact, UploadMetadata)
- Per-run publish results (PublishResult, PublishReport)

Example:
    >>> from cfpublish.models import Artifact
    >>> artifact = Artifact(project_id=123456, file="build/libs/mod.jar")
    >>> artifact.add_game_version("1.20.1", "Fabric").with_release_type("beta")
"""

from .artifact import Artifact, parse_project_id
from .metadata import (
    ChangelogType,
    Relation,
    Relations,
    RelationType,
    ReleaseType,
    UploadMetadata,
)
from .report import PublishReport, PublishResult, PublishStatus
from .versions import Version, VersionType

__all__ = [
    "Artifact",
    "ChangelogType",
    "PublishReport",
    "PublishResult",
    "PublishStatus",
    "Relation",
    "RelationType",
    "Relations",
    "ReleaseType",
    "UploadMetadata",
    "Version",
    "VersionType",
    "parse_project_id",
]
