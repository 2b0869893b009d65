"""Per-run publish results.

The publisher records one result per artifact so a partially successful run
can always be reported: what went out, what failed, and what was never tried.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..errors import PublishError


class PublishStatus(str, Enum):
    """Outcome of a single artifact."""

    UPLOADED = "uploaded"
    LOGGED = "logged"  # dry run
    FAILED = "failed"
    SKIPPED = "skipped"


class PublishResult(BaseModel):
    """Outcome of publishing one artifact.

    Attributes:
        artifact: Display label of the artifact.
        project_id: Target project.
        status: What happened.
        file_id: Id assigned by the API (uploaded artifacts only).
        parent: Label of the parent artifact for additional files.
        error: Error message for failed artifacts.
    """

    artifact: str
    project_id: int
    status: PublishStatus
    file_id: int | None = None
    parent: str | None = None
    error: str | None = None


class PublishReport(BaseModel):
    """All results of a publish run, in publish order."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    dry_run: bool = False
    results: list[PublishResult] = Field(default_factory=list)
    error: PublishError | None = Field(default=None, exclude=True)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def uploaded_count(self) -> int:
        return sum(1 for r in self.results if r.status == PublishStatus.UPLOADED)

    def by_status(self, status: PublishStatus) -> list[PublishResult]:
        return [r for r in self.results if r.status == status]

    def raise_for_failure(self) -> None:
        """Re-raise the error that stopped the run, if any."""
        if self.error is not None:
            raise self.error
