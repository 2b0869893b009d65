"""Publish orchestration.

A run goes through two steps. Initialization validates the configuration,
fetches the version catalog and applies detected versions. Publishing then
uploads every top-level artifact followed by its additional files, in
declaration order, stopping at the first failure. Nothing is retried and
nothing already uploaded is rolled back; the report records how far the run
got.
"""

import json
import logging
from collections.abc import Iterator
from enum import Enum
from pathlib import Path

import httpx

from ..constants import DEFAULT_ENDPOINT, HTTP_TIMEOUT
from ..errors import ConfigurationError, PublishError
from ..models import Artifact, PublishReport, PublishResult, PublishStatus
from ..services import CurseForgeClient
from .catalog import VersionCatalog
from .detector import VersionDetector
from .providers import VersionTypeProvider, default_providers

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    """Lifecycle of a publish run."""

    IDLE = "idle"
    INITIALIZING = "initializing"
    PUBLISHING = "publishing"
    DONE = "done"
    FAILED = "failed"


class Publisher:
    """Publishes any number of files to any number of projects.

    Args:
        endpoint: Game specific API base URL.
        token: API token with upload permission on every target project.
        dry_run: Log upload requests instead of sending them.
        detector: Version detector. Defaults to one with no properties.
        timeout: HTTP timeout in seconds.
        transport: Optional httpx transport (used by tests).
        name: Label used in log messages.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        token: str | None = None,
        dry_run: bool = False,
        detector: VersionDetector | None = None,
        timeout: float = HTTP_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
        name: str = "publish",
    ) -> None:
        self.endpoint = endpoint
        self.token = token
        self.dry_run = dry_run
        self.detector = detector or VersionDetector()
        self.timeout = timeout
        self.transport = transport
        self.name = name
        self.providers: set[VersionTypeProvider] = default_providers()
        self.artifacts: list[Artifact] = []
        self.catalog: VersionCatalog | None = None
        self.state = RunState.IDLE

    def upload(self, project_id: int | str, file: Path | str | None) -> Artifact:
        """Declare a top-level artifact.

        Returns:
            The artifact, for further configuration (changelog, versions,
            relations, additional files).
        """
        artifact = Artifact(project_id=project_id, file=file)
        self.artifacts.append(artifact)
        return artifact

    def disable_version_detection(self) -> None:
        self.detector.enabled = False

    def add_version_type_provider(self, *providers: VersionTypeProvider) -> None:
        self.providers.update(providers)

    def set_version_type_providers(self, *providers: VersionTypeProvider) -> None:
        """Replace every provider, including the defaults."""
        self.providers.clear()
        self.add_version_type_provider(*providers)

    def iter_artifacts(self) -> Iterator[Artifact]:
        """Artifacts in publish order: each parent, then its additional files."""
        for artifact in self.artifacts:
            yield artifact
            yield from artifact.additional_files

    def run(self) -> PublishReport:
        """Initialize, then publish every artifact.

        Returns:
            Report of every artifact. A publishing failure is recorded in the
            report (see ``PublishReport.raise_for_failure``).

        Raises:
            PublishError: If initialization fails. Nothing has been uploaded.
        """
        if self.state != RunState.IDLE:
            raise ConfigurationError(f"Publish run already {self.state.value}")

        report = PublishReport(dry_run=self.dry_run)
        if not self.artifacts:
            logger.warning("No upload artifacts were specified.")
            self.state = RunState.DONE
            return report

        try:
            self._validate()
            with CurseForgeClient(
                self.endpoint, self.token, timeout=self.timeout, transport=self.transport
            ) as client:
                self._initialize(client)
                self._publish(client, report)
        except PublishError:
            self.state = RunState.FAILED
            raise

        self.state = RunState.DONE if report.succeeded else RunState.FAILED
        return report

    def _validate(self) -> None:
        """Checks done before any network call."""
        self.state = RunState.INITIALIZING
        logger.debug(f"[{self.name}] Initializing upload task.")

        if not self.token:
            logger.error("No API token was provided. The file could not be published!")
            raise ConfigurationError("Can not publish to CurseForge. No API token provided!")

        for artifact in self.iter_artifacts():
            if not artifact.file.is_file():
                raise ConfigurationError(f"File to upload does not exist: {artifact.file}")

    def _initialize(self, client: CurseForgeClient) -> None:
        logger.debug(f"[{self.name}] Task configured to connect to {self.endpoint}")

        self.catalog = VersionCatalog(self.providers, name=self.name)
        self.catalog.refresh(client)

        if self.detector.enabled:
            detected = self.detector.detect_versions(self.catalog)
            # Detected versions apply to top-level artifacts only.
            for artifact in self.artifacts:
                artifact.add_game_version(*detected)

    def _publish(self, client: CurseForgeClient, report: PublishReport) -> None:
        self.state = RunState.PUBLISHING
        queue = list(self.iter_artifacts())

        while queue:
            artifact = queue.pop(0)
            result, error = self._publish_one(artifact, client)
            report.results.append(result)
            if error is not None:
                report.error = error
                break

        # A failure blocks the failed artifact's children and everything after it.
        for artifact in queue:
            report.results.append(_result(artifact, PublishStatus.SKIPPED))

    def _publish_one(
        self, artifact: Artifact, client: CurseForgeClient
    ) -> tuple[PublishResult, PublishError | None]:
        """Prepare one artifact, then upload it (or log it in dry run mode)."""
        try:
            metadata = artifact.prepare_for_upload(self.catalog).to_payload()
            if self.dry_run:
                if artifact.parent is not None and artifact.parent.file_id is None:
                    # Nothing was uploaded, so the parent has no id yet
                    metadata["parentFileID"] = f"<file id of {artifact.parent.label}>"
                logger.info(
                    f"[DRY RUN] Would upload {artifact.file} to project {artifact.project_id} "
                    f"at {self.endpoint}\n{json.dumps(metadata, indent=2)}"
                )
                return _result(artifact, PublishStatus.LOGGED), None

            logger.info(f"Uploading {artifact.file.name} to project {artifact.project_id}")
            artifact.file_id = client.upload_file(artifact.project_id, metadata, artifact.file)
        except PublishError as e:
            logger.error(f"Failed to publish {artifact.label}: {e}")
            return _result(artifact, PublishStatus.FAILED, error=str(e)), e

        logger.info(f"Uploaded {artifact.label} as file {artifact.file_id}")
        return _result(artifact, PublishStatus.UPLOADED), None


def _result(artifact: Artifact, status: PublishStatus, error: str | None = None) -> PublishResult:
    return PublishResult(
        artifact=artifact.label,
        project_id=artifact.project_id,
        status=status,
        file_id=artifact.file_id,
        parent=artifact.parent.label if artifact.parent is not None else None,
        error=error,
    )
