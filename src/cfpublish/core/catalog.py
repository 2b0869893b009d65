"""Game version catalog.

The catalog maps version names and slugs to the ids the upload API expects.
It is fetched fresh on every run because the remote catalog changes
independently of the publish configuration, and only contains versions whose
type is accepted by at least one configured provider.
"""

import logging
from collections.abc import Iterable
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from ..constants import VERSION_TYPES_PATH, VERSIONS_PATH
from ..errors import ParseError, VersionResolutionError
from ..models import Version, VersionType
from .providers import VersionTypeProvider, accepted_type_ids

logger = logging.getLogger(__name__)

_VERSION_TYPES = TypeAdapter(list[VersionType])
_VERSIONS = TypeAdapter(list[Version])


class CatalogSource(Protocol):
    """Anything that can GET an API path with the caller's token."""

    def get_text(self, path: str) -> str: ...


class VersionCatalog:
    """Valid game versions for one publish run.

    Args:
        providers: Providers deciding which version types are accepted.
        name: Label used in log messages (e.g. the config file name).
    """

    def __init__(self, providers: Iterable[VersionTypeProvider], name: str = "catalog") -> None:
        self.providers = frozenset(providers)
        self.name = name
        self.accepted_type_ids: set[int] = set()
        self.types: list[VersionType] = []
        self.warnings: list[str] = []
        self._by_name: dict[str, Version] = {}
        self._by_slug: dict[str, Version] = {}

    def __len__(self) -> int:
        return len({v.id for v in self._by_name.values()} | {v.id for v in self._by_slug.values()})

    def __contains__(self, label: object) -> bool:
        return isinstance(label, str) and self.lookup(label) is not None

    def refresh(self, source: CatalogSource) -> None:
        """Discard the current data and fetch it again from the API.

        Version types are fetched first, then versions. The new data replaces
        the old only after both fetches succeed; on failure the catalog keeps
        its previous state.

        Raises:
            AuthError: If the token is rejected.
            NetworkError: If the API cannot be reached.
            ParseError: If a response is not the expected JSON.
        """
        logger.debug(f"[{self.name}] Fetching game version types from {VERSION_TYPES_PATH}")
        types = _parse(_VERSION_TYPES, source.get_text(VERSION_TYPES_PATH))
        accepted = accepted_type_ids(self.providers, types)
        logger.debug(f"[{self.name}] Accepted version types: {sorted(accepted)}")

        logger.debug(f"[{self.name}] Fetching game versions from {VERSIONS_PATH}")
        versions = _parse(_VERSIONS, source.get_text(VERSIONS_PATH))

        by_name: dict[str, Version] = {}
        by_slug: dict[str, Version] = {}
        warnings: list[str] = []
        for version in versions:
            logger.debug(f"Received game version {version.name} with id {version.id}")
            if version.game_version_type_id not in accepted:
                continue
            _index(by_name, version.name, version, "name", warnings)
            if version.slug:
                _index(by_slug, version.slug, version, "slug", warnings)

        self.accepted_type_ids = accepted
        self.types = [t for t in types if t.id in accepted]
        self.warnings = warnings
        self._by_name = by_name
        self._by_slug = by_slug
        logger.debug(f"[{self.name}] Loaded {len(self)} valid game versions")

    def lookup(self, label: str) -> Version | None:
        """Find a version by name, then by slug. Matching is case sensitive."""
        found = self._by_name.get(label)
        if found is None:
            found = self._by_slug.get(label)
        return found

    def resolve_all(self, labels: Iterable[str]) -> set[int]:
        """Resolve version names or slugs into version ids.

        Labels are checked in sorted order and resolution stops at the first
        unknown label. Nothing is returned for a partially valid set.

        Raises:
            VersionResolutionError: Naming the first label that is not valid.
        """
        resolved: set[int] = set()
        for label in sorted(labels):
            version = self.lookup(label)
            if version is None:
                logger.error(f"Version {label} is not valid for this game!")
                raise VersionResolutionError(label)
            resolved.add(version.id)
        return resolved

    def versions(self) -> list[Version]:
        """Every distinct indexed version, sorted by id."""
        unique = {v.id: v for v in (*self._by_name.values(), *self._by_slug.values())}
        return [unique[i] for i in sorted(unique)]


def _parse(adapter: TypeAdapter, body: str) -> list:
    try:
        return adapter.validate_json(body)
    except ValidationError as e:
        logger.error(f"Unexpected response from CurseForge API! {body}")
        raise ParseError(
            f"Unexpected response from CurseForge API. Response '{body}'.", body=body
        ) from e


def _index(
    index: dict[str, Version], key: str, version: Version, kind: str, warnings: list[str]
) -> None:
    existing = index.get(key)
    if existing is not None:
        message = (
            f"Version {kind} {key} was already present. "
            f"Former ID {existing.id}. New ID {version.id}."
        )
        logger.warning(message)
        warnings.append(message)
    index[key] = version
