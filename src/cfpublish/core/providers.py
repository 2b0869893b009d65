"""Version type providers.

A provider decides which remote version type categories are valid for the
kind of project being published. Categories are recognized by slug or name,
never by id, because ids differ between games and API deployments. The
catalog accepts a version if any configured provider accepts its type.

Providers are frozen dataclasses, so equal providers collapse in a set.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

from ..errors import ConfigurationError
from ..models import VersionType


class VersionTypeProvider(ABC):
    """Classifies fetched version types."""

    @abstractmethod
    def accepts(self, version_type: VersionType) -> bool:
        """Return True if files may be tagged with versions of this type."""

    def classify(self, types: Iterable[VersionType]) -> set[int]:
        """Return the ids of every accepted version type."""
        return {t.id for t in types if self.accepts(t)}


@dataclass(frozen=True)
class MinecraftVersionTypeProvider(VersionTypeProvider):
    """Accepts Minecraft release families (slugs like ``minecraft-1-20``)."""

    def accepts(self, version_type: VersionType) -> bool:
        return version_type.slug.startswith("minecraft") or version_type.name.startswith(
            "Minecraft"
        )


@dataclass(frozen=True)
class EnvironmentVersionTypeProvider(VersionTypeProvider):
    """Accepts client/server environment tags."""

    def accepts(self, version_type: VersionType) -> bool:
        return version_type.slug == "environment"


@dataclass(frozen=True)
class JavaVersionTypeProvider(VersionTypeProvider):
    """Accepts Java language version tags."""

    def accepts(self, version_type: VersionType) -> bool:
        return version_type.slug == "java"


@dataclass(frozen=True)
class ModloaderVersionTypeProvider(VersionTypeProvider):
    """Accepts mod loader tags (Forge, Fabric, NeoForge, Quilt)."""

    def accepts(self, version_type: VersionType) -> bool:
        return version_type.slug == "modloader"


@dataclass(frozen=True)
class SlugVersionTypeProvider(VersionTypeProvider):
    """Accepts an explicit list of version type slugs."""

    slugs: frozenset[str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "slugs", frozenset(self.slugs))

    def accepts(self, version_type: VersionType) -> bool:
        return version_type.slug in self.slugs


PROVIDERS: dict[str, type[VersionTypeProvider]] = {
    "minecraft": MinecraftVersionTypeProvider,
    "environment": EnvironmentVersionTypeProvider,
    "java": JavaVersionTypeProvider,
    "modloader": ModloaderVersionTypeProvider,
}


def default_providers() -> set[VersionTypeProvider]:
    """Providers used for mods: every built-in category."""
    return {cls() for cls in PROVIDERS.values()}


def providers_from_names(
    names: Iterable[str], extra_slugs: Iterable[str] = ()
) -> set[VersionTypeProvider]:
    """Build a provider set from config names.

    Raises:
        ConfigurationError: If a name is not a known provider.
    """
    providers: set[VersionTypeProvider] = set()
    for name in names:
        cls = PROVIDERS.get(name.lower())
        if cls is None:
            valid = ", ".join(PROVIDERS)
            raise ConfigurationError(f"Unknown version type provider '{name}'. Valid: {valid}")
        providers.add(cls())
    extra = frozenset(extra_slugs)
    if extra:
        providers.add(SlugVersionTypeProvider(extra))
    return providers


def accepted_type_ids(
    providers: Iterable[VersionTypeProvider], types: Iterable[VersionType]
) -> set[int]:
    """Union of the type ids accepted by any provider."""
    types = list(types)
    accepted: set[int] = set()
    for provider in providers:
        accepted |= provider.classify(types)
    return accepted
