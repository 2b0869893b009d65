"""Tests for version type providers."""

import pytest

from cfpublish.core import (
    EnvironmentVersionTypeProvider,
    JavaVersionTypeProvider,
    MinecraftVersionTypeProvider,
    ModloaderVersionTypeProvider,
    SlugVersionTypeProvider,
    default_providers,
    providers_from_names,
)
from cfpublish.core.providers import accepted_type_ids
from cfpublish.errors import ConfigurationError
from cfpublish.models import VersionType

TYPES = [
    VersionType(id=10, name="Minecraft 1.20", slug="minecraft-1-20"),
    VersionType(id=11, name="Minecraft 1.19", slug="minecraft-1-19"),
    VersionType(id=12, name="Java", slug="java"),
    VersionType(id=13, name="Modloader", slug="modloader"),
    VersionType(id=14, name="Environment", slug="environment"),
    VersionType(id=15, name="Bukkit 1.20", slug="bukkit-1-20"),
]


@pytest.mark.unit
class TestBuiltinProviders:
    """Each provider recognizes its category by slug or name."""

    def test_minecraft(self) -> None:
        assert MinecraftVersionTypeProvider().classify(TYPES) == {10, 11}

    def test_minecraft_by_name(self) -> None:
        types = [VersionType(id=1, name="Minecraft Beta")]
        assert MinecraftVersionTypeProvider().classify(types) == {1}

    def test_java(self) -> None:
        assert JavaVersionTypeProvider().classify(TYPES) == {12}

    def test_modloader(self) -> None:
        assert ModloaderVersionTypeProvider().classify(TYPES) == {13}

    def test_environment(self) -> None:
        assert EnvironmentVersionTypeProvider().classify(TYPES) == {14}

    def test_missing_category_is_empty(self) -> None:
        types = [VersionType(id=1, name="Release"), VersionType(id=2, name="Bukkit")]
        for provider in default_providers():
            assert provider.classify(types) == set()

    def test_classify_is_order_independent(self) -> None:
        provider = MinecraftVersionTypeProvider()
        assert provider.classify(reversed(TYPES)) == provider.classify(TYPES)

    def test_slug_provider(self) -> None:
        provider = SlugVersionTypeProvider(frozenset({"bukkit-1-20", "java"}))
        assert provider.classify(TYPES) == {12, 15}

    def test_slug_provider_accepts_any_iterable(self) -> None:
        provider = SlugVersionTypeProvider(["java"])
        assert provider.slugs == frozenset({"java"})


@pytest.mark.unit
class TestProviderSets:
    """Providers compose by union and collapse when equal."""

    def test_equal_providers_collapse(self) -> None:
        providers = {JavaVersionTypeProvider(), JavaVersionTypeProvider()}
        assert len(providers) == 1

    def test_slug_providers_compare_by_slugs(self) -> None:
        assert SlugVersionTypeProvider(["a", "b"]) == SlugVersionTypeProvider(["b", "a"])
        assert SlugVersionTypeProvider(["a"]) != SlugVersionTypeProvider(["b"])

    def test_default_providers(self) -> None:
        assert len(default_providers()) == 4
        assert accepted_type_ids(default_providers(), TYPES) == {10, 11, 12, 13, 14}

    def test_union(self) -> None:
        providers = [JavaVersionTypeProvider(), EnvironmentVersionTypeProvider()]
        assert accepted_type_ids(providers, iter(TYPES)) == {12, 14}

    def test_from_names(self) -> None:
        providers = providers_from_names(["java", "Modloader"])
        assert providers == {JavaVersionTypeProvider(), ModloaderVersionTypeProvider()}

    def test_from_names_with_extra_slugs(self) -> None:
        providers = providers_from_names([], ["bukkit-1-20"])
        assert accepted_type_ids(providers, TYPES) == {15}

    def test_from_names_rejects_unknown(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown version type provider 'bukkit'"):
            providers_from_names(["bukkit"])
