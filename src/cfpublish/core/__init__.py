"""Core publishing logic for cfpublish.

- providers: version type classification
- catalog: game version catalog and label resolution
- detector: automatic version detection from build properties
- publisher: publish run orchestration
"""

from .catalog import VersionCatalog
from .detector import DetectionContext, VersionDetector, read_properties
from .providers import (
    PROVIDERS,
    EnvironmentVersionTypeProvider,
    JavaVersionTypeProvider,
    MinecraftVersionTypeProvider,
    ModloaderVersionTypeProvider,
    SlugVersionTypeProvider,
    VersionTypeProvider,
    default_providers,
    providers_from_names,
)
from .publisher import Publisher, RunState

__all__ = [
    "PROVIDERS",
    "DetectionContext",
    "EnvironmentVersionTypeProvider",
    "JavaVersionTypeProvider",
    "MinecraftVersionTypeProvider",
    "ModloaderVersionTypeProvider",
    "Publisher",
    "RunState",
    "SlugVersionTypeProvider",
    "VersionCatalog",
    "VersionDetector",
    "VersionTypeProvider",
    "default_providers",
    "providers_from_names",
    "read_properties",
]
