"""Automatic game version detection.

Detection reads build properties (the ``[detection]`` config table merged
over a ``gradle.properties`` file) and suggests version labels such as the
Minecraft version, the Java version, the mod loader and the environment.
Detection is a convenience: a property that can't be understood produces no
label, and a label the catalog doesn't know is skipped with a warning.
"""

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .catalog import VersionCatalog

logger = logging.getLogger(__name__)

MINECRAFT_KEYS = ("minecraft_version", "mc_version", "minecraftVersion")
JAVA_KEYS = ("java_version", "javaVersion", "java.version")

# Property presence implying a loader
LOADER_KEYS = {
    "forge_version": "Forge",
    "neo_version": "NeoForge",
    "neoforge_version": "NeoForge",
    "fabric_loader_version": "Fabric",
    "loader_version": "Fabric",
    "quilt_loader_version": "Quilt",
}

LOADER_NAMES = {
    "forge": "Forge",
    "neoforge": "NeoForge",
    "fabric": "Fabric",
    "quilt": "Quilt",
}

ENVIRONMENTS = {
    "client": ("Client",),
    "server": ("Server",),
    "both": ("Client", "Server"),
}

_JAVA_VERSION = re.compile(r"^(?:1\.)?(\d+)(?:\.\d+)*$")
_PROPERTY = re.compile(r"^([^=:\s]+)\s*[=:]\s*(.*)$")


def read_properties(path: Path) -> dict[str, str]:
    """Read a Java-style ``key=value`` properties file.

    Blank lines and ``#``/``!`` comments are ignored; ``:`` is accepted as a
    separator. The file is decoded as ISO-8859-1 like Java properties files.
    Missing or unreadable files yield an empty dict.
    """
    if not path.is_file():
        return {}
    try:
        text = path.read_text(encoding="latin-1")
    except OSError as e:
        logger.warning(f"Could not read properties file {path}: {e}")
        return {}
    properties: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line[0] in "#!":
            continue
        match = _PROPERTY.match(line)
        if match is None:
            continue
        properties[match.group(1)] = match.group(2)
    return properties


@dataclass
class DetectionContext:
    """Build properties available for detection."""

    properties: dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(
        cls, properties_file: Path | None = None, overrides: Mapping[str, object] | None = None
    ) -> "DetectionContext":
        """Merge explicit overrides over a properties file."""
        properties = read_properties(properties_file) if properties_file else {}
        for key, value in (overrides or {}).items():
            properties[key] = str(value)
        return cls(properties=properties)

    def first(self, keys: tuple[str, ...]) -> str | None:
        for key in keys:
            value = self.properties.get(key, "").strip()
            if value:
                return value
        return None


def detect_minecraft(ctx: DetectionContext) -> list[str]:
    version = ctx.first(MINECRAFT_KEYS)
    return [version] if version else []


def detect_java(ctx: DetectionContext) -> list[str]:
    raw = ctx.first(JAVA_KEYS)
    if raw is None:
        return []
    match = _JAVA_VERSION.match(raw.removeprefix("VERSION_").replace("_", "."))
    if match is None:
        logger.debug(f"Could not parse Java version from '{raw}'")
        return []
    return [f"Java {int(match.group(1))}"]


def detect_loaders(ctx: DetectionContext) -> list[str]:
    """Use the explicit ``loader`` property, else infer from version properties."""
    loaders: list[str] = []
    declared = ctx.properties.get("loader", "")
    for name in filter(None, (part.strip().lower() for part in declared.split(","))):
        if name in LOADER_NAMES:
            loaders.append(LOADER_NAMES[name])
        else:
            logger.debug(f"Unknown mod loader '{name}'")
    if not declared.strip():
        for key, loader in LOADER_KEYS.items():
            if ctx.properties.get(key, "").strip():
                loaders.append(loader)
    return list(dict.fromkeys(loaders))


def detect_environment(ctx: DetectionContext) -> list[str]:
    value = ctx.properties.get("environment", "").strip().lower()
    if not value:
        return []
    labels = ENVIRONMENTS.get(value)
    if labels is None:
        logger.debug(f"Unknown environment '{value}'")
        return []
    return list(labels)


DETECTORS: tuple[Callable[[DetectionContext], list[str]], ...] = (
    detect_minecraft,
    detect_java,
    detect_loaders,
    detect_environment,
)


class VersionDetector:
    """Detects version labels that apply to every top-level artifact.

    Args:
        context: Properties to inspect.
        enabled: Set to False to skip detection entirely.
    """

    def __init__(self, context: DetectionContext | None = None, enabled: bool = True) -> None:
        self.context = context or DetectionContext()
        self.enabled = enabled
        self.detected_versions: list[str] = []

    def detect_versions(self, catalog: VersionCatalog) -> list[str]:
        """Return detected labels that exist in the refreshed catalog."""
        detected: list[str] = []
        for detector in DETECTORS:
            try:
                candidates = detector(self.context)
            except (ValueError, TypeError) as e:
                logger.debug(f"Version detector {detector.__name__} failed: {e}")
                continue
            for candidate in candidates:
                if candidate in detected:
                    continue
                if catalog.lookup(candidate) is None:
                    logger.warning(
                        f"Detected version {candidate} is not valid for this game, skipping"
                    )
                    continue
                logger.info(f"Detected game version {candidate}")
                detected.append(candidate)
        self.detected_versions = detected
        return detected
