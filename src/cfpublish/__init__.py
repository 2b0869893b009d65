"""cfpublish: publish build artifacts to CurseForge."""

__version__ = "0.1.0"
