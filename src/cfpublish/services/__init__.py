"""External service integrations for cfpublish.

- curseforge: CurseForge upload API (version catalog fetches and file uploads)
"""

from .curseforge import CurseForgeClient

__all__ = ["CurseForgeClient"]
