"""CLI command implementations for cfpublish.

This package contains the implementation of each CLI command,
separated from the CLI framework setup in cli.py.
"""

from . import init, publish, versions

__all__ = [
    "init",
    "publish",
    "versions",
]
