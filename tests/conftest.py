"""Shared test fixtures for cfpublish tests."""

import logging
from pathlib import Path

import pytest
from fakes import FakeCurseForge, StaticSource
from rich.logging import RichHandler
from typer.testing import CliRunner

from cfpublish.core import VersionCatalog, default_providers


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def api() -> FakeCurseForge:
    """Fake CurseForge API with the default catalog."""
    return FakeCurseForge()


@pytest.fixture
def catalog() -> VersionCatalog:
    """Catalog refreshed from the default data with the default providers."""
    cat = VersionCatalog(default_providers())
    cat.refresh(StaticSource())
    return cat


@pytest.fixture
def jars(tmp_path: Path) -> dict[str, Path]:
    """Create a few small files to upload."""
    files = {}
    for name in ("a.jar", "a1.jar", "a2.jar", "b.jar", "b1.jar"):
        path = tmp_path / name
        path.write_bytes(b"PK\x03\x04" + name.encode())
        files[name.removesuffix(".jar")] = path
    return files


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo root logger changes made by configure_logging (CLI runs included)."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
    for handler in root.handlers[:]:
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.NOTSET)
