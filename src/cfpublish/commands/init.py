"""Init command implementation."""

from pathlib import Path

import typer

from ..config import write_config_template
from ..constants import DEFAULT_CONFIG_FILE
from ..output import get_output_context


def init(
    path: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILE), "--path", "-p", help="Where to write the config file"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Write a starter publish.toml."""
    ctx = get_output_context()

    if path.exists() and not force:
        ctx.error(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(1)

    config_path = write_config_template(path)
    ctx.success(f"Created config template: {config_path}", {"path": str(config_path)})
    ctx.print("\n[bold]Next step:[/bold] Set CURSEFORGE_TOKEN, edit the artifacts, then run:")
    ctx.print("  cfpublish publish --dry-run")
