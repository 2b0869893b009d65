"""Versions command: list the game versions files can be tagged with."""

from pathlib import Path

import typer

from ..config import PublishConfig, load_config
from ..constants import DEFAULT_CONFIG_FILE
from ..core import VersionCatalog, providers_from_names
from ..errors import ConfigurationError, PublishError
from ..output import get_output_context
from ..services import CurseForgeClient


def versions(
    config: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILE), "--config", "-c", help="Path to publish.toml"
    ),
    token: str | None = typer.Option(
        None, "--token", help="CurseForge API token (overrides the config)"
    ),
    endpoint: str | None = typer.Option(None, "--endpoint", help="Override the API endpoint"),
    type_slug: str | None = typer.Option(
        None, "--type", "-t", help="Only show versions of this version type slug"
    ),
    search: str | None = typer.Option(
        None, "--search", "-s", help="Only show versions whose name or slug contains this"
    ),
) -> None:
    """List valid game versions for the configured version types."""
    ctx = get_output_context()

    try:
        cfg = load_config(config) if config.exists() else PublishConfig()
        api_token = token or cfg.resolve_token()
        if not api_token:
            raise ConfigurationError("No API token provided!")
        catalog = VersionCatalog(
            providers_from_names(cfg.versions.providers, cfg.versions.extra_type_slugs)
        )
        with CurseForgeClient(
            endpoint or cfg.api.endpoint, api_token, timeout=cfg.api.timeout
        ) as client:
            catalog.refresh(client)
    except PublishError as e:
        ctx.error(str(e))
        raise typer.Exit(e.exit_code) from None

    type_names = {t.id: t for t in catalog.types}
    found = catalog.versions()
    if type_slug:
        found = [
            v
            for v in found
            if v.game_version_type_id in type_names
            and type_names[v.game_version_type_id].slug == type_slug
        ]
    if search:
        needle = search.lower()
        found = [v for v in found if needle in v.name.lower() or needle in v.slug.lower()]

    if ctx.json_mode:
        ctx.print_json({"versions": [v.model_dump(mode="json", by_alias=True) for v in found]})
        return

    ctx.table(
        f"{len(found)} game version(s)",
        [("ID", "right"), "Name", "Slug", "Type"],
        (
            (
                str(v.id),
                v.name,
                v.slug,
                type_names[v.game_version_type_id].name
                if v.game_version_type_id in type_names
                else "?",
            )
            for v in found
        ),
    )
