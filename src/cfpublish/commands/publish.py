"""Publish command implementation."""

from pathlib import Path

import typer

from ..config import build_publisher, load_config
from ..constants import DEFAULT_CONFIG_FILE
from ..errors import PublishError
from ..models import PublishReport, PublishStatus
from ..output import OutputContext, get_output_context

STATUS_STYLES = {
    PublishStatus.UPLOADED: "green",
    PublishStatus.LOGGED: "cyan",
    PublishStatus.FAILED: "red",
    PublishStatus.SKIPPED: "yellow",
}


def _render_report(ctx: OutputContext, report: PublishReport) -> None:
    if ctx.json_mode:
        data = report.model_dump(mode="json")
        if report.error is not None:
            data["error"] = str(report.error)
        ctx.print_json(data)
        return

    if not report.results:
        return
    rows = []
    for r in report.results:
        status = PublishStatus(r.status)
        style = STATUS_STYLES[status]
        rows.append(
            (
                f"  └ {r.artifact}" if r.parent else r.artifact,
                str(r.project_id),
                f"[{style}]{status.value}[/{style}]",
                str(r.file_id) if r.file_id is not None else "-",
            )
        )
    ctx.table(
        "Dry run" if report.dry_run else "Published files",
        ["File", ("Project", "right"), "Status", ("File ID", "right")],
        rows,
    )


def publish(
    config: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILE), "--config", "-c", help="Path to publish.toml"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Log upload requests instead of sending them"
    ),
    token: str | None = typer.Option(
        None, "--token", help="CurseForge API token (overrides the config)"
    ),
    endpoint: str | None = typer.Option(None, "--endpoint", help="Override the API endpoint"),
    no_detect: bool = typer.Option(
        False, "--no-detect", help="Disable automatic version detection"
    ),
) -> None:
    """Publish every artifact declared in the config."""
    ctx = get_output_context()

    try:
        cfg = load_config(config)
        publisher = build_publisher(
            cfg,
            token=token,
            endpoint=endpoint,
            dry_run=True if dry_run else None,
            detect=False if no_detect else None,
        )
        report = publisher.run()
    except PublishError as e:
        ctx.error(str(e))
        raise typer.Exit(e.exit_code) from None

    _render_report(ctx, report)

    if report.error is not None:
        # JSON mode already carries the error in the report
        if not ctx.json_mode:
            ctx.error(str(report.error))
        if report.uploaded_count:
            ctx.warning(
                f"{report.uploaded_count} file(s) were already uploaded before the failure "
                "and have not been removed."
            )
        raise typer.Exit(report.error.exit_code)

    if not report.results:
        ctx.warning("No upload artifacts were specified.")
    elif report.dry_run:
        ctx.print(f"[cyan][DRY RUN][/cyan] {len(report.results)} upload request(s) logged")
    else:
        ctx.print(f"[bold green]Published {report.uploaded_count} file(s)[/bold green]")
