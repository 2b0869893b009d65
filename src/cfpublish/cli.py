"""cfpublish CLI: publish build artifacts to CurseForge."""

import typer

from cfpublish import __version__

from .commands.init import init
from .commands.publish import publish
from .commands.versions import versions
from .logging import configure_logging
from .output import OutputContext, set_output_context


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"cfpublish {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="cfpublish",
    help="Publish build artifacts to CurseForge",
    no_args_is_help=True,
)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """cfpublish - publish build artifacts to CurseForge."""
    console = configure_logging(
        verbosity=verbose,
        quiet=quiet,
        no_color=no_color,
    )
    set_output_context(OutputContext(console=console, json_mode=json_output))


app.command()(init)
app.command()(publish)
app.command()(versions)


if __name__ == "__main__":
    app()
