"""Console and JSON output for the cfpublish CLI.

Human output (messages, tables) goes through a rich Console on stderr so it
never mixes with the machine readable JSON that ``--json`` prints on stdout.
"""

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.table import Table


@dataclass
class OutputContext:
    """Where and how command results are written."""

    console: Console
    json_mode: bool = False

    def print(self, message: Any, style: str | None = None) -> None:
        """Print a message or rich renderable. Suppressed in JSON mode."""
        if not self.json_mode:
            self.console.print(message, style=style)

    def print_json(self, data: dict[str, Any]) -> None:
        if self.json_mode:
            print(json.dumps(data, indent=2, default=str))

    def table(
        self,
        title: str,
        columns: Sequence[str | tuple[str, str]],
        rows: Iterable[Sequence[str]],
    ) -> None:
        """Print a table. A column is a header or a ``(header, justify)`` pair."""
        if self.json_mode:
            return
        table = Table(title=title)
        for column in columns:
            header, justify = column if isinstance(column, tuple) else (column, "left")
            table.add_column(header, justify=justify)
        for row in rows:
            table.add_row(*row)
        self.console.print(table)

    def warning(self, message: str) -> None:
        if not self.json_mode:
            self.console.print(f"[yellow]{message}[/yellow]")

    def error(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print an error. In JSON mode it becomes ``{"error": ...}`` merged with data."""
        if self.json_mode:
            self.print_json({"error": message, **(data or {})})
        else:
            self.console.print(f"[red]Error: {message}[/red]")

    def success(self, message: str, data: dict[str, Any] | None = None) -> None:
        if self.json_mode:
            self.print_json({"success": message, **(data or {})})
        else:
            self.console.print(f"[green]{message}[/green]")


# Set by the cli.py main callback
_ctx: OutputContext | None = None


def get_output_context() -> OutputContext:
    """Current output context, or a plain stderr one outside the CLI."""
    if _ctx is None:
        return OutputContext(Console(stderr=True))
    return _ctx


def set_output_context(ctx: OutputContext) -> None:
    global _ctx
    _ctx = ctx
