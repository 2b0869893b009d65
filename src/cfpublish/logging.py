"""Logging configuration for the cfpublish CLI."""

import logging
from enum import IntEnum
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler


class LogLevel(IntEnum):
    """Log level enumeration."""

    QUIET = logging.WARNING
    NORMAL = logging.INFO
    VERBOSE = logging.DEBUG


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    no_color: bool = False,
    stream: TextIO | None = None,
) -> Console:
    """Configure logging based on CLI options.

    Args:
        verbosity: Number of -v flags (0=normal, 1+=debug, 2+=debug with paths)
        quiet: Suppress non-error output (takes precedence over verbosity)
        no_color: Disable colored output
        stream: Output stream for logs (defaults to stderr)

    Returns:
        Configured Rich console for output

    Note:
        The httpx and httpcore loggers stay at WARNING below -vv since their
        request traces include the X-Api-Token header.
    """
    if quiet:
        level = LogLevel.QUIET
    elif verbosity >= 1:
        level = LogLevel.VERBOSE
    else:
        level = LogLevel.NORMAL

    console = Console(
        file=stream,
        stderr=stream is None,
        force_terminal=False if no_color else None,
        no_color=no_color,
    )

    handler = RichHandler(
        console=console,
        show_time=verbosity >= 2,
        show_path=verbosity >= 2,
    )

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )

    http_level = logging.DEBUG if verbosity >= 2 else logging.WARNING
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(http_level)

    return console
