"""Top-level callback for the smartmsg CLI."""

import typer

from smartmsg import __version__
from smartmsg.logging_utils import configure_logging


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"smartmsg {__version__}")
        raise typer.Exit()


def main_callback(
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase log output (-v for info, -vv for debug)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Rewrite commit messages in two phases: plan, then apply."""
    configure_logging(verbose)
