"""CLI entry point for smartmsg.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from smartmsg.cli.apply import apply_command
from smartmsg.cli.config import config_app
from smartmsg.cli.main import main_callback
from smartmsg.cli.plan import plan_command, show_command

# Main application
app = typer.Typer(
    name="smartmsg",
    help="smartmsg: AI-assisted commit message rewriting",
    add_completion=False,
    no_args_is_help=True,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("plan")(plan_command)
app.command("apply")(apply_command)
app.command("show")(show_command)

# Global options (--verbose, --version)
app.callback()(main_callback)
