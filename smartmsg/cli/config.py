"""CLI commands for global configuration management."""

import typer

from smartmsg import global_config
from smartmsg.config import API_KEY_ENV_VAR, DEFAULT_MODEL, load_settings
from smartmsg.exceptions import SmartMsgError

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global smartmsg configuration in ~/.smartmsg/",
    add_completion=False,
)


def _mask(api_key: str) -> str:
    return api_key[:8] + "..." + api_key[-4:] if len(api_key) > 12 else "***"


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration."""
    try:
        settings = load_settings()
    except SmartMsgError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"smartmsg configuration ({global_config.get_config_file_path()}):")
    typer.echo()
    typer.echo(f"  Model: {settings.model}")
    typer.echo(f"  Endpoint: {settings.base_url or 'default'}")
    typer.echo(f"  Timeout: {settings.timeout:g}s")
    typer.echo(f"  Max Completion Tokens: {settings.max_completion_tokens}")
    typer.echo(f"  Diff Budget: {settings.diff_char_budget} chars")
    if settings.api_key:
        typer.echo(f"  API Key ({API_KEY_ENV_VAR}): {_mask(settings.api_key)}")
    else:
        typer.echo(f"  API Key ({API_KEY_ENV_VAR}): not set")


@config_app.command("set-key")
def config_set_key() -> None:
    """Set or update the API key."""
    api_key = typer.prompt("Enter your OpenAI API key", hide_input=True).strip()
    if not api_key:
        typer.echo("Error: API key cannot be empty", err=True)
        raise typer.Exit(1)

    try:
        global_config.save_credential(API_KEY_ENV_VAR, api_key)
    except SmartMsgError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ API key saved to {global_config.get_credentials_file_path()}")


@config_app.command("set-model")
def config_set_model(
    model: str = typer.Argument(
        ...,
        help=f"Model name (default: {DEFAULT_MODEL})",
    ),
) -> None:
    """Set the default model."""
    try:
        global_config.set_model(model.strip())
    except SmartMsgError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Default model set to {model.strip()}")
