"""CLI commands for producing and inspecting plan files."""

from pathlib import Path
from typing import Optional

import typer

from smartmsg.config import DEFAULT_LIMIT, DEFAULT_PLAN_FILE, load_settings
from smartmsg.exceptions import SmartMsgError
from smartmsg.plan import PlanItem, load_plan, save_plan
from smartmsg.planner import PlanOptions, build_plan


def _echo_planned(item: PlanItem) -> None:
    summary = item.new_message.split("\n", 1)[0]
    typer.echo(f"  {item.short_sha}  {summary}")


def plan_command(
    limit: int = typer.Option(
        DEFAULT_LIMIT,
        "--limit",
        "-n",
        min=1,
        help="Number of commits back from HEAD to plan",
    ),
    range_expr: Optional[str] = typer.Option(
        None,
        "--range",
        help="Explicit git range such as <base>..<head> (overrides --limit)",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Model used for suggestions (default: OPENAI_MODEL or gpt-5-nano)",
    ),
    allow_merges: bool = typer.Option(
        False,
        "--allow-merges",
        help="Plan merge commits too, diffed against their first parent (experimental)",
    ),
    out: Path = typer.Option(
        Path(DEFAULT_PLAN_FILE),
        "--out",
        "-o",
        help="Where to write the plan file",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Per-suggestion timeout in seconds (default: 25)",
    ),
) -> None:
    """Suggest new messages for a range of commits and write a plan file."""
    try:
        settings = load_settings()
        if timeout is not None:
            if timeout <= 0:
                typer.echo("Error: --timeout must be positive", err=True)
                raise typer.Exit(1)
            settings = settings.model_copy(update={"timeout": timeout})

        options = PlanOptions(
            limit=limit,
            range_expr=range_expr,
            model=model,
            allow_merges=allow_merges,
        )
        plan = build_plan(options, settings, on_item=_echo_planned)
        path = save_plan(plan, out)
    except SmartMsgError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Wrote {path} ({len(plan.items)} messages)")
    typer.echo("Review and edit new_message fields, then run: smartmsg apply --branch <name>")


def show_command(
    plan_file: Path = typer.Option(
        Path(DEFAULT_PLAN_FILE),
        "--in",
        "-i",
        help="Plan file to show",
    ),
) -> None:
    """Show the old and new messages recorded in a plan file."""
    try:
        plan = load_plan(plan_file)
    except SmartMsgError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Plan: {plan_file}")
    typer.echo(f"  Repository: {plan.repo_path}")
    typer.echo(f"  Range: {plan.base[:7] or '(none)'}..{plan.head[:7] or '(none)'}")
    typer.echo(f"  Model: {plan.model}")
    typer.echo(f"  Created: {plan.created_at}")
    typer.echo(f"  Merges allowed: {'yes' if plan.allow_merges else 'no'}")
    typer.echo()

    for item in plan.items:
        typer.echo(f"{item.short_sha}  {item.author_name} <{item.author_email}>")
        typer.echo(f"  - {item.old_message}")
        for index, line in enumerate(item.effective_message().split("\n")):
            prefix = "  + " if index == 0 else "    "
            typer.echo(f"{prefix}{line}".rstrip())
    typer.echo()
    typer.echo(f"{len(plan.items)} commit(s)")
