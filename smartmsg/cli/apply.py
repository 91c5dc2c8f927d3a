"""CLI command for replaying a plan onto a new branch."""

from pathlib import Path

import typer

from smartmsg.applier import Applier, ItemOutcome
from smartmsg.config import DEFAULT_PLAN_FILE
from smartmsg.exceptions import SmartMsgError
from smartmsg.plan import PlanItem, load_plan


def _echo_outcome(item: PlanItem, outcome: ItemOutcome) -> None:
    if outcome == ItemOutcome.SKIPPED_EMPTY:
        typer.echo(f"  {item.short_sha}  skipped (no changes)")
    else:
        summary = item.effective_message().split("\n", 1)[0]
        typer.echo(f"  {item.short_sha}  {summary}")


def apply_command(
    branch: str = typer.Option(
        ...,
        "--branch",
        "-b",
        help="Name of the new branch to create",
    ),
    plan_file: Path = typer.Option(
        Path(DEFAULT_PLAN_FILE),
        "--in",
        "-i",
        help="Plan file to apply",
    ),
    allow_merges: bool = typer.Option(
        False,
        "--allow-merges",
        help="Replay merge commits against their first parent (experimental)",
    ),
) -> None:
    """Replay a plan onto a new branch with the planned messages."""
    try:
        plan = load_plan(plan_file)
        applier = Applier(plan, branch, allow_merges=allow_merges, on_item=_echo_outcome)
        result = applier.run()
    except SmartMsgError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Rewrote {len(result.commits)} commit(s) on branch {result.branch}")
    if result.skipped:
        typer.echo(f"  Skipped {len(result.skipped)} commit(s) with no changes")
    typer.echo()
    typer.echo(f"⚠️  {result.warning}", err=True)
