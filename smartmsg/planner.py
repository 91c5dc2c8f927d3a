"""Planning phase for smartmsg.

The planner is responsible for:
  - resolving the commit range to rewrite,
  - enumerating its commits oldest first,
  - asking the suggestion service for a new message per commit,
  - sanitizing each suggestion, and
  - returning a complete Plan ready to be written to disk.

A suggestion failure aborts the whole run; no partial plan is returned.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from smartmsg.config import DEFAULT_LIMIT, Settings
from smartmsg.formatters import sanitize_message
from smartmsg.git import (
    CommitRecord,
    EmptyRangeError,
    GitRunner,
    get_commit_diff,
    list_commits,
    resolve_range,
)
from smartmsg.llm import BaseMessageSuggester, SuggestionServiceError, get_suggester
from smartmsg.plan import Plan, PlanItem

LOG = logging.getLogger(__name__)


@dataclass
class PlanOptions:
    """Options for one planning run."""

    limit: int = DEFAULT_LIMIT
    range_expr: Optional[str] = None
    model: Optional[str] = None
    allow_merges: bool = False


def _plan_item(commit: CommitRecord, message: str) -> PlanItem:
    return PlanItem(
        sha=commit.sha,
        old_message=commit.subject,
        new_message=message,
        author_name=commit.author_name,
        author_email=commit.author_email,
        author_date=commit.author_date.isoformat(),
    )


def build_plan(
    options: PlanOptions,
    settings: Settings,
    runner: Optional[GitRunner] = None,
    suggester_factory: Callable[[Settings], BaseMessageSuggester] = get_suggester,
    on_item: Optional[Callable[[PlanItem], None]] = None,
) -> Plan:
    """Build a rewrite plan for a commit range.

    Args:
        options: Range, model and merge options.
        settings: Loaded runtime settings.
        runner: Git runner for the working repository.
        suggester_factory: Builds the suggestion client from settings.
        on_item: Called with each PlanItem as soon as it is planned.

    Returns:
        The complete Plan.

    Raises:
        RangeResolutionError: If the range cannot be resolved.
        EmptyRangeError: If the range holds no commits to plan.
        ConfigurationError: If the suggestion client cannot be configured.
        SuggestionServiceError: If any suggestion fails.
        GitError: If a diff cannot be read.
    """
    runner = runner or GitRunner()
    model = options.model or settings.model

    commit_range = resolve_range(runner, limit=options.limit, range_expr=options.range_expr)
    LOG.info("Planning range %s", commit_range.expr)

    commits = list_commits(runner, commit_range.expr)
    if not commits:
        raise EmptyRangeError(f"No commits in range {commit_range.expr}")

    suggester = suggester_factory(settings)

    items: list[PlanItem] = []
    skipped = 0
    for commit in commits:
        if commit.is_merge and not options.allow_merges:
            LOG.warning("Skipping merge commit %s", commit.short_sha)
            skipped += 1
            continue

        diff = get_commit_diff(
            runner,
            commit.sha,
            max_chars=settings.diff_char_budget,
            first_parent=commit.is_merge,
        )
        try:
            suggestion = suggester.suggest(model, diff, commit.subject)
        except SuggestionServiceError as e:
            raise SuggestionServiceError(f"Suggestion failed for {commit.short_sha}: {e}") from e

        item = _plan_item(commit, sanitize_message(suggestion))
        items.append(item)
        LOG.info("Planned %s: %s", commit.short_sha, item.new_message.split("\n", 1)[0])
        if on_item:
            on_item(item)

    if not items:
        raise EmptyRangeError(
            f"No commits left to plan in {commit_range.expr} after skipping {skipped} merge commit(s)"
        )

    repo_root = runner.get_repo_root()
    return Plan(
        repo_path=str(repo_root),
        base=commit_range.base,
        head=commit_range.head,
        created_at=datetime.now(timezone.utc).isoformat(),
        model=model,
        allow_merges=options.allow_merges,
        items=items,
    )
