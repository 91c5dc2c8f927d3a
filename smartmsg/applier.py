"""Apply phase for smartmsg.

Replays the commits of a plan onto a new branch, one by one, replacing
each message while keeping the original tree changes and author identity.

The replay is an explicit state machine:

    INIT -> BRANCH_CREATED -> RESET -> REPLAYING -> DONE
                 any failure -> ABORTED

Each item is staged with ``cherry-pick --no-commit`` and inspected before
committing, so commits whose changes are already present on the new
branch are dropped instead of producing empty commits. Nothing is rolled
back on failure; the partially rewritten branch stays for inspection.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from smartmsg.exceptions import (
    MergeEncounteredError,
    PreconditionError,
    ReplayConflictError,
)
from smartmsg.git import (
    GitError,
    GitRunner,
    abort_cherry_pick,
    branch_exists,
    cherry_pick_no_commit,
    commit_as,
    commit_exists,
    create_branch,
    get_parent_count,
    get_staged_files,
    is_ancestor,
    is_worktree_clean,
    reset_hard,
)
from smartmsg.plan import Plan, PlanItem

LOG = logging.getLogger(__name__)


class ApplyState(Enum):
    """States of the replay state machine."""

    INIT = "init"
    BRANCH_CREATED = "branch_created"
    RESET = "reset"
    REPLAYING = "replaying"
    DONE = "done"
    ABORTED = "aborted"


class ItemOutcome(Enum):
    """What happened to one plan item."""

    COMMITTED = "committed"
    SKIPPED_EMPTY = "skipped_empty"


@dataclass
class ApplyResult:
    """Summary of a finished apply run."""

    branch: str
    base: str
    commits: list[tuple[str, str]] = field(default_factory=list)  # (source sha, new sha)
    skipped: list[str] = field(default_factory=list)

    @property
    def warning(self) -> str:
        return (
            "Rewriting history changes commit SHAs. Coordinate with your team before force-pushing:\n"
            f"   git push --force-with-lease origin {self.branch}"
        )


def merge_guidance(item: PlanItem) -> str:
    return (
        f"Merge commit detected ({item.short_sha}). "
        "Rerun with --allow-merges (experimental) or remove it from the plan."
    )


class Applier:
    """Replay a plan onto a new branch.

    Usage:
        result = Applier(plan, "rewrite/2024-05-01").run()
    """

    def __init__(
        self,
        plan: Plan,
        branch: str,
        allow_merges: bool = False,
        runner: Optional[GitRunner] = None,
        on_item: Optional[Callable[[PlanItem, ItemOutcome], None]] = None,
    ):
        """Initialize the applier.

        Args:
            plan: The loaded plan.
            branch: Name of the branch to create.
            allow_merges: Replay merge commits against their first parent.
            runner: Git runner for the working repository.
            on_item: Called after each item is committed or skipped.
        """
        self.plan = plan
        self.branch = (branch or "").strip()
        self.allow_merges = allow_merges
        self.runner = runner or GitRunner()
        self.on_item = on_item
        self.state = ApplyState.INIT
        self.history: list[ApplyState] = [ApplyState.INIT]
        self.result = ApplyResult(branch=self.branch, base="")

    def _transition(self, state: ApplyState) -> None:
        LOG.debug("apply: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    # ------------------------------------------------------------------
    # Preconditions
    # ------------------------------------------------------------------

    def check_preconditions(self) -> None:
        """Validate everything that can be checked without mutating the repo.

        Raises:
            PreconditionError: If apply cannot start safely.
        """
        if not self.branch:
            raise PreconditionError("A new branch name is required (--branch)")
        if not self.plan.items:
            raise PreconditionError("Plan has no items")
        if not is_worktree_clean(self.runner):
            raise PreconditionError("Worktree is not clean; commit or stash your changes first")
        if branch_exists(self.runner, self.branch):
            raise PreconditionError(f"Branch '{self.branch}' already exists; choose another name")

        missing = [item.short_sha for item in self.plan.items if not commit_exists(self.runner, item.sha)]
        if missing:
            raise PreconditionError(
                f"Plan references commits missing from this repository: {', '.join(missing)}"
            )

        if self.plan.base:
            if not commit_exists(self.runner, self.plan.base):
                raise PreconditionError(f"Plan base {self.plan.base[:7]} is missing from this repository")
            if self.plan.head and not is_ancestor(self.runner, self.plan.base, self.plan.head):
                raise PreconditionError(
                    f"Plan base {self.plan.base[:7]} is not an ancestor of plan head {self.plan.head[:7]}"
                )

    def resolve_base(self) -> str:
        """Return the commit the new branch is reset to.

        Without a recorded base, the live parent of the first item is used.
        """
        if self.plan.base:
            return self.plan.base

        first = self.plan.items[0]
        try:
            base = self.runner.run(["rev-parse", "--verify", f"{first.sha}^"])
        except GitError as e:
            raise PreconditionError(f"Cannot determine base from parent of {first.short_sha}: {e}")
        LOG.warning(
            "Plan has no recorded base; using current parent %s of %s",
            base[:7],
            first.short_sha,
        )
        return base

    # ------------------------------------------------------------------
    # Replay
    # ------------------------------------------------------------------

    def replay_item(self, item: PlanItem) -> ItemOutcome:
        """Stage one item's changes and commit them with the new message.

        Raises:
            MergeEncounteredError: If the item is a merge and merges are disabled.
            ReplayConflictError: If the changes cannot be staged cleanly.
            GitError: If committing fails.
        """
        is_merge = get_parent_count(self.runner, item.sha) > 1
        if is_merge and not self.allow_merges:
            raise MergeEncounteredError(merge_guidance(item))

        try:
            cherry_pick_no_commit(self.runner, item.sha, mainline=1 if is_merge else None)
        except GitError as e:
            try:
                abort_cherry_pick(self.runner)
            except GitError as abort_error:
                LOG.error("Could not clean up after failed cherry-pick of %s: %s", item.short_sha, abort_error)
            raise ReplayConflictError(
                f"Cherry-pick failed at {item.short_sha}; resolve manually and rerun.\n{e}"
            ) from e

        if not get_staged_files(self.runner):
            LOG.info("Skipping empty commit %s", item.short_sha)
            reset_hard(self.runner, "HEAD")
            self.result.skipped.append(item.sha)
            return ItemOutcome.SKIPPED_EMPTY

        new_sha = commit_as(
            self.runner,
            item.effective_message(),
            name=item.author_name,
            email=item.author_email,
            date=item.author_date,
        )
        self.result.commits.append((item.sha, new_sha))
        LOG.info("Rewrote %s -> %s", item.short_sha, new_sha[:7])
        return ItemOutcome.COMMITTED

    def run(self) -> ApplyResult:
        """Run the state machine to completion.

        Returns:
            The ApplyResult for the new branch.

        Raises:
            SmartMsgError: Any failure; the state is left at ABORTED.
        """
        if self.state != ApplyState.INIT:
            raise PreconditionError("An Applier can only be run once")

        try:
            self.check_preconditions()
            base = self.resolve_base()

            create_branch(self.runner, self.branch)
            self._transition(ApplyState.BRANCH_CREATED)

            reset_hard(self.runner, base)
            self.result.base = base
            self._transition(ApplyState.RESET)

            self._transition(ApplyState.REPLAYING)
            for item in self.plan.items:
                outcome = self.replay_item(item)
                if self.on_item:
                    self.on_item(item, outcome)

            self._transition(ApplyState.DONE)
        except Exception:
            self._transition(ApplyState.ABORTED)
            raise

        LOG.info(
            "Branch %s rewritten: %d commit(s), %d skipped",
            self.branch,
            len(self.result.commits),
            len(self.result.skipped),
        )
        return self.result
