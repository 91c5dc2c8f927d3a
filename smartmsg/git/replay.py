"""Git primitives used to replay commits onto a new branch.

Contains:
- is_worktree_clean: Check for uncommitted changes
- branch_exists: Check whether a local branch exists
- create_branch: Create and switch to a new branch
- reset_hard: Hard-reset the current branch
- cherry_pick_no_commit: Stage a commit's changes without committing
- abort_cherry_pick: Abandon a failed cherry-pick
- get_staged_files: List paths with staged changes
- commit_as: Commit the index with explicit author and committer identity
"""

import logging

from smartmsg.git.exceptions import GitError
from smartmsg.git.runner import GitRunner

LOG = logging.getLogger(__name__)


def is_worktree_clean(runner: GitRunner) -> bool:
    """Return True if tracked files have no staged or unstaged changes.

    Untracked files are ignored so a plan file written inside the
    repository does not block apply.
    """
    return runner.run(["status", "--porcelain", "--untracked-files=no"]) == ""


def branch_exists(runner: GitRunner, name: str) -> bool:
    """Return True if a local branch with this name exists."""
    try:
        runner.run(["rev-parse", "--verify", "--quiet", f"refs/heads/{name}"])
        return True
    except GitError:
        return False


def create_branch(runner: GitRunner, name: str) -> None:
    """Create a branch at the current tip and switch to it."""
    runner.run(["checkout", "-b", name])


def reset_hard(runner: GitRunner, ref: str = "HEAD") -> None:
    """Reset index and working tree of the current branch to ref."""
    runner.run(["reset", "--hard", ref])


def cherry_pick_no_commit(runner: GitRunner, sha: str, mainline: int | None = None) -> None:
    """Apply a commit's changes to the index and working tree only.

    Args:
        runner: Git runner for the working repository.
        sha: The commit to replay.
        mainline: Parent number to diff against, required for merges.

    Raises:
        GitError: If the changes cannot be applied cleanly.
    """
    args = ["cherry-pick", "--no-commit"]
    if mainline is not None:
        args += ["-m", str(mainline)]
    args.append(sha)
    runner.run(args)


def abort_cherry_pick(runner: GitRunner) -> None:
    """Abandon a failed cherry-pick and restore the branch tip.

    A --no-commit pick may leave no sequencer state behind, in which case
    --abort fails and the index and working tree are reset instead.
    """
    try:
        runner.run(["cherry-pick", "--abort"])
    except GitError as e:
        LOG.debug("cherry-pick --abort failed, resetting instead: %s", e)
        reset_hard(runner, "HEAD")


def get_staged_files(runner: GitRunner) -> list[str]:
    """Return the paths that differ between the index and HEAD."""
    output = runner.run(["diff", "--cached", "--name-only"])
    if not output:
        return []
    return output.split("\n")


def commit_as(
    runner: GitRunner,
    message: str,
    name: str,
    email: str,
    date: str,
) -> str:
    """Commit the index attributing both author and committer to one identity.

    Local commit hooks are bypassed.

    Args:
        runner: Git runner for the working repository.
        message: Full commit message.
        name: Author and committer name.
        email: Author and committer email.
        date: Author and committer date (ISO 8601 with offset).

    Returns:
        The SHA of the new commit.

    Raises:
        GitError: If the commit fails.
    """
    env = {
        "GIT_AUTHOR_NAME": name,
        "GIT_AUTHOR_EMAIL": email,
        "GIT_AUTHOR_DATE": date,
        "GIT_COMMITTER_NAME": name,
        "GIT_COMMITTER_EMAIL": email,
        "GIT_COMMITTER_DATE": date,
    }
    runner.run(["commit", "--no-verify", "-m", message], env=env)
    return runner.run(["rev-parse", "HEAD"])
