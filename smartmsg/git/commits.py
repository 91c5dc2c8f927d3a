"""Commit range resolution and enumeration.

Contains:
- CommitRecord: Metadata for one commit read from git log
- CommitRange: A resolved base/head pair plus the git range expression
- resolve_head, resolve_ancestor, resolve_root: Revision lookups
- resolve_range: Turn a commit limit or explicit range into a CommitRange
- list_commits: Enumerate a range oldest to newest
- get_parent_count, commit_exists, is_ancestor: Live commit checks
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from smartmsg.git.exceptions import GitError, RangeResolutionError
from smartmsg.git.runner import GitRunner

# Unit separator between fields, record separator between commits.
# Neither can appear in subjects or author fields.
FIELD_SEP = "\x1f"
RECORD_SEP = "\x1e"

LOG_FORMAT = "%H%x1f%s%x1f%an%x1f%ae%x1f%aI%x1f%P%x1e"
_FIELD_COUNT = 6


@dataclass(frozen=True)
class CommitRecord:
    """A commit as read from git log."""

    sha: str
    subject: str
    author_name: str
    author_email: str
    author_date: datetime
    parents: tuple[str, ...] = ()

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


@dataclass(frozen=True)
class CommitRange:
    """A resolved commit range. base is exclusive and may be empty."""

    base: str
    head: str
    expr: str


def resolve_head(runner: GitRunner) -> str:
    """Return the full SHA of the current tip."""
    try:
        return runner.run(["rev-parse", "--verify", "HEAD^{commit}"])
    except GitError as e:
        raise RangeResolutionError(f"Cannot resolve HEAD: {e}")


def resolve_ancestor(runner: GitRunner, head: str, n: int) -> str:
    """Return the n-th first-parent ancestor of head.

    Raises:
        GitError: If head has fewer than n ancestors.
    """
    return runner.run(["rev-parse", "--verify", f"{head}~{n}^{{commit}}"])


def resolve_root(runner: GitRunner, head: str) -> str:
    """Return the earliest root commit reachable from head."""
    output = runner.run(["rev-list", "--max-parents=0", head])
    roots = [line.strip() for line in output.split("\n") if line.strip()]
    if not roots:
        raise RangeResolutionError(f"No root commit reachable from {head[:7]}")
    # rev-list lists newest first
    return roots[-1]


def _resolve_rev(runner: GitRunner, rev: str) -> str:
    try:
        return runner.run(["rev-parse", "--verify", f"{rev}^{{commit}}"])
    except GitError as e:
        raise RangeResolutionError(f"Cannot resolve revision '{rev}': {e}")


def resolve_range(
    runner: GitRunner,
    limit: Optional[int] = None,
    range_expr: Optional[str] = None,
) -> CommitRange:
    """Resolve the commit range to plan.

    With no explicit range, head is the current tip and base is the
    limit-th ancestor, or the root commit when history is shorter.

    Args:
        runner: Git runner for the working repository.
        limit: Number of commits back from HEAD.
        range_expr: Explicit git range such as "abc123..main".

    Returns:
        The resolved CommitRange.

    Raises:
        RangeResolutionError: If the range cannot be parsed or resolved.
    """
    if range_expr:
        expr = range_expr.strip()
        if not expr or expr.startswith("-"):
            raise RangeResolutionError(f"Unparsable range expression: '{range_expr}'")
        if "..." in expr:
            raise RangeResolutionError(
                f"Symmetric ranges are not linear history: '{range_expr}'. Use <base>..<head>."
            )
        if ".." not in expr:
            raise RangeResolutionError(
                f"Range must name both endpoints: '{range_expr}'. Use <base>..<head> or --limit."
            )
        left, right = expr.split("..", 1)
        if not left:
            raise RangeResolutionError(f"Range is missing a base: '{range_expr}'")
        base = _resolve_rev(runner, left)
        head = _resolve_rev(runner, right or "HEAD")
        return CommitRange(base=base, head=head, expr=f"{base}..{head}")

    if limit is None or limit < 1:
        raise RangeResolutionError(f"Commit limit must be a positive number, got {limit}")

    head = resolve_head(runner)
    try:
        base = resolve_ancestor(runner, head, limit)
    except GitError:
        try:
            base = resolve_root(runner, head)
        except GitError as e:
            raise RangeResolutionError(f"Cannot compute base for the last {limit} commits: {e}")
    return CommitRange(base=base, head=head, expr=f"{base}..{head}")


def _parse_record(record: str) -> CommitRecord:
    parts = record.split(FIELD_SEP)
    if len(parts) != _FIELD_COUNT:
        raise RangeResolutionError(f"Malformed git log record: {record!r}")
    sha, subject, author_name, author_email, author_date, parents = parts
    try:
        date = datetime.fromisoformat(author_date.strip())
    except ValueError:
        raise RangeResolutionError(f"Unparsable author date {author_date!r} for {sha[:7]}")
    return CommitRecord(
        sha=sha.strip(),
        subject=subject,
        author_name=author_name,
        author_email=author_email,
        author_date=date,
        parents=tuple(parents.split()),
    )


def list_commits(runner: GitRunner, range_expr: str) -> list[CommitRecord]:
    """Enumerate the commits in a range, oldest first.

    Args:
        runner: Git runner for the working repository.
        range_expr: A git range expression.

    Returns:
        CommitRecords in replay order.

    Raises:
        RangeResolutionError: If git rejects the range or output is malformed.
    """
    try:
        output = runner.run(
            ["log", "--reverse", f"--format={LOG_FORMAT}", range_expr],
            strip=False,
        )
    except GitError as e:
        raise RangeResolutionError(f"Cannot enumerate commits in '{range_expr}': {e}")

    commits = []
    for record in output.split(RECORD_SEP):
        record = record.strip("\r\n")
        if not record:
            continue
        commits.append(_parse_record(record))
    return commits


def get_parent_count(runner: GitRunner, sha: str) -> int:
    """Return the live parent count of a commit."""
    output = runner.run(["rev-list", "--parents", "-n", "1", sha])
    return max(len(output.split()) - 1, 0)


def commit_exists(runner: GitRunner, sha: str) -> bool:
    """Return True if sha names a commit in the repository."""
    try:
        runner.run(["cat-file", "-e", f"{sha}^{{commit}}"])
        return True
    except GitError:
        return False


def is_ancestor(runner: GitRunner, ancestor: str, descendant: str) -> bool:
    """Return True if ancestor is reachable from descendant."""
    try:
        runner.run(["merge-base", "--is-ancestor", ancestor, descendant])
        return True
    except GitError:
        return False
