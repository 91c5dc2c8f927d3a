"""Git boundary for smartmsg.

This package wraps the git command-line tool:
- exceptions: GitError, RangeResolutionError, EmptyRangeError
- runner: GitRunner
- commits: CommitRecord, CommitRange, resolve_range, list_commits and
           live commit checks
- diff: get_commit_diff, truncate_diff
- replay: branch, reset, cherry-pick and commit primitives for apply
"""

# Exceptions
from smartmsg.git.exceptions import (
    EmptyRangeError,
    GitError,
    RangeResolutionError,
)

# Runner
from smartmsg.git.runner import GitRunner

# Commit enumeration
from smartmsg.git.commits import (
    CommitRange,
    CommitRecord,
    commit_exists,
    get_parent_count,
    is_ancestor,
    list_commits,
    resolve_ancestor,
    resolve_head,
    resolve_range,
    resolve_root,
)

# Diff extraction
from smartmsg.git.diff import (
    DEFAULT_DIFF_CHAR_BUDGET,
    TRUNCATION_MARKER,
    get_commit_diff,
    truncate_diff,
)

# Replay primitives
from smartmsg.git.replay import (
    abort_cherry_pick,
    branch_exists,
    cherry_pick_no_commit,
    commit_as,
    create_branch,
    get_staged_files,
    is_worktree_clean,
    reset_hard,
)


__all__ = [
    # Exceptions
    "GitError",
    "RangeResolutionError",
    "EmptyRangeError",
    # Runner
    "GitRunner",
    # Commits
    "CommitRecord",
    "CommitRange",
    "resolve_head",
    "resolve_ancestor",
    "resolve_root",
    "resolve_range",
    "list_commits",
    "get_parent_count",
    "commit_exists",
    "is_ancestor",
    # Diff
    "DEFAULT_DIFF_CHAR_BUDGET",
    "TRUNCATION_MARKER",
    "get_commit_diff",
    "truncate_diff",
    # Replay
    "is_worktree_clean",
    "branch_exists",
    "create_branch",
    "reset_hard",
    "cherry_pick_no_commit",
    "abort_cherry_pick",
    "get_staged_files",
    "commit_as",
]
