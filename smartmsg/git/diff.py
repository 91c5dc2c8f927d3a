"""Per-commit diff extraction.

Contains:
- get_commit_diff: Unified diff of one commit against its first parent
- truncate_diff: Cut a diff to a character budget with a visible marker
- DEFAULT_DIFF_CHAR_BUDGET, TRUNCATION_MARKER
"""

from smartmsg.git.runner import GitRunner

DEFAULT_DIFF_CHAR_BUDGET = 40000
TRUNCATION_MARKER = "\n...[truncated]..."


def truncate_diff(diff: str, max_chars: int = DEFAULT_DIFF_CHAR_BUDGET) -> str:
    """Truncate a diff to at most max_chars characters plus the marker.

    Args:
        diff: The diff text.
        max_chars: Character budget.

    Returns:
        The diff unchanged if it fits, otherwise its first max_chars
        characters followed by TRUNCATION_MARKER.
    """
    if len(diff) <= max_chars:
        return diff
    return diff[:max_chars] + TRUNCATION_MARKER


def get_commit_diff(
    runner: GitRunner,
    sha: str,
    max_chars: int = DEFAULT_DIFF_CHAR_BUDGET,
    first_parent: bool = False,
) -> str:
    """Get the unified diff a commit introduces.

    Args:
        runner: Git runner for the working repository.
        sha: The commit to show.
        max_chars: Character budget for the returned text.
        first_parent: Diff merge commits against their first parent.

    Returns:
        The (possibly truncated) output of git show.

    Raises:
        GitError: If git show fails.
    """
    args = ["show", "--patch", "--unified=3", "--no-color", "--find-renames"]
    if first_parent:
        args.append("--diff-merges=first-parent")
    args.append(sha)
    return truncate_diff(runner.run(args), max_chars)
