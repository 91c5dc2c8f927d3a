"""Git-related exception classes.

Contains all exception classes for git operations:
- GitError: A git invocation failed
- RangeResolutionError: A commit range could not be resolved or parsed
- EmptyRangeError: A commit range resolved to no commits
"""

from smartmsg.exceptions import SmartMsgError


class GitError(SmartMsgError):
    """Raised when a git command exits with a non-zero status."""

    def __init__(self, message: str, args: list[str] | None = None, stderr: str = ""):
        super().__init__(message)
        self.git_args = list(args or [])
        self.stderr = stderr


class RangeResolutionError(SmartMsgError):
    """Raised when a commit range is unparsable or cannot be resolved."""

    pass


class EmptyRangeError(RangeResolutionError):
    """Raised when a commit range contains no commits to work on."""

    pass
