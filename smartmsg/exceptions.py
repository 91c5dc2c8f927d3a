"""Exception classes shared across smartmsg.

Contains:
- SmartMsgError: Base exception for every failure the CLI reports
- ConfigurationError: Missing or unreadable configuration
- SchemaError: Malformed plan file
- PreconditionError: Apply refused before touching the repository
- MergeEncounteredError: Merge commit hit while merges are disabled
- ReplayConflictError: Cherry-picking a commit failed during apply
"""


class SmartMsgError(Exception):
    """Base exception for smartmsg errors."""

    pass


class ConfigurationError(SmartMsgError):
    """Raised when required configuration is missing or invalid."""

    pass


class SchemaError(SmartMsgError):
    """Raised when a plan file does not match the expected schema."""

    pass


class PreconditionError(SmartMsgError):
    """Raised when apply cannot start safely."""

    pass


class MergeEncounteredError(SmartMsgError):
    """Raised when a merge commit is replayed with merges disabled."""

    pass


class ReplayConflictError(SmartMsgError):
    """Raised when a commit cannot be replayed onto the new branch."""

    pass
