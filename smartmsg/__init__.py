"""AI-assisted commit message rewriting for git history."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("git-smartmsg")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
