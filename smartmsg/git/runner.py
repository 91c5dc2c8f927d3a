"""Git command runner.

Contains:
- GitRunner: Run git commands against one working tree and return output
"""

import logging
import os
import subprocess
from pathlib import Path

from smartmsg.git.exceptions import GitError

LOG = logging.getLogger(__name__)


class GitRunner:
    """Narrow adapter around the git command-line tool.

    Every call is synchronous. A non-zero exit status raises GitError
    carrying the failing invocation and git's stderr verbatim; nothing is
    retried.
    """

    def __init__(self, cwd: str | Path | None = None):
        """Initialize the runner.

        Args:
            cwd: Working directory for git commands. Defaults to the
                current process directory.
        """
        self.cwd = str(cwd) if cwd is not None else None

    def run(
        self,
        args: list[str],
        env: dict[str, str] | None = None,
        strip: bool = True,
    ) -> str:
        """Run a git command and return its output.

        Args:
            args: List of arguments to pass to git.
            env: Extra environment variables layered over os.environ.
            strip: Strip surrounding whitespace from stdout. Disable for
                output that uses control characters as delimiters.

        Returns:
            The stdout of the git command, decoded as UTF-8 with
            undecodable bytes replaced.

        Raises:
            GitError: If the command fails or git cannot be executed.
        """
        command_env = None
        if env:
            command_env = os.environ.copy()
            command_env.update(env)

        LOG.debug("Running git command: git %s", " ".join(args))
        try:
            result = subprocess.run(
                ["git"] + args,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=True,
                cwd=self.cwd,
                env=command_env,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise GitError(
                f"Git command failed: git {' '.join(args)}\n{stderr}",
                args=args,
                stderr=stderr,
            )
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH.", args=args)
        return result.stdout.strip() if strip else result.stdout

    def get_repo_root(self) -> Path:
        """Get the root directory of the repository.

        Raises:
            GitError: If not in a git repository.
        """
        try:
            return Path(self.run(["rev-parse", "--show-toplevel"]))
        except GitError:
            raise GitError("Not in a git repository. Please run this command from within a git repo.")
