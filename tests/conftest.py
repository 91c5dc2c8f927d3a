"""Shared test fixtures and configuration."""

import os
import shutil
import subprocess
import tempfile
from pathlib import Path

import pytest

from smartmsg.git import GitError


class FakeGitRunner:
    """Scripted stand-in for GitRunner.

    Responses and failures are keyed by an argument prefix and the longest
    matching prefix wins. A response is a string, or a list of strings
    consumed in order with the last one repeating. Failures take precedence
    over responses. Unmatched commands succeed with empty output.
    """

    def __init__(self, repo_root="/repo"):
        self.repo_root = Path(repo_root)
        self.responses = {}
        self.failures = {}
        self.calls = []

    def respond(self, prefix, output):
        self.responses[tuple(prefix)] = output if isinstance(output, str) else list(output)
        return self

    def fail(self, prefix, stderr="fatal: scripted failure"):
        self.failures[tuple(prefix)] = stderr
        return self

    @staticmethod
    def _match(table, args):
        best = None
        for prefix in table:
            if tuple(args[: len(prefix)]) == prefix and (best is None or len(prefix) > len(best)):
                best = prefix
        return best

    def run(self, args, env=None, strip=True):
        self.calls.append((list(args), env))

        failure = self._match(self.failures, args)
        if failure is not None:
            stderr = self.failures[failure]
            raise GitError(
                f"Git command failed: git {' '.join(args)}\n{stderr}",
                args=list(args),
                stderr=stderr,
            )

        prefix = self._match(self.responses, args)
        if prefix is None:
            return ""
        output = self.responses[prefix]
        if isinstance(output, list):
            output = output.pop(0) if len(output) > 1 else output[0]
        return output.strip() if strip else output

    def get_repo_root(self):
        return self.repo_root

    @property
    def commands(self):
        return [args for args, _ in self.calls]

    def ran(self, *prefix):
        """Return True if any recorded command starts with prefix."""
        return any(tuple(args[: len(prefix)]) == prefix for args in self.commands)


class GitRepo:
    """A throwaway git repository driven through the real git binary."""

    def __init__(self, path: Path):
        self.path = path

    def git(self, *args, env=None) -> str:
        command_env = os.environ.copy()
        if env:
            command_env.update(env)
        result = subprocess.run(
            ["git", *args],
            cwd=self.path,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
            env=command_env,
        )
        return result.stdout.strip()

    def write(self, name: str, content) -> None:
        file_path = self.path / name
        file_path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            file_path.write_bytes(content)
        else:
            file_path.write_text(content)

    def commit(
        self,
        message: str,
        files=None,
        author="Alice Author <alice@example.com>",
        date="2024-01-01T10:00:00+02:00",
        allow_empty=False,
    ) -> str:
        """Write files, commit them and return the new SHA."""
        for name, content in (files or {}).items():
            self.write(name, content)
        self.git("add", "-A")
        args = ["commit", "-q", "--no-verify", "-m", message, f"--author={author}"]
        if allow_empty:
            args.append("--allow-empty")
        self.git(*args, env={"GIT_AUTHOR_DATE": date})
        return self.head()

    def head(self, ref="HEAD") -> str:
        return self.git("rev-parse", ref)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_git():
    """A FakeGitRunner with no scripted behavior."""
    return FakeGitRunner()


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    """An empty repository on branch main, isolated from user git config."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")

    path = tmp_path / "repo"
    path.mkdir()
    repo = GitRepo(path)
    repo.git("init", "-q")
    repo.git("symbolic-ref", "HEAD", "refs/heads/main")
    repo.git("config", "user.name", "Test Committer")
    repo.git("config", "user.email", "committer@example.com")
    repo.git("config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def config_dir(temp_dir, mocker):
    """Point the global smartmsg config directory at a temp directory."""
    mock_dir = temp_dir / ".smartmsg"
    mocker.patch("smartmsg.global_config._CONFIG_DIR", mock_dir)
    return mock_dir
