"""Pytest fixtures for vnxt tests.

Provides common fixtures for:
- Temporary project directories
- Git repositories (with and without a remote)
- npm projects with package.json
- Scripted prompts and captured output
"""

import io
import json
import subprocess
from collections.abc import Iterable
from pathlib import Path

import pytest
from rich.console import Console

from vnxt.output import Output


def git(cwd: Path, *args: str) -> str:
    """Run a git command in cwd and return its stripped stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


class ScriptedPrompter:
    """Prompter returning canned answers in order; records every question."""

    def __init__(self, answers: Iterable[str] = ()) -> None:
        self.answers = list(answers)
        self.questions: list[str] = []

    def ask(self, question: str) -> str:
        self.questions.append(question)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {question!r}")
        return self.answers.pop(0)


class CapturedOutput(Output):
    """Output writing to in-memory buffers."""

    @classmethod
    def capture(cls, quiet: bool = False) -> "CapturedOutput":
        # Wide consoles so long lines are not wrapped
        return cls(
            console=Console(
                file=io.StringIO(), quiet=quiet, no_color=True, highlight=False, width=200
            ),
            err_console=Console(
                file=io.StringIO(), no_color=True, highlight=False, width=200
            ),
        )

    @property
    def text(self) -> str:
        return self.console.file.getvalue()

    @property
    def errors(self) -> str:
        return self.err_console.file.getvalue()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a temporary project directory.

    Returns:
        Path to project directory
    """
    project = tmp_path / "test-project"
    project.mkdir()
    return project


@pytest.fixture
def git_repo(project_dir: Path) -> Path:
    """Create a git repository on branch main in the project directory.

    Returns:
        Path to git repository
    """
    git(project_dir, "init")
    git(project_dir, "symbolic-ref", "HEAD", "refs/heads/main")
    git(project_dir, "config", "user.email", "test@test.com")
    git(project_dir, "config", "user.name", "Test User")
    git(project_dir, "config", "commit.gpgsign", "false")
    git(project_dir, "config", "tag.gpgsign", "false")
    return project_dir


@pytest.fixture
def npm_project(git_repo: Path) -> Path:
    """Create a committed Node.js project at version 1.0.0.

    Returns:
        Path to project directory
    """
    package_json = {
        "name": "test-package",
        "version": "1.0.0",
        "description": "Test package",
        "main": "index.js",
    }
    (git_repo / "package.json").write_text(json.dumps(package_json, indent=2) + "\n")
    (git_repo / "index.js").write_text("module.exports = {};\n")

    git(git_repo, "add", ".")
    git(git_repo, "commit", "-m", "Initial commit")
    return git_repo


@pytest.fixture
def remote_repo(tmp_path: Path, npm_project: Path) -> Path:
    """Attach a bare repository as origin of npm_project.

    Returns:
        Path to the bare remote repository
    """
    remote = tmp_path / "remote.git"
    subprocess.run(
        ["git", "init", "--bare", str(remote)],
        capture_output=True,
        check=True,
    )
    git(npm_project, "remote", "add", "origin", str(remote))
    return remote


@pytest.fixture
def output() -> CapturedOutput:
    """Output sink capturing normal and error text."""
    return CapturedOutput.capture()
