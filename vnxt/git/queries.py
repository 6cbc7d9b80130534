"""Git state query operations.

This module provides read-only git operations for inspecting repository state.
All functions use vnxt.utils.shell.run() for command execution and raise
GitError on failures.
"""

from pathlib import Path

from vnxt.exceptions import GitError
from vnxt.utils.shell import run


def is_repository(cwd: Path | None = None) -> bool:
    """Check if the directory is inside a git work tree.

    Args:
        cwd: Working directory (defaults to current directory)

    Returns:
        True if git recognizes the directory as part of a work tree
    """
    try:
        result = run(
            ["git", "rev-parse", "--is-inside-work-tree"], cwd=cwd, check=False
        )
    except FileNotFoundError as e:
        raise GitError(
            "git executable not found",
            details=str(e),
            fix_hint="Install git and make sure it is on PATH",
        ) from e
    return result.returncode == 0 and result.stdout.strip() == "true"


def get_tracked_changes(cwd: Path | None = None) -> list[str]:
    """Get tracked files with uncommitted changes (untracked files ignored).

    Args:
        cwd: Working directory (defaults to current directory)

    Returns:
        Porcelain status lines, empty when tracked files are clean

    Raises:
        GitError: If git status command fails
    """
    try:
        result = run(
            ["git", "status", "--porcelain", "--untracked-files=no"],
            cwd=cwd,
            check=True,
        )
        return [line for line in result.stdout.splitlines() if line.strip()]
    except Exception as e:
        raise GitError(
            "Failed to check git working directory status",
            details=str(e),
            fix_hint="Ensure you are in a git repository and git is installed",
        ) from e


def get_current_branch(cwd: Path | None = None) -> str:
    """Get the name of the current git branch.

    Args:
        cwd: Working directory (defaults to current directory)

    Returns:
        Current branch name (e.g., "main"); "HEAD" when detached

    Raises:
        GitError: If unable to determine current branch
    """
    try:
        result = run(["git", "branch", "--show-current"], cwd=cwd, check=True)
        branch = result.stdout.strip()
        if not branch:
            # Detached HEAD
            result = run(
                ["git", "rev-parse", "--abbrev-ref", "HEAD"], cwd=cwd, check=True
            )
            branch = result.stdout.strip()
        return branch
    except Exception as e:
        raise GitError(
            "Failed to get current branch name",
            details=str(e),
            fix_hint="Ensure you are in a git repository with at least one commit",
        ) from e


def has_remote(remote: str = "origin", cwd: Path | None = None) -> bool:
    """Check if a git remote is configured (no network access).

    Args:
        remote: Name of the remote (default: "origin")
        cwd: Working directory (defaults to current directory)

    Returns:
        True if the remote has a URL configured
    """
    result = run(["git", "remote", "get-url", remote], cwd=cwd, check=False)
    return result.returncode == 0


def get_user_name(cwd: Path | None = None) -> str | None:
    """Get the configured git user name, or None when unset."""
    result = run(["git", "config", "user.name"], cwd=cwd, check=False)
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def get_diff_stat(ref: str = "HEAD~1", cwd: Path | None = None) -> str | None:
    """Get a --stat summary of the changes between ref and HEAD.

    Args:
        ref: Base reference to diff against (default: the previous commit)
        cwd: Working directory (defaults to current directory)

    Returns:
        The diffstat text, or None when ref cannot be resolved
        (e.g. the release commit is the first commit)
    """
    result = run(["git", "diff", ref, "HEAD", "--stat"], cwd=cwd, check=False)
    if result.returncode != 0:
        return None
    return result.stdout.rstrip()
