"""Git state modification operations.

This module provides git operations that modify repository state.
All functions use vnxt.utils.shell.run() for command execution and raise
GitError on failures.
"""

from pathlib import Path

from vnxt.exceptions import GitError
from vnxt.utils.shell import run

# git add flags per staging mode
STAGE_FLAGS: dict[str, str] = {
    "tracked": "-u",
    "all": "-A",
    "interactive": "-i",
    "patch": "-p",
}

# Modes that talk to the user through the terminal
INTERACTIVE_STAGE_MODES = frozenset({"interactive", "patch"})


def stage(mode: str, cwd: Path | None = None) -> None:
    """Stage working-tree changes according to a staging mode.

    Args:
        mode: One of "tracked", "all", "interactive", "patch"
        cwd: Working directory (defaults to current directory)

    Raises:
        GitError: If the mode is unknown or git add fails
    """
    if mode not in STAGE_FLAGS:
        raise GitError(
            f"Unknown staging mode '{mode}'",
            fix_hint=f"Use one of: {', '.join(STAGE_FLAGS)}",
        )

    interactive = mode in INTERACTIVE_STAGE_MODES
    try:
        run(
            ["git", "add", STAGE_FLAGS[mode]],
            cwd=cwd,
            capture=not interactive,
            check=True,
            timeout=None if interactive else 300,
        )
    except Exception as e:
        raise GitError(
            f"Failed to stage files (git add {STAGE_FLAGS[mode]})",
            details=str(e),
            fix_hint="Run 'git status' to inspect the working tree",
        ) from e


def add(files: str | list[str], cwd: Path | None = None) -> None:
    """Add specific files to the index.

    Raises:
        GitError: If git add fails
    """
    file_list = [files] if isinstance(files, str) else files
    try:
        # Use list format to safely handle filenames with spaces/special chars
        run(["git", "add", "--", *file_list], cwd=cwd, check=True)
    except Exception as e:
        raise GitError(
            f"Failed to stage {', '.join(file_list)}",
            details=str(e),
            fix_hint="Ensure the files exist and are not ignored",
        ) from e


def commit(
    message: str,
    cwd: Path | None = None,
    quiet: bool = True,
) -> str:
    """Create a git commit from the index.

    Args:
        message: Commit message, used verbatim
        cwd: Working directory (defaults to current directory)
        quiet: Capture git's output instead of showing it

    Returns:
        Commit SHA of the new commit

    Raises:
        GitError: If commit fails or there is nothing to commit
    """
    try:
        run(
            ["git", "commit", "--cleanup=verbatim", "-m", message],
            cwd=cwd,
            capture=quiet,
            check=True,
        )
        sha_result = run(["git", "rev-parse", "HEAD"], cwd=cwd, check=True)
        return sha_result.stdout.strip()
    except Exception as e:
        raise GitError(
            "Failed to create git commit",
            details=str(e),
            fix_hint="Ensure you have changes staged. Run 'git status' to check.",
        ) from e


def amend(cwd: Path | None = None) -> str:
    """Fold the index into the previous commit, keeping its message.

    Returns:
        SHA of the amended commit

    Raises:
        GitError: If the amend fails
    """
    try:
        run(
            ["git", "commit", "--amend", "--no-edit", "--cleanup=verbatim"],
            cwd=cwd,
            check=True,
        )
        sha_result = run(["git", "rev-parse", "HEAD"], cwd=cwd, check=True)
        return sha_result.stdout.strip()
    except Exception as e:
        raise GitError(
            "Failed to amend the release commit",
            details=str(e),
            fix_hint="Run 'git status' and 'git log -1' to inspect the repository",
        ) from e


def tag(
    name: str,
    message: str | None = None,
    cwd: Path | None = None,
) -> None:
    """Create a git tag on HEAD.

    Args:
        name: Tag name (e.g., "v1.0.12")
        message: Annotation message; None creates a lightweight tag
        cwd: Working directory (defaults to current directory)

    Raises:
        GitError: If tag creation fails or tag already exists
    """
    if message is None:
        cmd = ["git", "tag", name]
    else:
        cmd = ["git", "tag", "-a", "--cleanup=verbatim", "-m", message, name]

    try:
        run(cmd, cwd=cwd, check=True)
    except Exception as e:
        raise GitError(
            f"Failed to create git tag '{name}'",
            details=str(e),
            fix_hint=f"Ensure tag '{name}' doesn't already exist. Run 'git tag -d {name}' to delete it first.",
        ) from e


def move_tag(name: str, message: str, cwd: Path | None = None) -> None:
    """Re-point an existing annotated tag at HEAD, keeping its annotation.

    Raises:
        GitError: If the tag cannot be replaced
    """
    try:
        run(
            ["git", "tag", "-f", "-a", "--cleanup=verbatim", "-m", message, name],
            cwd=cwd,
            check=True,
        )
    except Exception as e:
        raise GitError(
            f"Failed to move git tag '{name}' to the amended commit",
            details=str(e),
            fix_hint=f"Run 'git tag -f -a {name}' manually",
        ) from e


def push(
    remote: str = "origin",
    branch: str | None = None,
    follow_tags: bool = True,
    cwd: Path | None = None,
    quiet: bool = True,
) -> None:
    """Push a branch and its annotated tags to a remote.

    Args:
        remote: Remote name (default: "origin")
        branch: Branch to push (None = git's default push target)
        follow_tags: Also push annotated tags reachable from the pushed commits
        cwd: Working directory (defaults to current directory)
        quiet: Capture git's output instead of showing it

    Raises:
        GitError: If push fails
    """
    cmd = ["git", "push"]
    if follow_tags:
        cmd.append("--follow-tags")
    cmd.append(remote)
    if branch:
        cmd.append(branch)

    try:
        run(cmd, cwd=cwd, capture=quiet, check=True)
    except Exception as e:
        target = branch or "current branch"
        raise GitError(
            f"Failed to push {target} to remote '{remote}'",
            details=str(e),
            fix_hint="Ensure remote exists and you have push access. Check network connectivity.",
        ) from e


def push_tag(
    tag: str,
    remote: str = "origin",
    cwd: Path | None = None,
    quiet: bool = True,
) -> None:
    """Push a specific tag to a remote.

    Raises:
        GitError: If push fails or tag doesn't exist
    """
    try:
        run(
            ["git", "push", remote, f"refs/tags/{tag}"],
            cwd=cwd,
            capture=quiet,
            check=True,
        )
    except Exception as e:
        raise GitError(
            f"Failed to push tag '{tag}' to remote '{remote}'",
            details=str(e),
            fix_hint=f"Ensure tag '{tag}' exists locally. Run 'git tag' to list tags.",
        ) from e
