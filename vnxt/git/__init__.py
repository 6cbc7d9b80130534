"""Git operations and utilities.

This module provides a small API over the git commands a release needs.
All operations use vnxt.utils.shell.run() for command execution
and raise GitError on failures.
"""

from vnxt.git.operations import (
    STAGE_FLAGS,
    add,
    amend,
    commit,
    move_tag,
    push,
    push_tag,
    stage,
    tag,
)
from vnxt.git.queries import (
    get_current_branch,
    get_diff_stat,
    get_tracked_changes,
    get_user_name,
    has_remote,
    is_repository,
)

DEFAULT_REMOTE = "origin"

__all__ = [
    "DEFAULT_REMOTE",
    # Query operations
    "is_repository",
    "get_tracked_changes",
    "get_current_branch",
    "has_remote",
    "get_user_name",
    "get_diff_stat",
    # Modification operations
    "STAGE_FLAGS",
    "stage",
    "add",
    "commit",
    "amend",
    "tag",
    "move_tag",
    "push",
    "push_tag",
]
