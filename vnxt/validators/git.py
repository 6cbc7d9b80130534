"""Git state validators for pre-flight checks.

Registered in the order they must run:
- Repository presence
- Working tree cleanliness (may ask how to stage)
- Branch identity
- Remote presence
"""

from typing import ClassVar

from vnxt.exceptions import GitError, ValidationError
from vnxt.git import (
    DEFAULT_REMOTE,
    get_current_branch,
    get_tracked_changes,
    has_remote,
    is_repository,
)
from vnxt.options import PROMPT_STAGE_MODE
from vnxt.validators.base import (
    PreflightContext,
    ValidationResult,
    Validator,
    ValidatorRegistry,
)

RELEASE_BRANCHES = ("main", "master")

# Staging menu: choice -> (mode, label); mode None skips staging
STAGING_MENU: dict[str, tuple[str | None, str]] = {
    "1": ("tracked", "Tracked files only (git add -u)"),
    "2": ("all", "All changes (git add -A)"),
    "3": ("interactive", "Interactive selection (git add -i)"),
    "4": ("patch", "Patch mode (git add -p)"),
    "5": (None, "Skip staging (continue without staging)"),
}


@ValidatorRegistry.register
class RepositoryValidator(Validator):
    """Validates that the working directory is under git."""

    name: ClassVar[str] = "git_repository"
    description: ClassVar[str] = "Check that the directory is a git repository"

    def validate(self, context: PreflightContext) -> ValidationResult:
        try:
            if is_repository(cwd=context.project_root):
                return ValidationResult.success("Git repository found")
        except GitError as e:
            return ValidationResult.error(
                message="Failed to run git",
                details=str(e),
                fix_command="git --version",
            )
        return ValidationResult.error(
            message="Not a git repository",
            details=f"{context.project_root} is not inside a git work tree",
            fix_command="git init",
        )


@ValidatorRegistry.register
class WorkingTreeValidator(Validator):
    """Checks tracked-file modifications and settles the staging mode.

    Runs when a clean tree is required and no staging mode was chosen,
    or when the user asked to be prompted for the mode (bare ``--all``).
    Uncommitted changes or a pending prompt open the staging menu.
    """

    name: ClassVar[str] = "git_working_tree"
    description: ClassVar[str] = "Check tracked files for uncommitted changes"

    def should_run(self, context: PreflightContext) -> bool:
        stage_mode = context.intent.stage_mode
        if stage_mode == PROMPT_STAGE_MODE:
            return True
        return context.config.require_clean_working_dir and stage_mode is None

    def validate(self, context: PreflightContext) -> ValidationResult:
        """Ask how to stage when the tree is dirty or a prompt is pending.

        Raises:
            ValidationError: If the menu selection is not 1-5
        """
        try:
            changes = get_tracked_changes(cwd=context.project_root)
        except GitError as e:
            return ValidationResult.error(
                message="Failed to check git status",
                details=str(e),
                fix_command="git status",
            )

        pending = context.intent.stage_mode == PROMPT_STAGE_MODE
        if not changes and not pending:
            return ValidationResult.success("Working directory is clean")

        output = context.output
        if changes:
            output.warning("You have uncommitted changes.")
            output.info()
        output.info("How would you like to stage files?")
        output.info()
        for choice, (_, label) in STAGING_MENU.items():
            output.info(f"  {choice}. {label}")
        output.info()

        choice = context.prompter.ask("Select [1-5]: ")
        if choice not in STAGING_MENU:
            raise ValidationError(
                "Invalid choice. Exiting.",
                details=f"Expected a number from 1 to 5, got '{choice}'",
                fix_hint="Pass the mode directly, e.g. --all tracked",
            )

        mode, label = STAGING_MENU[choice]
        if mode is None:
            return ValidationResult.warning(
                "Skipping file staging. Ensure files are staged manually.",
                data={"stage_mode": None},
            )
        return ValidationResult.success(f"Staging: {label}", data={"stage_mode": mode})


@ValidatorRegistry.register
class BranchValidator(Validator):
    """Warns when releasing from a branch other than main or master."""

    name: ClassVar[str] = "git_branch"
    description: ClassVar[str] = "Check if on main or master"

    def validate(self, context: PreflightContext) -> ValidationResult:
        try:
            branch = get_current_branch(cwd=context.project_root)
        except GitError as e:
            return ValidationResult.error(
                message="Failed to determine current branch",
                details=str(e),
                fix_command="git branch --show-current",
            )

        if branch in RELEASE_BRANCHES:
            return ValidationResult.success(f"On branch {branch}", data={"branch": branch})
        return ValidationResult.warning(
            f"You're on branch '{branch}', not main/master",
            data={"branch": branch},
        )


@ValidatorRegistry.register
class RemoteValidator(Validator):
    """Checks that the origin remote is configured.

    A missing remote only blocks the release when pushing was requested.
    """

    name: ClassVar[str] = "git_remote"
    description: ClassVar[str] = "Check that a remote is configured"

    def validate(self, context: PreflightContext) -> ValidationResult:
        if has_remote(DEFAULT_REMOTE, cwd=context.project_root):
            return ValidationResult.success(
                f"Remote '{DEFAULT_REMOTE}' configured", data={"has_remote": True}
            )
        if context.intent.push:
            return ValidationResult.error(
                message="No remote repository configured, cannot push",
                details=f"git remote '{DEFAULT_REMOTE}' is not set",
                fix_command=f"git remote add {DEFAULT_REMOTE} <url>  (or pass --no-push)",
            )
        return ValidationResult.warning(
            "No remote repository configured", data={"has_remote": False}
        )
