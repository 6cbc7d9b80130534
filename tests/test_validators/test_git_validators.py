"""Tests for git pre-flight validators.

Tests the following validators:
- RepositoryValidator: the directory is under git
- WorkingTreeValidator: dirty-tree policy and the staging menu
- BranchValidator: main/master warning
- RemoteValidator: remote presence, fatal only when pushing

These tests mock the git query functions to avoid actual git operations.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from conftest import CapturedOutput, ScriptedPrompter

from vnxt.config.models import VnxtConfig
from vnxt.exceptions import GitError, ValidationError
from vnxt.options import Intent
from vnxt.validators.base import PreflightContext, ValidationSeverity, ValidatorRegistry
from vnxt.validators.git import (
    BranchValidator,
    RemoteValidator,
    RepositoryValidator,
    WorkingTreeValidator,
)


def make_context(
    tmp_path: Path,
    output: CapturedOutput,
    config: VnxtConfig | None = None,
    answers: list[str] | None = None,
    **intent_fields: object,
) -> PreflightContext:
    return PreflightContext(
        project_root=tmp_path,
        config=config or VnxtConfig(),
        intent=Intent(message="fix: x", **intent_fields),  # type: ignore[arg-type]
        prompter=ScriptedPrompter(answers or []),
        output=output,
    )


class TestRegistry:
    def test_fixed_order(self) -> None:
        """Validators run repository, working tree, branch, remote."""
        assert [validator.name for validator in ValidatorRegistry.create_all()] == [
            "git_repository",
            "git_working_tree",
            "git_branch",
            "git_remote",
        ]

    def test_duplicate_name_rejected(self) -> None:
        class Impostor(BranchValidator):
            pass

        with pytest.raises(ValueError, match="already registered"):
            ValidatorRegistry.register(Impostor)


class TestRepositoryValidator:
    def test_inside_repository(self, tmp_path: Path, output: CapturedOutput) -> None:
        with patch("vnxt.validators.git.is_repository", return_value=True):
            result = RepositoryValidator().validate(make_context(tmp_path, output))

        assert result.passed is True

    def test_not_a_repository(self, tmp_path: Path, output: CapturedOutput) -> None:
        """A real directory without git fails the check."""
        result = RepositoryValidator().validate(make_context(tmp_path, output))

        assert result.passed is False
        assert result.message == "Not a git repository"
        assert result.fix_command == "git init"


class TestWorkingTreeValidator:
    """Tests for WorkingTreeValidator."""

    def test_skipped_by_default(self, tmp_path: Path, output: CapturedOutput) -> None:
        assert WorkingTreeValidator().should_run(make_context(tmp_path, output)) is False

    def test_runs_when_clean_tree_required(self, tmp_path: Path, output: CapturedOutput) -> None:
        context = make_context(tmp_path, output, config=VnxtConfig(requireCleanWorkingDir=True))

        assert WorkingTreeValidator().should_run(context) is True

    def test_staging_mode_satisfies_requirement(
        self, tmp_path: Path, output: CapturedOutput
    ) -> None:
        context = make_context(
            tmp_path, output, config=VnxtConfig(requireCleanWorkingDir=True), stage_mode="all"
        )

        assert WorkingTreeValidator().should_run(context) is False

    def test_pending_prompt_always_runs(self, tmp_path: Path, output: CapturedOutput) -> None:
        context = make_context(tmp_path, output, stage_mode="prompt")

        assert WorkingTreeValidator().should_run(context) is True

    def test_clean_tree_passes(self, tmp_path: Path, output: CapturedOutput) -> None:
        context = make_context(tmp_path, output, config=VnxtConfig(requireCleanWorkingDir=True))

        with patch("vnxt.validators.git.get_tracked_changes", return_value=[]):
            result = WorkingTreeValidator().validate(context)

        assert result.passed is True
        assert result.data == {}

    @pytest.mark.parametrize(
        "choice,mode",
        [("1", "tracked"), ("2", "all"), ("3", "interactive"), ("4", "patch")],
    )
    def test_dirty_tree_menu(
        self, tmp_path: Path, output: CapturedOutput, choice: str, mode: str
    ) -> None:
        context = make_context(
            tmp_path, output, config=VnxtConfig(requireCleanWorkingDir=True), answers=[choice]
        )

        with patch("vnxt.validators.git.get_tracked_changes", return_value=[" M index.js"]):
            result = WorkingTreeValidator().validate(context)

        assert result.passed is True
        assert result.data == {"stage_mode": mode}
        assert "uncommitted changes" in output.text
        assert "5. Skip staging" in output.text

    def test_skip_choice(self, tmp_path: Path, output: CapturedOutput) -> None:
        context = make_context(tmp_path, output, stage_mode="prompt", answers=["5"])

        with patch("vnxt.validators.git.get_tracked_changes", return_value=[]):
            result = WorkingTreeValidator().validate(context)

        assert result.severity == ValidationSeverity.WARNING
        assert result.data == {"stage_mode": None}
        assert "uncommitted changes" not in output.text

    @pytest.mark.parametrize("choice", ["", "6", "tracked"])
    def test_invalid_choice_is_fatal(
        self, tmp_path: Path, output: CapturedOutput, choice: str
    ) -> None:
        context = make_context(tmp_path, output, stage_mode="prompt", answers=[choice])

        with patch("vnxt.validators.git.get_tracked_changes", return_value=[]):
            with pytest.raises(ValidationError, match="Invalid choice"):
                WorkingTreeValidator().validate(context)

    def test_git_failure(self, tmp_path: Path, output: CapturedOutput) -> None:
        context = make_context(tmp_path, output, stage_mode="prompt")

        with patch(
            "vnxt.validators.git.get_tracked_changes", side_effect=GitError("status failed")
        ):
            result = WorkingTreeValidator().validate(context)

        assert result.passed is False


class TestBranchValidator:
    @pytest.mark.parametrize("branch", ["main", "master"])
    def test_release_branch(self, tmp_path: Path, output: CapturedOutput, branch: str) -> None:
        with patch("vnxt.validators.git.get_current_branch", return_value=branch):
            result = BranchValidator().validate(make_context(tmp_path, output))

        assert result.severity == ValidationSeverity.INFO
        assert result.data == {"branch": branch}

    def test_other_branch_warns(self, tmp_path: Path, output: CapturedOutput) -> None:
        with patch("vnxt.validators.git.get_current_branch", return_value="feature/x"):
            result = BranchValidator().validate(make_context(tmp_path, output))

        assert result.passed is True
        assert result.severity == ValidationSeverity.WARNING
        assert "feature/x" in result.message


class TestRemoteValidator:
    def test_remote_present(self, tmp_path: Path, output: CapturedOutput) -> None:
        with patch("vnxt.validators.git.has_remote", return_value=True):
            result = RemoteValidator().validate(make_context(tmp_path, output, push=True))

        assert result.passed is True
        assert result.data == {"has_remote": True}

    def test_missing_remote_when_pushing(self, tmp_path: Path, output: CapturedOutput) -> None:
        with patch("vnxt.validators.git.has_remote", return_value=False):
            result = RemoteValidator().validate(make_context(tmp_path, output, push=True))

        assert result.passed is False
        assert "cannot push" in result.message

    def test_missing_remote_without_push(self, tmp_path: Path, output: CapturedOutput) -> None:
        with patch("vnxt.validators.git.has_remote", return_value=False):
            result = RemoteValidator().validate(make_context(tmp_path, output, push=False))

        assert result.passed is True
        assert result.severity == ValidationSeverity.WARNING
