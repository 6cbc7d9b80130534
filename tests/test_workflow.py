"""Tests for the release workflow against real git repositories.

Each test runs the step table on a throwaway npm project and inspects
the resulting commits, tags, files and remote refs.
"""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest
from conftest import CapturedOutput, git

from vnxt.config.models import VnxtConfig
from vnxt.options import Intent
from vnxt.workflow import ReleasePlan, ReleaseWorkflow, active_steps

RELEASED_AT = datetime(2024, 5, 1, 9, 15, 0, tzinfo=timezone.utc)


def make_plan(
    intent: Intent,
    config: VnxtConfig | None = None,
    stage_mode: str | None = None,
    current_version: str | None = "1.0.0",
) -> ReleasePlan:
    return ReleasePlan(
        intent=intent,
        config=config or VnxtConfig(),
        branch="main",
        stage_mode=stage_mode,  # type: ignore[arg-type]
        current_version=current_version,
    )


def release(project: Path, output: CapturedOutput, plan: ReleasePlan):
    workflow = ReleaseWorkflow(
        project_root=project, plan=plan, output=output, now=lambda: RELEASED_AT
    )
    return workflow.run()


def package_version(project: Path) -> str:
    return json.loads((project / "package.json").read_text())["version"]


class TestStepTable:
    """Tests for active_steps."""

    def test_minimal_run(self) -> None:
        plan = make_plan(Intent(message="fix: x"))

        assert [s.name for s in active_steps(plan)] == [
            "bump",
            "stage_manifest",
            "commit",
            "tag",
        ]

    def test_everything_enabled(self) -> None:
        intent = Intent(
            message="fix: x", changelog=True, release_notes=True, push=True, publish=True
        )

        assert [s.name for s in active_steps(make_plan(intent, stage_mode="all"))] == [
            "stage",
            "bump",
            "stage_manifest",
            "commit",
            "tag",
            "changelog",
            "release_notes",
            "push",
            "publish",
        ]


class TestReleasePlan:
    def test_new_version_from_bump_type(self) -> None:
        plan = make_plan(Intent(message="x", bump_type="minor"))

        assert plan.new_version == "1.1.0"
        assert plan.tag_name == "v1.1.0"
        assert plan.publish_tag == "publish/v1.1.0"

    def test_explicit_version_and_prefix(self) -> None:
        plan = make_plan(
            Intent(message="x", explicit_version="2.0.0-rc.1"),
            config=VnxtConfig(tagPrefix="release-"),
        )

        assert plan.tag_name == "release-2.0.0-rc.1"

    def test_unknown_current_version(self) -> None:
        plan = make_plan(Intent(message="x"), current_version=None)

        assert plan.new_version is None
        assert plan.tag_name == "v<new version>"


class TestReleaseWorkflow:
    """End-to-end runs of ReleaseWorkflow."""

    def test_patch_release(self, npm_project: Path, output: CapturedOutput) -> None:
        record = release(npm_project, output, make_plan(Intent(message="fix: typo")))

        assert record is not None
        assert (record.old_version, record.new_version) == ("1.0.0", "1.0.1")
        assert record.tag_name == "v1.0.1"
        assert record.branch == "main"
        assert package_version(npm_project) == "1.0.1"
        assert git(npm_project, "log", "-1", "--format=%B") == "fix: typo"
        assert git(npm_project, "cat-file", "-t", "v1.0.1") == "tag"
        assert (
            git(npm_project, "tag", "-l", "--format=%(contents)", "v1.0.1")
            == "Version 1.0.1\n\nfix: typo"
        )
        assert git(npm_project, "status", "--porcelain") == ""

    @pytest.mark.parametrize(
        "bump_type,expected",
        [("patch", "1.0.1"), ("minor", "1.1.0"), ("major", "2.0.0")],
    )
    def test_bump_types(
        self, npm_project: Path, output: CapturedOutput, bump_type: str, expected: str
    ) -> None:
        record = release(
            npm_project, output, make_plan(Intent(message="release", bump_type=bump_type))
        )

        assert record is not None
        assert package_version(npm_project) == expected

    def test_successive_releases(self, npm_project: Path, output: CapturedOutput) -> None:
        release(npm_project, output, make_plan(Intent(message="a", bump_type="minor")))
        release(npm_project, output, make_plan(Intent(message="b", bump_type="patch")))
        record = release(npm_project, output, make_plan(Intent(message="c", bump_type="major")))

        assert record is not None
        assert (record.old_version, record.new_version) == ("1.1.1", "2.0.0")

    def test_message_kept_verbatim(self, npm_project: Path, output: CapturedOutput) -> None:
        message = 'fix: handle "quoted" $HOME and `ticks`\n\n# not a comment'

        release(npm_project, output, make_plan(Intent(message=message)))

        assert git(npm_project, "log", "-1", "--format=%B") == message

    def test_explicit_version(self, npm_project: Path, output: CapturedOutput) -> None:
        record = release(
            npm_project,
            output,
            make_plan(Intent(message="beta", explicit_version="2.5.0-beta.1")),
        )

        assert record is not None
        assert record.tag_name == "v2.5.0-beta.1"
        assert package_version(npm_project) == "2.5.0-beta.1"

    def test_explicit_version_must_change(self, npm_project: Path, output: CapturedOutput) -> None:
        record = release(
            npm_project, output, make_plan(Intent(message="same", explicit_version="1.0.0"))
        )

        assert record is None
        assert "Version not changed" in output.errors
        assert git(npm_project, "rev-list", "--count", "HEAD") == "1"

    def test_changelog_and_notes_amend_release_commit(
        self, npm_project: Path, output: CapturedOutput
    ) -> None:
        intent = Intent(
            message="feat: dark mode",
            bump_type="minor",
            changelog=True,
            release_notes=True,
            notes_context="Follows the OS theme.",
        )

        record = release(npm_project, output, make_plan(intent))

        assert record is not None
        assert record.changelog_updated is True
        assert record.notes_path == Path("release-notes/v1.1.0.md")
        # One release commit on top of the initial one, tag on it
        assert git(npm_project, "rev-list", "--count", "HEAD") == "2"
        assert git(npm_project, "rev-parse", "v1.1.0^{commit}") == git(
            npm_project, "rev-parse", "HEAD"
        )
        committed = git(npm_project, "show", "--name-only", "--format=", "HEAD").splitlines()
        assert sorted(committed) == ["CHANGELOG.md", "package.json", "release-notes/v1.1.0.md"]
        assert git(npm_project, "log", "-1", "--format=%B") == "feat: dark mode"

        changelog = (npm_project / "CHANGELOG.md").read_text()
        assert changelog == "# Changelog\n\n## [1.1.0] - 2024-05-01\n- feat: dark mode\n"

        notes = (npm_project / "release-notes" / "v1.1.0.md").read_text()
        assert notes.startswith("# Release v1.1.0\n\nReleased: 2024-05-01 at 09:15:00 UTC\n")
        assert "Author: Test User" in notes
        assert "Follows the OS theme." in notes
        assert "npm install test-package@1.1.0" in notes

    def test_stage_tracked_changes(self, npm_project: Path, output: CapturedOutput) -> None:
        (npm_project / "index.js").write_text("module.exports = { fixed: true };\n")
        (npm_project / "untracked.txt").write_text("left alone\n")

        record = release(
            npm_project, output, make_plan(Intent(message="fix: x"), stage_mode="tracked")
        )

        assert record is not None
        committed = git(npm_project, "show", "--name-only", "--format=", "HEAD").splitlines()
        assert sorted(committed) == ["index.js", "package.json"]
        assert "untracked.txt" in git(npm_project, "status", "--porcelain")

    def test_stage_all_changes(self, npm_project: Path, output: CapturedOutput) -> None:
        (npm_project / "new.js").write_text("// new\n")

        release(npm_project, output, make_plan(Intent(message="fix: x"), stage_mode="all"))

        committed = git(npm_project, "show", "--name-only", "--format=", "HEAD").splitlines()
        assert "new.js" in committed

    def test_lockfile_committed(self, npm_project: Path, output: CapturedOutput) -> None:
        (npm_project / "package-lock.json").write_text(
            json.dumps({"name": "test-package", "version": "1.0.0", "packages": {}}) + "\n"
        )
        git(npm_project, "add", "package-lock.json")
        git(npm_project, "commit", "-m", "Add lockfile")

        release(npm_project, output, make_plan(Intent(message="fix: x")))

        committed = git(npm_project, "show", "--name-only", "--format=", "HEAD").splitlines()
        assert sorted(committed) == ["package-lock.json", "package.json"]
        lock = json.loads((npm_project / "package-lock.json").read_text())
        assert lock["version"] == "1.0.1"

    def test_failing_step_stops_run(self, npm_project: Path, output: CapturedOutput) -> None:
        """An existing tag fails the tag step; the changelog is never written."""
        git(npm_project, "tag", "v1.0.1")

        record = release(
            npm_project, output, make_plan(Intent(message="fix: x", changelog=True))
        )

        assert record is None
        assert "Failed to create git tag 'v1.0.1'" in output.errors
        assert not (npm_project / "CHANGELOG.md").exists()
        # No rollback of the commit that already happened
        assert git(npm_project, "log", "-1", "--format=%B") == "fix: x"

    def test_unreadable_changelog_fails_step(self, npm_project: Path, output: CapturedOutput) -> None:
        (npm_project / "CHANGELOG.md").write_bytes(b"# Changelog\n\n\xff\xfe broken\n")

        record = release(
            npm_project, output, make_plan(Intent(message="fix: x", changelog=True))
        )

        assert record is None
        assert "Failed to update CHANGELOG.md" in output.errors
        assert git(npm_project, "tag") == "v1.0.1"

    def test_commit_failure_prevents_amend(self, npm_project: Path, output: CapturedOutput) -> None:
        """Without a manifest nothing is committed and nothing is amended."""
        (npm_project / "package.json").unlink()
        git(npm_project, "commit", "-am", "Remove manifest")

        record = release(
            npm_project, output, make_plan(Intent(message="fix: x", changelog=True))
        )

        assert record is None
        assert "package.json not found" in output.errors
        assert git(npm_project, "log", "-1", "--format=%B") == "Remove manifest"

    def test_push_and_publish(
        self, npm_project: Path, remote_repo: Path, output: CapturedOutput
    ) -> None:
        intent = Intent(message="feat: x", bump_type="minor", push=True, publish=True)

        record = release(npm_project, output, make_plan(intent))

        assert record is not None
        assert record.pushed is True
        assert record.publish_tag == "publish/v1.1.0"
        remote_refs = git(npm_project, "ls-remote", str(remote_repo))
        assert "refs/heads/main" in remote_refs
        assert "refs/tags/v1.1.0" in remote_refs
        assert "refs/tags/publish/v1.1.0" in remote_refs
        assert git(npm_project, "cat-file", "-t", "publish/v1.1.0") == "commit"

    def test_push_without_publish(
        self, npm_project: Path, remote_repo: Path, output: CapturedOutput
    ) -> None:
        record = release(npm_project, output, make_plan(Intent(message="fix: x", push=True)))

        assert record is not None
        assert record.publish_tag is None
        remote_refs = git(npm_project, "ls-remote", str(remote_repo))
        assert "refs/tags/v1.0.1" in remote_refs
        assert "publish/" not in remote_refs
