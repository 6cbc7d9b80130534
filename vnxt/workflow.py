"""Release workflow orchestration.

Runs the release as an ordered step table:
1. Stage working-tree changes (when a staging mode was chosen)
2. Bump the version in package.json
3. Stage the manifest files
4. Commit with the user's message
5. Create the annotated release tag
6. Update CHANGELOG.md (optional)
7. Write release notes (optional)
8. Push the branch with tags (optional)
9. Push the publish trigger tag (with --publish)

The first failing step stops the run; earlier steps are not undone.
The dry-run preview is built from the same table.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from vnxt.config.models import VnxtConfig
from vnxt.exceptions import ManifestError, ValidationError, VnxtError
from vnxt.git import DEFAULT_REMOTE, STAGE_FLAGS
from vnxt.git import operations as git_ops
from vnxt.git import queries as git_queries
from vnxt.manifest import PackageManifest
from vnxt.notes import (
    CHANGELOG_FILE,
    RELEASE_NOTES_DIR,
    render_release_notes,
    update_changelog,
    write_release_notes,
)
from vnxt.options import Intent, StageMode
from vnxt.output import Output
from vnxt.preflight import PreflightOutcome
from vnxt.utils.version import add_tag_prefix, bump_version, normalize_version

PUBLISH_TAG_PREFIX = "publish/"

STAGE_DESCRIPTIONS: dict[str, str] = {
    "tracked": "Stage tracked files only",
    "all": "Stage all changes",
    "interactive": "Interactive selection",
    "patch": "Patch mode",
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class StepResult:
    """Result of a workflow step."""

    success: bool
    message: str
    details: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class ReleaseRecord:
    """What a release actually did, for the summary."""

    old_version: str
    new_version: str
    tag_name: str
    branch: str
    commit_sha: str = ""
    changelog_updated: bool = False
    notes_path: Path | None = None
    pushed: bool = False
    publish_tag: str | None = None


@dataclass(frozen=True)
class ReleasePlan:
    """Everything decided before the first side effect.

    ``current_version`` is None when package.json could not be read; the
    bump step reports that properly, the dry run just shows what it can.
    """

    intent: Intent
    config: VnxtConfig
    branch: str
    stage_mode: StageMode | None
    current_version: str | None
    manifest_files: tuple[str, ...] = ("package.json",)

    @property
    def new_version(self) -> str | None:
        if self.intent.explicit_version is not None:
            return self.intent.explicit_version
        if self.current_version is None:
            return None
        try:
            return bump_version(self.current_version, self.intent.bump_type)
        except ValidationError:
            return None

    @property
    def tag_name(self) -> str:
        if self.new_version is None:
            return f"{self.config.tag_prefix}<new version>"
        return add_tag_prefix(self.new_version, self.config.tag_prefix)

    @property
    def publish_tag(self) -> str:
        return f"{PUBLISH_TAG_PREFIX}{self.tag_name}"


def build_plan(
    project_root: Path,
    config: VnxtConfig,
    intent: Intent,
    outcome: PreflightOutcome,
) -> ReleasePlan:
    """Combine the intent with the state observed during pre-flight."""
    manifest = PackageManifest(project_root)
    try:
        current_version = manifest.get_version()
    except ManifestError:
        current_version = None
    return ReleasePlan(
        intent=intent,
        config=config,
        branch=outcome.branch,
        stage_mode=outcome.stage_mode,
        current_version=current_version,
        manifest_files=tuple(manifest.tracked_files()),
    )


def _describe_bump(plan: ReleasePlan) -> str:
    intent = plan.intent
    label = (
        f"Set version {intent.explicit_version}"
        if intent.explicit_version
        else f"Bump {intent.bump_type} version"
    )
    if plan.current_version and plan.new_version:
        label += f" ({plan.current_version} -> {plan.new_version})"
    return label


def _describe_push(plan: ReleasePlan) -> str:
    return f"Push {plan.branch or 'current branch'} to {DEFAULT_REMOTE} with tags"


@dataclass(frozen=True)
class Step:
    """One row of the step table.

    ``name`` is the ReleaseWorkflow method that performs the step.
    ``skipped`` is shown by the dry run when an optional step is off.
    """

    name: str
    title: str
    enabled: Callable[[ReleasePlan], bool]
    describe: Callable[[ReleasePlan], str]
    skipped: str | None = None


def _always(plan: ReleasePlan) -> bool:
    return True


STEPS: tuple[Step, ...] = (
    Step(
        "stage",
        "Staging files",
        lambda p: p.stage_mode is not None,
        lambda p: f"{STAGE_DESCRIPTIONS[p.stage_mode]} (git add {STAGE_FLAGS[p.stage_mode]})",
    ),
    Step("bump", "Bumping version", _always, _describe_bump),
    Step(
        "stage_manifest",
        "Staging package files",
        _always,
        lambda p: f"Stage {', '.join(p.manifest_files)}",
    ),
    Step(
        "commit",
        "Committing",
        _always,
        lambda p: f'Commit with message: "{p.intent.message}"',
    ),
    Step(
        "tag",
        "Adding tag annotation",
        _always,
        lambda p: f"Create annotated tag {p.tag_name}",
    ),
    Step(
        "changelog",
        f"Updating {CHANGELOG_FILE}",
        lambda p: p.intent.changelog,
        lambda p: f"Update {CHANGELOG_FILE}",
        skipped="(Skipping changelog - use --changelog to enable)",
    ),
    Step(
        "release_notes",
        "Generating release notes",
        lambda p: p.intent.release_notes,
        lambda p: f"Generate release notes file {RELEASE_NOTES_DIR}/{p.tag_name}.md",
        skipped="(Skipping release notes - use --release to enable)",
    ),
    Step(
        "push",
        "Pushing to remote",
        lambda p: p.intent.push,
        _describe_push,
        skipped="(Skipping push - use --push to enable)",
    ),
    Step(
        "publish",
        "Pushing publish tag to trigger npm release",
        lambda p: p.intent.push and p.intent.publish,
        lambda p: f"Create and push {p.publish_tag} to trigger npm publish",
    ),
)


def active_steps(plan: ReleasePlan) -> list[Step]:
    """Steps a real run of this plan performs, in order."""
    return [step for step in STEPS if step.enabled(plan)]


@dataclass
class ReleaseWorkflow:
    """Executes a release plan step by step."""

    project_root: Path
    plan: ReleasePlan
    output: Output
    now: Callable[[], datetime] = utc_now

    # State tracking
    record: ReleaseRecord | None = None
    tag_message: str = ""

    def __post_init__(self) -> None:
        self.manifest = PackageManifest(self.project_root)

    def run(self) -> ReleaseRecord | None:
        """Execute every active step.

        Returns:
            The release record, or None if a step failed
        """
        for step in active_steps(self.plan):
            self.output.step(f"{step.title}...")

            try:
                result: StepResult = getattr(self, step.name)()
            except VnxtError as e:
                result = StepResult(success=False, message=e.message, details=e.details)
                if e.fix_hint:
                    result.details = f"{result.details or ''}\nFix: {e.fix_hint}".lstrip()

            if not result.success:
                self.output.error(f"Error: {result.message}")
                if result.details:
                    self.output.error(result.details)
                return None

            self.output.muted(f"  {result.message}")

        return self.record

    @property
    def _record(self) -> ReleaseRecord:
        if self.record is None:
            raise VnxtError("Version has not been bumped yet")
        return self.record

    def stage(self) -> StepResult:
        mode = self.plan.stage_mode
        if mode is None:
            return StepResult(success=True, message="Nothing to stage")
        git_ops.stage(mode, cwd=self.project_root)
        return StepResult(success=True, message=f"Staged with git add {STAGE_FLAGS[mode]}")

    def bump(self) -> StepResult:
        """Rewrite the manifest version; no commit or tag is created here."""
        old_version = self.manifest.get_version()
        new_version = bump_version(old_version, self.plan.intent.target)

        if new_version == normalize_version(old_version):
            raise ValidationError(
                f"Version not changed: already at {old_version}",
                fix_hint="Pass a different version with --set-version",
            )

        self.manifest.set_version(new_version)
        self.record = ReleaseRecord(
            old_version=old_version,
            new_version=new_version,
            tag_name=add_tag_prefix(new_version, self.plan.config.tag_prefix),
            branch=self.plan.branch,
        )
        return StepResult(
            success=True,
            message=f"Version bumped: {old_version} -> {new_version}",
        )

    def stage_manifest(self) -> StepResult:
        files = self.manifest.tracked_files()
        git_ops.add(files, cwd=self.project_root)
        return StepResult(success=True, message=f"Staged {', '.join(files)}")

    def commit(self) -> StepResult:
        record = self._record
        record.commit_sha = git_ops.commit(
            self.plan.intent.message,
            cwd=self.project_root,
            quiet=self.output.quiet,
        )
        return StepResult(success=True, message=f"Committed {record.commit_sha[:7]}")

    def tag(self) -> StepResult:
        record = self._record
        self.tag_message = f"Version {record.new_version}\n\n{self.plan.intent.message}"
        git_ops.tag(record.tag_name, self.tag_message, cwd=self.project_root)
        return StepResult(success=True, message=f"Tagged {record.tag_name}")

    def _amend_release_commit(self, path: Path) -> None:
        """Fold a file into the release commit and keep the tag on it."""
        record = self._record
        git_ops.add(path.relative_to(self.project_root).as_posix(), cwd=self.project_root)
        record.commit_sha = git_ops.amend(cwd=self.project_root)
        git_ops.move_tag(record.tag_name, self.tag_message, cwd=self.project_root)

    def changelog(self) -> StepResult:
        record = self._record
        try:
            path = update_changelog(
                self.project_root,
                record.new_version,
                self.plan.intent.message,
                self.now().date().isoformat(),
            )
        except (OSError, UnicodeDecodeError) as e:
            return StepResult(
                success=False,
                message=f"Failed to update {CHANGELOG_FILE}",
                details=str(e),
            )

        self._amend_release_commit(path)
        record.changelog_updated = True
        return StepResult(success=True, message=f"Added [{record.new_version}] to {CHANGELOG_FILE}")

    def release_notes(self) -> StepResult:
        record = self._record
        content = render_release_notes(
            tag_name=record.tag_name,
            version=record.new_version,
            message=self.plan.intent.message,
            released_at=self.now(),
            author=git_queries.get_user_name(cwd=self.project_root),
            package_name=self.manifest.get_name(),
            context=self.plan.intent.notes_context,
        )
        try:
            path = write_release_notes(self.project_root, record.tag_name, content)
        except OSError as e:
            return StepResult(
                success=False,
                message="Failed to write release notes",
                details=str(e),
            )

        self._amend_release_commit(path)
        record.notes_path = path.relative_to(self.project_root)
        return StepResult(success=True, message=f"Created: {record.notes_path.as_posix()}")

    def push(self) -> StepResult:
        record = self._record
        git_ops.push(
            DEFAULT_REMOTE,
            record.branch or None,
            follow_tags=True,
            cwd=self.project_root,
            quiet=self.output.quiet,
        )
        record.pushed = True
        return StepResult(success=True, message=f"Pushed {record.tag_name} to {DEFAULT_REMOTE}")

    def publish(self) -> StepResult:
        record = self._record
        publish_tag = f"{PUBLISH_TAG_PREFIX}{record.tag_name}"
        git_ops.tag(publish_tag, cwd=self.project_root)
        git_ops.push_tag(
            publish_tag,
            DEFAULT_REMOTE,
            cwd=self.project_root,
            quiet=self.output.quiet,
        )
        record.publish_tag = publish_tag
        return StepResult(success=True, message=f"Pushed {publish_tag}")
