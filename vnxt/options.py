"""Release intent resolution.

Command-line flags, configuration defaults and, when no message was
given, interactive answers are merged into one immutable Intent. Each
resolver takes an Intent and returns a new one.
"""

from dataclasses import dataclass, replace
from typing import Literal

from vnxt.config.models import VnxtConfig
from vnxt.exceptions import ValidationError
from vnxt.output import Output
from vnxt.prompt import Prompter, is_yes
from vnxt.utils.version import BUMP_TYPES, is_valid_version, normalize_version

StageMode = Literal["tracked", "all", "interactive", "patch", "prompt"]

# Token a bare --all/-a is normalized to: ask for the mode during preflight
PROMPT_STAGE_MODE = "prompt"

STAGE_MODE_ALIASES: dict[str, StageMode] = {
    "tracked": "tracked",
    "all": "all",
    "a": "all",
    "interactive": "interactive",
    "i": "interactive",
    "patch": "patch",
    "p": "patch",
    PROMPT_STAGE_MODE: "prompt",
}


@dataclass(frozen=True)
class Intent:
    """Everything the user asked for, frozen before preflight.

    Exactly one of ``bump_type`` and ``explicit_version`` is authoritative:
    when ``explicit_version`` is set it wins.
    """

    message: str = ""
    bump_type: str = "patch"
    explicit_version: str | None = None
    type_explicit: bool = False
    push: bool = False
    publish: bool = False
    changelog: bool = False
    release_notes: bool = False
    notes_context: str = ""
    stage_mode: StageMode | None = None
    dry_run: bool = False
    quiet: bool = False

    @property
    def target(self) -> str:
        """Explicit version if given, otherwise the bump type."""
        return self.explicit_version or self.bump_type


@dataclass(frozen=True)
class CliFlags:
    """Raw command-line values; None means the flag was not given."""

    message: str | None = None
    type: str | None = None
    set_version: str | None = None
    dry_run: bool = False
    no_push: bool = False
    push: bool = False
    publish: bool = False
    changelog: bool = False
    stage: str | None = None
    release: bool = False
    notes: str | None = None
    quiet: bool = False


def parse_stage_mode(token: str | None) -> StageMode | None:
    """Validate a staging-mode token (case-insensitive).

    Raises:
        ValidationError: If the token is not a known mode or alias

    Examples:
        >>> parse_stage_mode("I")
        'interactive'
        >>> parse_stage_mode(None) is None
        True
    """
    if token is None:
        return None
    mode = STAGE_MODE_ALIASES.get(token.lower())
    if mode is None:
        raise ValidationError(
            f"Invalid add mode '{token}'",
            details="Use: tracked, all (a), interactive (i), or patch (p)",
            fix_hint="Pass --all without a value to choose from a menu",
        )
    return mode


def parse_explicit_version(value: str | None) -> str | None:
    """Validate and normalize an explicit target version.

    Raises:
        ValidationError: If the value is not valid semver
    """
    if value is None:
        return None
    if not is_valid_version(value):
        raise ValidationError(
            f"Invalid version: '{value}'",
            details="Version must follow semantic versioning: MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]",
            fix_hint="Use a version like '2.0.0' or '2.5.0-beta.1'",
        )
    return normalize_version(value)


def resolve_flags(flags: CliFlags, config: VnxtConfig) -> Intent:
    """Merge flags over configuration defaults (flag > config > fallback)."""
    return Intent(
        message=(flags.message or "").strip(),
        bump_type=flags.type if flags.type is not None else config.default_type,
        explicit_version=parse_explicit_version(flags.set_version),
        type_explicit=flags.type is not None,
        push=not flags.no_push and (flags.push or flags.publish or config.auto_push),
        publish=flags.publish,
        changelog=flags.changelog or config.auto_changelog,
        release_notes=flags.release,
        notes_context=(flags.notes or "").strip(),
        stage_mode=parse_stage_mode(flags.stage),
        dry_run=flags.dry_run,
        quiet=flags.quiet,
    )


def ask_interactive(intent: Intent, prompter: Prompter, output: Output) -> Intent:
    """Fill the intent from prompts when no message was given.

    A "yes" turns an option on; any other answer leaves the value
    already resolved from flags and configuration.

    Raises:
        ValidationError: If the commit message answer is empty
    """
    output.step("Interactive mode")
    output.info()

    message = prompter.ask("Commit message: ")
    if not message:
        raise ValidationError(
            "Commit message is required",
            fix_hint='Pass it with -m "your message" to skip the prompts',
        )
    intent = replace(intent, message=message)

    type_answer = prompter.ask("Version type (patch/minor/major) [auto-detect]: ").lower()
    if type_answer in BUMP_TYPES:
        intent = replace(intent, bump_type=type_answer, type_explicit=True)
    elif type_answer:
        output.warning(f"Ignoring unknown version type '{type_answer}', auto-detecting")

    changelog = is_yes(prompter.ask("Update CHANGELOG.md? (y/n) [n]: "))
    release_notes = is_yes(prompter.ask("Generate release notes? (y/n) [n]: "))
    push = is_yes(prompter.ask("Push to remote? (y/n) [n]: "))
    dry_run = is_yes(prompter.ask("Dry run (preview only)? (y/n) [n]: "))
    output.info()

    return replace(
        intent,
        changelog=intent.changelog or changelog,
        release_notes=intent.release_notes or release_notes,
        push=intent.push or push,
        dry_run=intent.dry_run or dry_run,
    )


def apply_publish(intent: Intent) -> Intent:
    """Publishing implies release notes.

    Push was already settled by resolve_flags, where --no-push wins
    over --publish.
    """
    if not intent.publish:
        return intent
    return replace(intent, release_notes=True)


def ask_notes_context(intent: Intent, prompter: Prompter) -> Intent:
    """Ask for release-notes context when notes are on and none was given."""
    if intent.quiet or not intent.release_notes or intent.notes_context:
        return intent
    context = prompter.ask("Add context to release notes (press Enter to skip): ")
    return replace(intent, notes_context=context)


def resolve_options(
    flags: CliFlags,
    config: VnxtConfig,
    prompter: Prompter,
    output: Output,
) -> Intent:
    """Build the Intent for a run.

    Prompts only when no message flag was given; with ``-m`` the
    resolution never blocks on input.

    Raises:
        ValidationError: For a missing message, bad staging token or bad
            explicit version
    """
    intent = resolve_flags(flags, config)
    interactive = flags.message is None

    if interactive:
        intent = ask_interactive(intent, prompter, output)
    elif not intent.message:
        raise ValidationError(
            "Commit message is required",
            fix_hint='Pass a non-empty message: -m "fix: handle empty input"',
        )

    intent = apply_publish(intent)

    if interactive:
        intent = ask_notes_context(intent, prompter)

    return intent
