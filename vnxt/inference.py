"""Bump type inference from conventional commit prefixes.

The first matching rule wins:

    major: / MAJOR:            -> major
    minor: / MINOR:            -> minor
    patch: / PATCH:            -> patch
    feat: / feature:           -> minor
    fix:                       -> patch
    BREAKING (anywhere)
      or breaking:             -> major

A message matching no rule keeps the configured default type.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace

from vnxt.exceptions import ValidationError
from vnxt.options import Intent
from vnxt.utils.version import BUMP_TYPES


@dataclass(frozen=True)
class InferenceRule:
    """A commit message predicate and the bump type it implies."""

    bump_type: str
    matches: Callable[[str], bool]
    reason: str | None = None

    def describe(self) -> str:
        label = f"{self.bump_type} version bump"
        return f"{label} ({self.reason})" if self.reason else label


def _prefix(*prefixes: str) -> Callable[[str], bool]:
    return lambda message: message.startswith(prefixes)


INFERENCE_RULES: tuple[InferenceRule, ...] = (
    InferenceRule("major", _prefix("major:", "MAJOR:")),
    InferenceRule("minor", _prefix("minor:", "MINOR:")),
    InferenceRule("patch", _prefix("patch:", "PATCH:")),
    InferenceRule("minor", _prefix("feat:", "feature:"), "feature"),
    InferenceRule("patch", _prefix("fix:"), "fix"),
    InferenceRule(
        "major",
        lambda message: "BREAKING" in message or message.startswith("breaking:"),
        "breaking change",
    ),
)


def match_rule(message: str) -> InferenceRule | None:
    """Return the first rule matching the message, or None.

    Examples:
        >>> match_rule("feat: dark mode").bump_type
        'minor'
        >>> match_rule("update docs") is None
        True
    """
    for rule in INFERENCE_RULES:
        if rule.matches(message):
            return rule
    return None


def infer_bump_type(intent: Intent) -> tuple[Intent, InferenceRule | None]:
    """Apply inference unless the version or type was given explicitly.

    Returns:
        The (possibly updated) intent and the rule that fired, if any

    Raises:
        ValidationError: If no explicit version is set and the resulting
            bump type is not patch, minor or major
    """
    rule = None
    if intent.explicit_version is None and not intent.type_explicit:
        rule = match_rule(intent.message)
        if rule is not None:
            intent = replace(intent, bump_type=rule.bump_type)

    if intent.explicit_version is None and intent.bump_type not in BUMP_TYPES:
        raise ValidationError(
            f"Invalid version type: '{intent.bump_type}'",
            details="Version type must be patch, minor, or major",
            fix_hint="Use --type patch|minor|major or set defaultType in .vnxtrc.json",
        )
    return intent, rule
