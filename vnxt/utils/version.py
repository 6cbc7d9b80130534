"""Version parsing, validation, and bumping utilities.

All version strings follow semantic versioning: MAJOR.MINOR.PATCH with
optional pre-release (``-beta.1``) and build (``+sha.5114f85``) parts.
Tags carry a configurable prefix (e.g. ``v1.2.3``).
"""

import re
from typing import Literal

from vnxt.exceptions import ValidationError

BumpType = Literal["major", "minor", "patch"]
VersionTuple = tuple[int, int, int]

BUMP_TYPES: tuple[str, ...] = ("patch", "minor", "major")

# MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD], optional leading 'v'
SEMVER_PATTERN = re.compile(
    r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


def _match(version_str: str) -> re.Match[str]:
    if not version_str or not version_str.strip():
        raise ValidationError(
            "Empty version string",
            details="Version string cannot be empty or whitespace",
            fix_hint="Provide a valid semantic version (e.g., '1.2.3')",
        )

    match = SEMVER_PATTERN.match(version_str.strip())
    if not match:
        raise ValidationError(
            f"Invalid version format: '{version_str}'",
            details="Version must follow semantic versioning: MAJOR.MINOR.PATCH[-PRERELEASE]",
            fix_hint="Use a version like '1.2.3' or '2.0.0-beta.1'",
        )
    return match


def parse_version(version_str: str) -> VersionTuple:
    """Parse a semantic version string into a tuple of integers.

    Pre-release and build metadata are accepted and ignored.

    Args:
        version_str: Version string to parse (e.g., '1.2.3', 'v1.2.3-rc.1')

    Returns:
        Tuple of (major, minor, patch) as integers

    Raises:
        ValidationError: If version string doesn't match semver format

    Examples:
        >>> parse_version('1.2.3')
        (1, 2, 3)
        >>> parse_version('v2.0.0-beta.1')
        (2, 0, 0)
    """
    match = _match(version_str)
    return (int(match.group(1)), int(match.group(2)), int(match.group(3)))


def get_prerelease(version_str: str) -> str | None:
    """Return the pre-release part of a version, or None.

    Examples:
        >>> get_prerelease('1.1.0-beta.2')
        'beta.2'
        >>> get_prerelease('1.1.0') is None
        True
    """
    return _match(version_str).group(4)


def is_valid_version(version_str: str) -> bool:
    """Check if a version string is valid semver.

    Examples:
        >>> is_valid_version('1.2.3')
        True
        >>> is_valid_version('2.5.0-beta.1')
        True
        >>> is_valid_version('1.2')
        False
    """
    if not version_str or not version_str.strip():
        return False
    return SEMVER_PATTERN.match(version_str.strip()) is not None


def normalize_version(version_str: str) -> str:
    """Normalize a version string by removing the 'v' prefix and whitespace.

    Examples:
        >>> normalize_version(' v1.2.3-rc.1 ')
        '1.2.3-rc.1'
    """
    match = _match(version_str)
    normalized = f"{match.group(1)}.{match.group(2)}.{match.group(3)}"
    if match.group(4):
        normalized += f"-{match.group(4)}"
    if match.group(5):
        normalized += f"+{match.group(5)}"
    return normalized


def bump_version(current: str, bump_type: BumpType | str) -> str:
    """Bump a version string according to semantic versioning rules.

    A pre-release current version is released rather than skipped past,
    the same way ``npm version`` does it: ``1.1.0-beta.1`` bumped by minor
    becomes ``1.1.0``, by patch ``1.1.0``, by major ``2.0.0``.

    Args:
        current: Current version string (e.g., '1.2.3')
        bump_type: 'major', 'minor', 'patch' or an explicit version string

    Returns:
        New version string without prefix

    Raises:
        ValidationError: If current version or bump_type is invalid

    Examples:
        >>> bump_version('1.0.0', 'patch')
        '1.0.1'
        >>> bump_version('1.0.0', 'minor')
        '1.1.0'
        >>> bump_version('1.1.1', 'major')
        '2.0.0'
        >>> bump_version('1.0.0', '2.5.0-beta.1')
        '2.5.0-beta.1'
    """
    if bump_type not in BUMP_TYPES:
        if is_valid_version(bump_type):
            return normalize_version(bump_type)
        raise ValidationError(
            f"Invalid bump type or version: '{bump_type}'",
            details="Bump type must be 'major', 'minor', 'patch', or a valid version string",
            fix_hint="Use 'major', 'minor', 'patch', or a version like '2.0.0'",
        )

    major, minor, patch = parse_version(current)
    prerelease = get_prerelease(current)

    if bump_type == "major":
        if prerelease and minor == 0 and patch == 0:
            return f"{major}.0.0"
        return f"{major + 1}.0.0"
    if bump_type == "minor":
        if prerelease and patch == 0:
            return f"{major}.{minor}.0"
        return f"{major}.{minor + 1}.0"
    if prerelease:
        return f"{major}.{minor}.{patch}"
    return f"{major}.{minor}.{patch + 1}"


def add_tag_prefix(version: str, prefix: str = "v") -> str:
    """Build a tag name from a version and a prefix.

    Examples:
        >>> add_tag_prefix('1.2.3')
        'v1.2.3'
        >>> add_tag_prefix('1.2.3', 'release-')
        'release-1.2.3'
        >>> add_tag_prefix('1.2.3', '')
        '1.2.3'
    """
    return f"{prefix}{normalize_version(version)}"


__all__ = [
    "parse_version",
    "get_prerelease",
    "is_valid_version",
    "normalize_version",
    "bump_version",
    "add_tag_prefix",
    "BumpType",
    "VersionTuple",
    "BUMP_TYPES",
    "SEMVER_PATTERN",
]
