"""Utility modules for vnxt."""

from vnxt.utils.shell import ShellError, run, strip_ansi
from vnxt.utils.version import (
    BUMP_TYPES,
    SEMVER_PATTERN,
    BumpType,
    VersionTuple,
    add_tag_prefix,
    bump_version,
    get_prerelease,
    is_valid_version,
    normalize_version,
    parse_version,
)

__all__ = [
    # Shell utilities
    "run",
    "strip_ansi",
    "ShellError",
    # Version utilities
    "parse_version",
    "get_prerelease",
    "is_valid_version",
    "bump_version",
    "normalize_version",
    "add_tag_prefix",
    "BumpType",
    "VersionTuple",
    "BUMP_TYPES",
    "SEMVER_PATTERN",
]
