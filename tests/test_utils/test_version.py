"""Tests for version parsing and bumping."""

import pytest

from vnxt.exceptions import ValidationError
from vnxt.utils.version import (
    add_tag_prefix,
    bump_version,
    get_prerelease,
    is_valid_version,
    normalize_version,
    parse_version,
)


class TestParseVersion:
    """Tests for parse_version and friends."""

    def test_plain_version(self) -> None:
        assert parse_version("1.2.3") == (1, 2, 3)

    def test_prefix_and_prerelease_ignored(self) -> None:
        assert parse_version("v2.0.0-beta.1") == (2, 0, 0)

    @pytest.mark.parametrize("bad", ["", "   ", "1.2", "1.2.3.4", "01.2.3", "latest"])
    def test_invalid(self, bad: str) -> None:
        with pytest.raises(ValidationError):
            parse_version(bad)

    def test_prerelease_part(self) -> None:
        assert get_prerelease("1.1.0-rc.2+build.7") == "rc.2"
        assert get_prerelease("1.1.0") is None

    @pytest.mark.parametrize(
        "version,valid",
        [
            ("1.0.0", True),
            ("2.5.0-beta.1", True),
            ("1.0.0+sha.5114f85", True),
            ("v3.0.0", True),
            ("1.0", False),
            ("1.0.0-", False),
        ],
    )
    def test_is_valid_version(self, version: str, valid: bool) -> None:
        assert is_valid_version(version) is valid

    def test_normalize_keeps_prerelease_and_build(self) -> None:
        assert normalize_version(" v1.2.3-rc.1+exp.sha ") == "1.2.3-rc.1+exp.sha"


class TestBumpVersion:
    """Tests for bump_version."""

    @pytest.mark.parametrize(
        "current,bump,expected",
        [
            ("1.0.0", "patch", "1.0.1"),
            ("1.0.0", "minor", "1.1.0"),
            ("1.1.0", "patch", "1.1.1"),
            ("1.1.1", "major", "2.0.0"),
            ("0.9.9", "minor", "0.10.0"),
        ],
    )
    def test_class_bumps(self, current: str, bump: str, expected: str) -> None:
        assert bump_version(current, bump) == expected

    @pytest.mark.parametrize(
        "current,bump,expected",
        [
            ("1.1.0-beta.1", "minor", "1.1.0"),
            ("1.1.0-beta.1", "patch", "1.1.0"),
            ("1.1.0-beta.1", "major", "2.0.0"),
            ("2.0.0-rc.1", "major", "2.0.0"),
            ("1.1.1-beta.1", "minor", "1.2.0"),
        ],
    )
    def test_prerelease_bumps_follow_npm(self, current: str, bump: str, expected: str) -> None:
        """A pre-release is released rather than skipped past."""
        assert bump_version(current, bump) == expected

    def test_explicit_version(self) -> None:
        assert bump_version("1.0.0", "2.5.0-beta.1") == "2.5.0-beta.1"
        assert bump_version("1.0.0", "v3.0.0") == "3.0.0"

    def test_invalid_bump(self) -> None:
        with pytest.raises(ValidationError, match="Invalid bump type"):
            bump_version("1.0.0", "huge")


class TestAddTagPrefix:
    """Tests for add_tag_prefix."""

    def test_default_prefix(self) -> None:
        assert add_tag_prefix("1.2.3") == "v1.2.3"

    def test_custom_and_empty_prefix(self) -> None:
        assert add_tag_prefix("1.2.3", "release-") == "release-1.2.3"
        assert add_tag_prefix("1.2.3", "") == "1.2.3"
