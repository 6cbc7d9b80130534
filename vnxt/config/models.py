"""Pydantic v2 configuration model for .vnxtrc files.

The file uses camelCase keys (``autoChangelog``); code reads the
snake_case attributes (``config.auto_changelog``). Every key has a
default, so an override file only replaces the keys it mentions.
Unknown keys are kept as extra attributes and otherwise ignored.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

STAGE_MODES: tuple[str, ...] = ("tracked", "all", "interactive", "patch")


class VnxtConfig(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        populate_by_name=True,
    )

    auto_changelog: bool = Field(
        default=True,
        alias="autoChangelog",
        description="Update CHANGELOG.md on every release",
    )
    default_type: str = Field(
        default="patch",
        alias="defaultType",
        description="Bump type used when the message has no recognized prefix",
    )
    require_clean_working_dir: bool = Field(
        default=False,
        alias="requireCleanWorkingDir",
        description="Ask how to stage when tracked files have uncommitted changes",
    )
    auto_push: bool = Field(
        default=True,
        alias="autoPush",
        description="Push commits and tags after releasing",
    )
    default_stage_mode: str = Field(
        default="tracked",
        alias="defaultStageMode",
        description="Staging mode (tracked, all, interactive, patch)",
    )
    tag_prefix: str = Field(
        default="v",
        alias="tagPrefix",
        description="Prefix for git tags (e.g., 'v' for v1.0.0)",
    )
    colors: bool = Field(
        default=True,
        description="Colorize terminal output",
    )

    @field_validator("default_stage_mode")
    @classmethod
    def validate_default_stage_mode(cls, v: str) -> str:
        mode = v.lower()
        if mode not in STAGE_MODES:
            raise ValueError(f"defaultStageMode must be one of: {', '.join(STAGE_MODES)}")
        return mode

    @field_validator("tag_prefix")
    @classmethod
    def validate_tag_prefix(cls, v: str) -> str:
        if any(ch.isspace() for ch in v) or any(ch in v for ch in "~^:?*[\\"):
            raise ValueError("tagPrefix must not contain whitespace or ~^:?*[\\")
        return v
