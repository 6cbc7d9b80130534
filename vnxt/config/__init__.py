"""Configuration management for vnxt."""

from vnxt.config.loader import CONFIG_FILENAMES, load_config
from vnxt.config.models import STAGE_MODES, VnxtConfig

__all__ = [
    "VnxtConfig",
    "STAGE_MODES",
    "CONFIG_FILENAMES",
    "load_config",
]
