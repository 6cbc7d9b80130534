"""Configuration file loading utilities.

Looks for a project-local override file and merges it over the
built-in defaults. A missing file is not an error; a malformed one is.
"""

import json
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from vnxt.config.models import VnxtConfig
from vnxt.exceptions import ConfigurationError

CONFIG_FILENAMES: tuple[str, ...] = (
    ".vnxtrc.json",
    ".vnxtrc.yml",
    ".vnxtrc.yaml",
    ".vnxtrc.toml",
)


def load_json(path: Path) -> Any:
    """Load a JSON configuration file.

    Raises:
        ConfigurationError: If file cannot be read or parsed
    """
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {path}") from None
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in {path}",
            details=str(e),
            fix_hint="Check JSON syntax at the indicated line",
        ) from e


def load_yaml(path: Path) -> Any:
    """Load a YAML configuration file.

    Raises:
        ConfigurationError: If file cannot be read or parsed
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if data is not None else {}
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in {path}",
            details=str(e),
            fix_hint="Check YAML syntax at the indicated line",
        ) from e


def load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML configuration file.

    Raises:
        ConfigurationError: If file cannot be read or parsed
    """
    try:
        with open(path, "rb") as f:
            data: dict[str, Any] = tomllib.load(f)
            return data
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {path}") from None
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in {path}",
            details=str(e),
            fix_hint="Check TOML syntax at the indicated line",
        ) from e


def find_config_file(project_root: Path) -> Path | None:
    """Return the first override file present in project_root, if any."""
    for name in CONFIG_FILENAMES:
        candidate = project_root / name
        if candidate.is_file():
            return candidate
    return None


def load_config(
    path: Path | None = None,
    project_root: Path | None = None,
) -> VnxtConfig:
    """Build the configuration from defaults and an optional override file.

    Search order if path not specified:
    1. .vnxtrc.json
    2. .vnxtrc.yml
    3. .vnxtrc.yaml
    4. .vnxtrc.toml

    Args:
        path: Explicit path to an override file (must exist)
        project_root: Project root directory (defaults to cwd)

    Returns:
        Validated, immutable VnxtConfig

    Raises:
        ConfigurationError: If the override file is malformed or invalid
    """
    if project_root is None:
        project_root = Path.cwd()

    config_path: Path | None
    if path is not None:
        config_path = Path(path)
        if not config_path.is_absolute():
            config_path = project_root / config_path
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                fix_hint=f"Create the file or drop the explicit path to use {CONFIG_FILENAMES[0]}",
            )
    else:
        config_path = find_config_file(project_root)

    if config_path is None:
        return VnxtConfig()

    if config_path.suffix == ".json":
        data = load_json(config_path)
    elif config_path.suffix in (".yml", ".yaml"):
        data = load_yaml(config_path)
    elif config_path.suffix == ".toml":
        data = load_toml(config_path)
    else:
        raise ConfigurationError(
            f"Unsupported config format: {config_path.suffix}",
            fix_hint="Use .json, .yml, .yaml, or .toml extension",
        )

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in {config_path}",
            details=f"Expected a mapping of options, got {type(data).__name__}",
            fix_hint='Use an object such as {"tagPrefix": "v"}',
        )

    try:
        return VnxtConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {config_path}",
            details=str(e),
            fix_hint="Check the configuration values match expected types",
        ) from e
