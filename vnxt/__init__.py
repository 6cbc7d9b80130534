"""Commit, version bump, tag and publish in one command."""

__version__ = "1.8.0"

from vnxt.exceptions import (
    ConfigurationError,
    GitError,
    ManifestError,
    RepositoryError,
    ValidationError,
    VnxtError,
)

__all__ = [
    "__version__",
    "VnxtError",
    "ConfigurationError",
    "ValidationError",
    "RepositoryError",
    "GitError",
    "ManifestError",
]
