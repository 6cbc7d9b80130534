"""Custom exception hierarchy for vnxt.

Every error maps to exit status 1 at the command line. The subclasses
exist so callers and tests can tell the error families apart:
- ConfigurationError: the override file cannot be read or validated
- ValidationError: bad usage (missing message, bad bump type, bad mode)
- RepositoryError: the environment is unfit (no repository, no remote)
- GitError: a git command failed while releasing
- ManifestError: package.json cannot be read or written
"""


class VnxtError(Exception):
    """Base exception for all vnxt errors."""

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        details: str | None = None,
        fix_hint: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Brief error message
            details: Detailed explanation of what went wrong
            fix_hint: Suggested command or action to fix the issue
        """
        super().__init__(message)
        self.message = message
        self.details = details
        self.fix_hint = fix_hint

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"\nDetails: {self.details}")
        if self.fix_hint:
            parts.append(f"\nFix: {self.fix_hint}")
        return "".join(parts)


class ConfigurationError(VnxtError):
    """Configuration file errors.

    Raised when:
    - An explicitly requested config file does not exist
    - The config file has invalid syntax (JSON/YAML/TOML)
    - Config values fail validation
    """


class ValidationError(VnxtError):
    """Usage errors detected before any work is done.

    Raised when:
    - The commit message is missing or empty
    - The bump type is not patch, minor or major
    - A staging mode token or menu selection is not recognized
    - An explicit version is not valid semver
    """


class RepositoryError(VnxtError):
    """Environment errors detected during pre-flight checks.

    Raised when:
    - The current directory is not a git repository
    - Pushing was requested but no remote is configured
    """


class GitError(VnxtError):
    """Git operation failures.

    Raised when:
    - Staging, commit, amend or tag creation fails
    - Push operations fail
    """


class ManifestError(VnxtError):
    """Package manifest failures.

    Raised when:
    - package.json is missing or not valid JSON
    - The version field is missing
    - The manifest cannot be written
    """
