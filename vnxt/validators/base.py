"""Abstract base class for pre-flight validators.

Validators inspect the repository before anything is modified and
report issues with severity levels that decide whether the release can
proceed.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from vnxt.config.models import VnxtConfig
    from vnxt.options import Intent
    from vnxt.output import Output
    from vnxt.prompt import Prompter


class ValidationSeverity(Enum):
    """Severity level for validation results.

    - ERROR: Blocks the release
    - WARNING: Printed, the release continues
    - INFO: Informational only
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes:
        passed: Whether the validation passed
        message: Brief description of the result
        severity: How serious the issue is
        details: Extended explanation
        fix_command: Suggested command to fix the issue
        data: Repository state observed by the check (branch, stage mode)
    """

    passed: bool
    message: str
    severity: ValidationSeverity = ValidationSeverity.ERROR
    details: str | None = None
    fix_command: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(
        cls,
        message: str = "Validation passed",
        data: dict[str, Any] | None = None,
    ) -> "ValidationResult":
        return cls(
            passed=True,
            message=message,
            severity=ValidationSeverity.INFO,
            data=data or {},
        )

    @classmethod
    def error(
        cls,
        message: str,
        details: str | None = None,
        fix_command: str | None = None,
    ) -> "ValidationResult":
        return cls(
            passed=False,
            message=message,
            severity=ValidationSeverity.ERROR,
            details=details,
            fix_command=fix_command,
        )

    @classmethod
    def warning(
        cls,
        message: str,
        details: str | None = None,
        fix_command: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> "ValidationResult":
        """Create a warning result (passed=True, severity=WARNING)."""
        return cls(
            passed=True,
            message=message,
            severity=ValidationSeverity.WARNING,
            details=details,
            fix_command=fix_command,
            data=data or {},
        )


@dataclass
class PreflightContext:
    """Context passed to validators during pre-flight.

    Carries the collaborators a check may need: the prompter for the
    staging menu and the output sink for its listing.
    """

    project_root: Path
    config: "VnxtConfig"
    intent: "Intent"
    prompter: "Prompter"
    output: "Output"


class Validator(ABC):
    """Abstract base class for all pre-flight validators."""

    name: ClassVar[str]
    description: ClassVar[str]

    @abstractmethod
    def validate(self, context: PreflightContext) -> ValidationResult:
        """Run validation and return result."""

    def should_run(self, context: PreflightContext) -> bool:
        """Check if this validator applies to the run.

        Override in subclasses to conditionally skip validation.
        """
        return True


class ValidatorRegistry:
    """Ordered registry of validator implementations.

    Validators run in registration order, which is the fixed pre-flight
    order: repository, working tree, branch, remote.
    """

    _validators: dict[str, type[Validator]] = {}

    @classmethod
    def register(cls, validator_class: type[Validator]) -> type[Validator]:
        """Register a validator class.

        Can be used as a decorator:
            @ValidatorRegistry.register
            class BranchValidator(Validator):
                ...

        Raises:
            TypeError: If validator_class is missing required attributes
            ValueError: If a validator with the same name is already registered
        """
        missing = [
            attr for attr in ("name", "description") if not hasattr(validator_class, attr)
        ]
        if missing:
            raise TypeError(
                f"Validator class {validator_class.__name__} missing required "
                f"class attributes: {', '.join(missing)}"
            )

        name = validator_class.name
        if name in cls._validators:
            existing = cls._validators[name]
            if existing is not validator_class:
                raise ValueError(
                    f"Validator name '{name}' already registered by {existing.__name__}. "
                    f"Cannot register {validator_class.__name__}."
                )
            return validator_class

        cls._validators[name] = validator_class
        return validator_class

    @classmethod
    def create_all(cls) -> list[Validator]:
        """Instantiate every registered validator, in order."""
        return [validator_class() for validator_class in cls._validators.values()]
