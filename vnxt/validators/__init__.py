"""Pre-flight validators."""

# Import validators to trigger registration
from vnxt.validators import git  # noqa: F401
from vnxt.validators.base import (
    PreflightContext,
    ValidationResult,
    ValidationSeverity,
    Validator,
    ValidatorRegistry,
)

__all__ = [
    "PreflightContext",
    "ValidationResult",
    "ValidationSeverity",
    "Validator",
    "ValidatorRegistry",
]
