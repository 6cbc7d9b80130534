"""Pre-flight checks run before any file or repository is touched."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from vnxt.config.models import VnxtConfig
from vnxt.exceptions import RepositoryError
from vnxt.options import Intent, StageMode
from vnxt.output import Output
from vnxt.prompt import Prompter
from vnxt.validators import PreflightContext, ValidationSeverity, ValidatorRegistry


@dataclass(frozen=True)
class PreflightOutcome:
    """Repository state established by pre-flight and trusted afterwards."""

    branch: str
    has_remote: bool
    stage_mode: StageMode | None


def run_preflight(
    project_root: Path,
    config: VnxtConfig,
    intent: Intent,
    prompter: Prompter,
    output: Output,
) -> PreflightOutcome:
    """Run every registered validator in order.

    Warnings are printed and the run continues; the first error stops
    the run before anything is modified.

    Returns:
        Branch, remote presence and the final staging mode

    Raises:
        RepositoryError: If a check fails (no repository, push without remote)
        ValidationError: If the staging menu selection is invalid
    """
    output.step("Running pre-flight checks...")
    output.info()

    context = PreflightContext(
        project_root=project_root,
        config=config,
        intent=intent,
        prompter=prompter,
        output=output,
    )
    state: dict[str, Any] = {"stage_mode": intent.stage_mode, "has_remote": False}

    for validator in ValidatorRegistry.create_all():
        if not validator.should_run(context):
            continue

        result = validator.validate(context)
        if not result.passed:
            raise RepositoryError(
                result.message,
                details=result.details,
                fix_hint=result.fix_command,
            )
        if result.severity is ValidationSeverity.WARNING:
            output.warning(f"Warning: {result.message}")
        state.update(result.data)

    output.success("Pre-flight checks passed")
    output.info()

    return PreflightOutcome(
        branch=state.get("branch", ""),
        has_remote=state["has_remote"],
        stage_mode=state["stage_mode"],
    )
