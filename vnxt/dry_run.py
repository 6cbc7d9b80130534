"""Dry-run preview of a release plan.

The preview walks the same step table the workflow executes, so what it
lists is exactly what a real run would do. Nothing is written.
"""

from rich.panel import Panel

from vnxt.output import Output
from vnxt.workflow import STEPS, ReleasePlan


def preview_lines(plan: ReleasePlan) -> list[str]:
    """Numbered actions for the plan, including skipped optional steps."""
    lines = []
    for step in STEPS:
        if step.enabled(plan):
            lines.append(step.describe(plan))
        elif step.skipped:
            lines.append(step.skipped)
    return [f"{number}. {line}" for number, line in enumerate(lines, start=1)]


def show_dry_run(plan: ReleasePlan, output: Output) -> None:
    output.render(Panel("[yellow]DRY RUN MODE[/yellow] - No changes will be made"))
    output.info("Would perform the following actions:")
    for line in preview_lines(plan):
        output.info(f"  {line}")
    output.info()
    output.success("Dry run complete. Use without -d to apply changes.")
