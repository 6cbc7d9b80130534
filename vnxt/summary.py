"""Post-release summary."""

from pathlib import Path

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from vnxt.git.queries import get_diff_stat
from vnxt.output import Output
from vnxt.workflow import ReleaseRecord


def build_summary_table(record: ReleaseRecord, message: str) -> Table:
    """Build the release summary table.

    User-provided text goes in as plain Text so brackets in a commit
    message are not parsed as markup.
    """
    table = Table(title="Summary", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Version", Text(f"{record.old_version} -> {record.new_version}", style="green"))
    table.add_row("Message", Text(message))
    table.add_row("Tag", Text(record.tag_name))
    table.add_row("Branch", Text(record.branch))
    table.add_row("Changelog", "Updated" if record.changelog_updated else "[dim]Skipped[/dim]")

    if record.notes_path is not None:
        table.add_row("Release notes", Text(f"Generated ({record.notes_path.as_posix()})"))
    else:
        table.add_row("Release notes", "[dim]Skipped[/dim]")

    if record.pushed:
        table.add_row("Remote", "[green]Pushed with tags[/green]")
    else:
        table.add_row("Remote", "[dim]Not pushed (use --push to enable)[/dim]")

    if record.publish_tag:
        table.add_row("npm", Text(f"Publishing triggered ({record.publish_tag})", style="green"))

    return table


def show_summary(
    record: ReleaseRecord,
    message: str,
    output: Output,
    project_root: Path | None = None,
) -> None:
    """Print the summary and the files changed by the release commit.

    Prints nothing at all in quiet mode.
    """
    if output.quiet:
        return

    output.info()
    output.render(build_summary_table(record, message))

    output.info()
    output.info("Files changed:", style="bold")
    diff_stat = get_diff_stat("HEAD~1", cwd=project_root)
    if diff_stat is None:
        output.muted("  (diff unavailable)")
    else:
        output.info(diff_stat)

    output.render(Panel("[green]Version bump complete![/green]"))
