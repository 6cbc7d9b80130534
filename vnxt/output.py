"""Leveled terminal output.

Normal output goes to stdout and disappears in quiet mode; errors go to
stderr and are always shown. Text is printed literally, so commit
messages containing square brackets are never read as rich markup.
"""

from dataclasses import dataclass
from typing import IO

from rich.console import Console, RenderableType


@dataclass
class Output:
    """Pair of rich consoles with one method per message level."""

    console: Console
    err_console: Console

    @classmethod
    def create(
        cls,
        quiet: bool = False,
        colors: bool = True,
        file: IO[str] | None = None,
        err_file: IO[str] | None = None,
    ) -> "Output":
        """Build the stdout/stderr consoles for a run.

        Args:
            quiet: Suppress everything except errors
            colors: Colorize output
            file: Alternate stream for normal output (tests)
            err_file: Alternate stream for errors (tests)
        """
        console = Console(file=file, quiet=quiet, no_color=not colors, highlight=False)
        err_console = Console(
            file=err_file, stderr=err_file is None, no_color=not colors, highlight=False
        )
        return cls(console=console, err_console=err_console)

    @property
    def quiet(self) -> bool:
        return self.console.quiet

    def info(self, message: str = "", style: str | None = None) -> None:
        self.console.print(message, style=style, markup=False, emoji=False)

    def step(self, message: str) -> None:
        self.info(message, style="cyan")

    def success(self, message: str) -> None:
        self.info(message, style="green")

    def warning(self, message: str) -> None:
        self.info(message, style="yellow")

    def muted(self, message: str) -> None:
        self.info(message, style="dim")

    def error(self, message: str) -> None:
        self.err_console.print(message, style="red", markup=False, emoji=False)

    def render(self, renderable: RenderableType) -> None:
        """Print a rich renderable (table, panel) to normal output."""
        self.console.print(renderable)
