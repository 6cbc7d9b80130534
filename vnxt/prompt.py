"""Line-prompt service used by interactive mode and the staging menu."""

from typing import Protocol

from rich.console import Console

YES_ANSWERS = frozenset({"y", "yes"})


class Prompter(Protocol):
    """Asks a single question and returns a single line of input."""

    def ask(self, question: str) -> str: ...


class ConsolePrompter:
    """Prompter reading from the terminal through a rich console.

    End of input counts as an empty answer, so a closed stdin behaves
    like the user pressing Enter.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def ask(self, question: str) -> str:
        try:
            return self.console.input(question, markup=False, emoji=False).strip()
        except EOFError:
            return ""


def is_yes(answer: str) -> bool:
    """True for a case-insensitive "y" or "yes"; everything else is "no"."""
    return answer.strip().lower() in YES_ANSWERS
