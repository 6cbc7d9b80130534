"""Subprocess runner for the git layer.

Commands are argument lists and never go through a shell. Captured
output is cleaned of terminal escapes so tag names, branch names and
SHAs compare as plain strings.
"""

import re
import subprocess
from pathlib import Path

# CSI (colors, cursor), OSC (titles, hyperlinks) and DCS-style strings
ESCAPE_SEQUENCE = re.compile(r"\x1b(?:\[[0-9;?]*[A-Za-z]|\][^\x07]*\x07|[PX^_][^\x1b]*\x1b\\)")
STRAY_CONTROL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

DEFAULT_TIMEOUT = 300


class ShellError(Exception):
    """A command exited non-zero."""

    def __init__(self, args: list[str], returncode: int, stdout: str = "", stderr: str = "") -> None:
        self.args_list = args
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(self.describe())

    @property
    def command(self) -> str:
        return " ".join(self.args_list)

    def describe(self) -> str:
        lines = [f"'{self.command}' exited with {self.returncode}"]
        # git reports most failures on stderr, a few (nothing to commit) on stdout
        lines.extend(text for text in (self.stderr.strip(), self.stdout.strip()) if text)
        return "\n".join(lines)


def strip_ansi(text: str) -> str:
    """Drop escape sequences and stray control characters.

    >>> strip_ansi("\\x1b[32mv1.2.3\\x1b[0m")
    'v1.2.3'
    """
    return STRAY_CONTROL.sub("", ESCAPE_SEQUENCE.sub("", text or ""))


def run(
    args: list[str],
    cwd: Path | None = None,
    capture: bool = True,
    check: bool = True,
    timeout: int | None = DEFAULT_TIMEOUT,
) -> subprocess.CompletedProcess[str]:
    """Run a command and return the completed process.

    With ``capture=False`` the child inherits the terminal, which
    ``git add -p`` and ``git add -i`` need; pass ``timeout=None`` for
    those so the user is never cut off.

    Raises:
        ShellError: If ``check`` is set and the command exits non-zero
        subprocess.TimeoutExpired: If the command outlives ``timeout``
    """
    result = subprocess.run(
        list(args),
        cwd=cwd,
        capture_output=capture,
        text=True,
        timeout=timeout,
    )
    if capture:
        result.stdout = strip_ansi(result.stdout)
        result.stderr = strip_ansi(result.stderr)

    if check and result.returncode != 0:
        raise ShellError(list(args), result.returncode, result.stdout or "", result.stderr or "")
    return result
