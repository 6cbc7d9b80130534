"""Command-line interface for vnxt.

A single command: commit with a message, bump the version in
package.json, tag, and optionally update the changelog, write release
notes, push and trigger an npm publish. Without -m the command asks
for everything interactively.
"""

import sys
from pathlib import Path

import typer

from vnxt import __version__
from vnxt.config import load_config
from vnxt.dry_run import show_dry_run
from vnxt.exceptions import VnxtError
from vnxt.inference import infer_bump_type
from vnxt.options import PROMPT_STAGE_MODE, CliFlags, resolve_options
from vnxt.output import Output
from vnxt.preflight import run_preflight
from vnxt.prompt import ConsolePrompter, Prompter
from vnxt.summary import show_summary
from vnxt.workflow import ReleaseWorkflow, build_plan

STAGE_OPTIONS = ("-a", "--all")
USAGE_ERROR_EXIT_CODE = 2

# Options that consume the following token as their value
VALUE_OPTIONS = frozenset(
    {"-m", "--message", "-t", "--type", "-v", "--set-version", "--notes", "--config"}
)

EPILOG = "\n\n".join(
    [
        "Auto-detection (first match wins):",
        '  "major:" / "MAJOR:" -> major version',
        '  "minor:" / "MINOR:" -> minor version',
        '  "patch:" / "PATCH:" -> patch version',
        '  "feat:" or "feature:" -> minor version',
        '  "fix:" -> patch version',
        '  "BREAKING" anywhere or "breaking:" -> major version',
        "Configuration (.vnxtrc.json in the project root):",
        '  {"autoChangelog": true, "defaultType": "patch", '
        '"requireCleanWorkingDir": false, "autoPush": true, '
        '"defaultStageMode": "tracked", "tagPrefix": "v", "colors": true}',
        'Example: vx -m "feat: add dark mode" -c -r --push',
    ]
)

app = typer.Typer(
    name="vnxt",
    help="Version bump CLI: commit, bump, tag, changelog, release notes and push.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def normalize_args(argv: list[str]) -> list[str]:
    """Give a bare -a/--all the prompt token so it still parses as an option.

    ``-a`` followed by nothing or by another option means "ask for the
    staging mode"; ``-a p`` keeps its mode.

    Examples:
        >>> normalize_args(["-a", "-m", "fix: x"])
        ['-a', 'prompt', '-m', 'fix: x']
        >>> normalize_args(["-m", "-a"])
        ['-m', '-a']
    """
    normalized: list[str] = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        normalized.append(arg)
        if arg in VALUE_OPTIONS and i + 1 < len(argv):
            normalized.append(argv[i + 1])
            i += 2
            continue
        if arg in STAGE_OPTIONS:
            following = argv[i + 1] if i + 1 < len(argv) else None
            if following is None or following.startswith("-"):
                normalized.append(PROMPT_STAGE_MODE)
        i += 1
    return normalized


def get_prompter() -> Prompter:
    return ConsolePrompter()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"vnxt v{__version__}")
        raise typer.Exit()


@app.command(epilog=EPILOG, context_settings={"help_option_names": ["-h", "--help"]})
def vnxt(
    message: str | None = typer.Option(  # noqa: B008
        None,
        "--message",
        "-m",
        help="Commit message (omit for interactive mode)",
    ),
    bump_type: str | None = typer.Option(  # noqa: B008
        None,
        "--type",
        "-t",
        help="Version type: patch, minor, major (auto-detected from the message)",
    ),
    set_version: str | None = typer.Option(  # noqa: B008
        None,
        "--set-version",
        "-v",
        metavar="SEMVER",
        help="Set a specific version (e.g., 2.0.0-beta.1)",
    ),
    dry_run: bool = typer.Option(  # noqa: B008
        False,
        "--dry-run",
        "-d",
        help="Show what would happen without making changes",
    ),
    no_push: bool = typer.Option(  # noqa: B008
        False,
        "--no-push",
        "-dnp",
        help="Do not push, even when autoPush is enabled",
    ),
    push: bool = typer.Option(  # noqa: B008
        False,
        "--push",
        "-p",
        help="Push to remote with tags",
    ),
    publish: bool = typer.Option(  # noqa: B008
        False,
        "--publish",
        help="Push and trigger npm publish through a publish/ tag",
    ),
    changelog: bool = typer.Option(  # noqa: B008
        False,
        "--changelog",
        "-c",
        help="Update CHANGELOG.md",
    ),
    stage: str | None = typer.Option(  # noqa: B008
        None,
        "--all",
        "-a",
        metavar="MODE",
        help="Stage files first: tracked, all (a), interactive (i), patch (p); "
        "without a mode, choose from a menu",
    ),
    release: bool = typer.Option(  # noqa: B008
        False,
        "--release",
        "-r",
        help="Generate a release notes file",
    ),
    notes: str | None = typer.Option(  # noqa: B008
        None,
        "--notes",
        help="Extra context for the release notes",
    ),
    quiet: bool = typer.Option(  # noqa: B008
        False,
        "--quiet",
        "-q",
        help="Minimal output (errors only)",
    ),
    config_path: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        help="Configuration file (default: .vnxtrc.json in the current directory)",
    ),
    version: bool = typer.Option(  # noqa: B008
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show vnxt version and exit",
    ),
) -> None:
    """Commit, bump the package version, tag, and optionally push and publish.

    Examples:
        vx -m "fix: handle empty input"         # 1.0.0 -> 1.0.1
        vx -m "feat: dark mode" -c              # 1.0.0 -> 1.1.0, changelog
        vx -m "release candidate" -v 2.0.0-rc.1
        vx -m "fix: typo" -a -d                 # choose staging, preview only
        vx                                      # interactive mode
    """
    project_root = Path.cwd()
    output = Output.create(quiet=quiet)

    try:
        cfg = load_config(config_path, project_root=project_root)
        output = Output.create(quiet=quiet, colors=cfg.colors)
        prompter = get_prompter()

        flags = CliFlags(
            message=message,
            type=bump_type,
            set_version=set_version,
            dry_run=dry_run,
            no_push=no_push,
            push=push,
            publish=publish,
            changelog=changelog,
            stage=stage,
            release=release,
            notes=notes,
            quiet=quiet,
        )
        intent = resolve_options(flags, cfg, prompter, output)
        intent, rule = infer_bump_type(intent)
        if rule is not None:
            output.step(f"Auto-detected: {rule.describe()}")

        outcome = run_preflight(project_root, cfg, intent, prompter, output)
        plan = build_plan(project_root, cfg, intent, outcome)

        if intent.dry_run:
            show_dry_run(plan, output)
            return

        record = ReleaseWorkflow(project_root=project_root, plan=plan, output=output).run()
        if record is None:
            raise typer.Exit(code=1)

        show_summary(record, intent.message, output, project_root=project_root)

    except VnxtError as e:
        output.error(f"Error: {e}")
        raise typer.Exit(code=e.exit_code) from None


def main() -> None:
    """Console-script entry point for ``vnxt`` and ``vx``.

    Usage errors exit with status 1 like every other failure.
    """
    try:
        app(args=normalize_args(sys.argv[1:]), prog_name="vnxt")
    except SystemExit as e:
        # typer reports usage errors itself and exits 2
        if e.code == USAGE_ERROR_EXIT_CODE:
            sys.exit(1)
        raise


if __name__ == "__main__":
    main()
