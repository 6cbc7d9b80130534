"""CHANGELOG.md entries and release-notes documents."""

from datetime import datetime
from pathlib import Path

CHANGELOG_FILE = "CHANGELOG.md"
CHANGELOG_TITLE = "# Changelog"
RELEASE_NOTES_DIR = "release-notes"


def format_changelog_entry(version: str, message: str, date: str) -> str:
    return f"## [{version}] - {date}\n- {message}\n"


def insert_changelog_entry(text: str | None, version: str, message: str, date: str) -> str:
    """Insert a version section right below the changelog title.

    Newest entries come first. Anything above the title line is kept,
    and a document without a title gets one.

    Examples:
        >>> insert_changelog_entry(None, "1.0.1", "fix: typo", "2024-05-01")
        '# Changelog\\n\\n## [1.0.1] - 2024-05-01\\n- fix: typo\\n'
    """
    lines = (text or "").splitlines(keepends=True)
    title_index = next(
        (i for i, line in enumerate(lines) if line.startswith(CHANGELOG_TITLE)),
        None,
    )

    if title_index is None:
        head, title, rest = "", f"{CHANGELOG_TITLE}\n", "".join(lines)
    else:
        head = "".join(lines[:title_index])
        title = lines[title_index]
        if not title.endswith("\n"):
            title += "\n"
        rest = "".join(lines[title_index + 1 :])

    document = f"{head}{title}\n{format_changelog_entry(version, message, date)}"
    rest = rest.lstrip("\n")
    if rest:
        document += f"\n{rest}"
    return document


def update_changelog(project_root: Path, version: str, message: str, date: str) -> Path:
    """Add an entry to CHANGELOG.md, creating the file if needed.

    Returns:
        Path of the changelog file

    Raises:
        OSError: If the file cannot be read or written
    """
    path = project_root / CHANGELOG_FILE
    existing = path.read_text(encoding="utf-8") if path.exists() else None
    path.write_text(
        insert_changelog_entry(existing, version, message, date),
        encoding="utf-8",
    )
    return path


def release_notes_path(project_root: Path, tag_name: str) -> Path:
    """Location of the release-notes file for a tag."""
    return project_root / RELEASE_NOTES_DIR / f"{tag_name}.md"


def render_release_notes(
    tag_name: str,
    version: str,
    message: str,
    released_at: datetime,
    author: str | None = None,
    package_name: str | None = None,
    context: str = "",
) -> str:
    """Render the Markdown release-notes document.

    Args:
        tag_name: Release tag (e.g., "v1.2.0")
        version: New version without prefix
        message: Commit message, shown under "Changes"
        released_at: Release time (UTC)
        author: git user.name, omitted when None
        package_name: npm package name for the install command
        context: Free text for an extra "Release Notes" section

    Returns:
        Markdown document ending with a newline
    """
    lines = [
        f"# Release {tag_name}",
        "",
        f"Released: {released_at:%Y-%m-%d} at {released_at:%H:%M:%S} UTC",
    ]
    if author:
        lines.append(f"Author: {author}")

    lines += ["", "## Changes", message]

    if context:
        lines += ["", "## Release Notes", context]

    if package_name:
        lines += [
            "",
            "## Installation",
            "```bash",
            f"npm install {package_name}@{version}",
            "```",
        ]

    lines += [
        "",
        "## Full Changelog",
        f"See [{CHANGELOG_FILE}](../{CHANGELOG_FILE}) for complete version history.",
    ]
    return "\n".join(lines) + "\n"


def write_release_notes(project_root: Path, tag_name: str, content: str) -> Path:
    """Write (or overwrite) the release-notes file for a tag.

    Raises:
        OSError: If the directory or file cannot be written
    """
    path = release_notes_path(project_root, tag_name)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
