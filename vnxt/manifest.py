"""package.json manifest access.

Reads and rewrites the ``version`` field of package.json and keeps
package-lock.json in step, without going through ``npm version`` so no
commit or tag is ever created as a side effect.
"""

import json
from pathlib import Path
from typing import Any

from vnxt.exceptions import ManifestError

MANIFEST_FILE = "package.json"
LOCK_FILE = "package-lock.json"


class PackageManifest:
    """The project's package.json and its lockfile."""

    def __init__(self, project_root: Path) -> None:
        self.project_root = project_root
        self.path = project_root / MANIFEST_FILE
        self.lock_path = project_root / LOCK_FILE

    def has_lockfile(self) -> bool:
        return self.lock_path.exists()

    def _read(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            raise ManifestError(
                f"{path.name} not found",
                details=f"Expected at: {path}",
                fix_hint="Run vnxt from the package root (where package.json lives)",
            )
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ManifestError(
                f"Invalid JSON in {path.name}",
                details=str(e),
                fix_hint=f"Fix JSON syntax errors in {path.name}",
            ) from e
        except OSError as e:
            raise ManifestError(f"Failed to read {path.name}", details=str(e)) from e

        if not isinstance(data, dict):
            raise ManifestError(f"{path.name} must contain a JSON object")
        return data

    def _write(self, path: Path, data: dict[str, Any]) -> None:
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write("\n")  # Trailing newline (npm convention)
        except OSError as e:
            raise ManifestError(f"Failed to write {path.name}", details=str(e)) from e

    def get_version(self) -> str:
        """Get the current version from package.json.

        Raises:
            ManifestError: If package.json is missing, invalid, or has no version
        """
        version = self._read(self.path).get("version")
        if not isinstance(version, str) or not version:
            raise ManifestError(
                "No version field in package.json",
                fix_hint='Add "version": "1.0.0" to package.json',
            )
        return version

    def get_name(self) -> str | None:
        """Get the package name, or None when package.json has none."""
        name = self._read(self.path).get("name")
        return name if isinstance(name, str) and name else None

    def set_version(self, version: str) -> None:
        """Write a new version into package.json and package-lock.json.

        Every other field is preserved. The lockfile's top-level version and
        its root package entry (``packages[""]``) are updated when present.

        Raises:
            ManifestError: If a file cannot be read or written
        """
        data = self._read(self.path)
        data["version"] = version
        self._write(self.path, data)

        if self.has_lockfile():
            lock = self._read(self.lock_path)
            if "version" in lock:
                lock["version"] = version
            root_package = lock.get("packages", {}).get("")
            if isinstance(root_package, dict) and "version" in root_package:
                root_package["version"] = version
            self._write(self.lock_path, lock)

    def tracked_files(self) -> list[str]:
        """Manifest files to stage with the version bump."""
        files = [MANIFEST_FILE]
        if self.has_lockfile():
            files.append(LOCK_FILE)
        return files
