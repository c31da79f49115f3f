"""Target manifests — YAML files listing filesystem targets to ensure.

Example::

    targets:
      - kind: directory
        path: build/cache
      - kind: file
        path: build/cache/.keep
      - kind: file
        path: VERSION
        content: "1.0.0\\n"
      - kind: absent
        path: build/stale.lock

Relative paths resolve against the manifest's own directory. Targets are
ensured in order, each as its own independent call.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import yaml

from ensurable.errors import ManifestError
from ensurable.targets.filesystem import directory_exists, file_exists, path_absent


class TargetKind(Enum):
    """What a manifest entry should converge to."""

    FILE = "file"
    DIRECTORY = "directory"
    ABSENT = "absent"


VALID_KINDS = {k.value for k in TargetKind}


@dataclass
class TargetSpec:
    """A single manifest entry."""

    kind: TargetKind
    path: str
    content: str = ""

    def resolve(self, base_dir: str | Path = ".") -> Path:
        path = Path(self.path).expanduser()
        if path.is_absolute():
            return path
        return Path(base_dir) / path

    def to_ensurable(self, base_dir: str | Path = "."):
        """Build the check for this entry."""
        path = self.resolve(base_dir)
        if self.kind == TargetKind.FILE:
            return file_exists(path, content=self.content)
        if self.kind == TargetKind.DIRECTORY:
            return directory_exists(path)
        return path_absent(path)

    def describe(self) -> str:
        return f"{self.kind.value} {self.path}"


def validate_manifest(manifest_path: str | Path) -> list[str]:
    """Validate a manifest file.

    Returns a list of issues found. Empty list means valid.
    """
    path = Path(manifest_path)
    if not path.exists():
        return [f"File not found: {manifest_path}"]

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return [f"Invalid YAML: {e}"]
    except (OSError, UnicodeDecodeError) as e:
        return [f"Cannot read manifest: {e}"]

    return _validate_data(data)


def _validate_data(data: object) -> list[str]:
    if not isinstance(data, dict) or "targets" not in data:
        return ["Missing top-level 'targets' key"]

    targets = data["targets"]
    if not isinstance(targets, list):
        return ["'targets' must be a list"]

    issues: list[str] = []
    for i, entry in enumerate(targets):
        if not isinstance(entry, dict):
            issues.append(f"Target {i + 1} must be a mapping")
            continue
        kind = entry.get("kind", "")
        if not isinstance(kind, str) or kind not in VALID_KINDS:
            issues.append(
                f"Target {i + 1} invalid kind '{kind}'. Must be one of: {sorted(VALID_KINDS)}"
            )
        if not entry.get("path") or not isinstance(entry.get("path"), str):
            issues.append(f"Target {i + 1} missing 'path'")
        if "content" in entry:
            if kind != TargetKind.FILE.value:
                issues.append(f"Target {i + 1} has 'content' but is not a file")
            elif not isinstance(entry["content"], str):
                issues.append(f"Target {i + 1} 'content' must be a string")
    return issues


def load_manifest(manifest_path: str | Path) -> list[TargetSpec]:
    """Load the targets of a manifest file, raising ``ManifestError`` if invalid."""
    issues = validate_manifest(manifest_path)
    if issues:
        raise ManifestError(manifest_path, issues)

    with open(manifest_path) as f:
        data = yaml.safe_load(f)

    return [
        TargetSpec(
            kind=TargetKind(entry["kind"]),
            path=entry["path"],
            content=entry.get("content", ""),
        )
        for entry in data["targets"]
    ]
