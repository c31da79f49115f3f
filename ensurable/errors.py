"""Exceptions raised by ensurable.

Check and action failures are normally carried as ``Failure`` values; these
exceptions cover the cases where a value cannot be produced at all.
"""

from __future__ import annotations

from typing import Any


class EnsureError(Exception):
    """Base class for ensurable errors."""


class UnwrapError(EnsureError):
    """Raised when unwrapping a failure whose error is not an exception."""

    def __init__(self, error: Any):
        self.error = error
        super().__init__(f"ensure failed: {error!r}")


class TargetConflictError(EnsureError):
    """A path exists, but is not the kind of thing the target requires."""

    def __init__(self, path: Any, expected: str, found: str):
        self.path = path
        self.expected = expected
        self.found = found
        super().__init__(f"{path}: expected {expected}, found {found}")


class ManifestError(EnsureError):
    """A target manifest could not be loaded."""

    def __init__(self, path: Any, issues: list[str]):
        self.path = path
        self.issues = issues
        super().__init__(f"Invalid manifest {path}: " + "; ".join(issues))
