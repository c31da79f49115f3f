"""Ready-made targets for common convergence checks."""

from ensurable.targets.filesystem import (
    DirectoryTarget,
    directory_exists,
    file_exists,
    path_absent,
    path_kind,
)

__all__ = [
    "DirectoryTarget",
    "directory_exists",
    "file_exists",
    "path_absent",
    "path_kind",
]
