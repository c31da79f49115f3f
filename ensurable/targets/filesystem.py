"""Filesystem targets: files and directories that should (or should not) exist.

All checks here are fallible. An ``OSError`` while probing the path is
returned as ``Failure`` before any action is built; an ``OSError`` while
converging is returned as the action's ``Failure``.
"""

from __future__ import annotations

import stat
from dataclasses import dataclass
from pathlib import Path

from ensurable.adapter import target
from ensurable.contract import Meetable
from ensurable.errors import TargetConflictError
from ensurable.existential import Existing, NonExisting
from ensurable.models.outcome import (
    AlreadyMet,
    Failure,
    NeedsAction,
    Success,
    attempt,
)

FILE = "file"
DIRECTORY = "directory"
SYMLINK = "symlink"
OTHER = "other"


def path_kind(path: Path, follow_symlinks: bool = True) -> str | None:
    """Return ``"file"``, ``"directory"``, ``"symlink"``, ``"other"``, or None if missing.

    With ``follow_symlinks=False`` a link itself is reported as
    ``"symlink"``, dangling or not. Errors other than a missing path
    (permissions, a file used as a directory component) are raised.
    """
    try:
        mode = path.stat().st_mode if follow_symlinks else path.lstat().st_mode
    except FileNotFoundError:
        return None
    if stat.S_ISLNK(mode):
        return SYMLINK
    if stat.S_ISREG(mode):
        return FILE
    if stat.S_ISDIR(mode):
        return DIRECTORY
    return OTHER


@target
def file_exists(path: str | Path, content: str = ""):
    """A regular file at ``path``; created with ``content`` when missing.

    An existing file is left alone, whatever it contains.
    """
    path = Path(path)
    found = attempt(lambda: path_kind(path), OSError)
    if not found.ok:
        return found

    kind = found.value
    if kind == FILE:
        return Success(AlreadyMet(Existing(path)))
    if kind is not None:
        return Failure(TargetConflictError(path, FILE, kind))
    return Success(NeedsAction(lambda: attempt(lambda: _create_file(path, content), OSError)))


def _create_file(path: Path, content: str) -> Existing[Path]:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("x") as f:
        f.write(content)
    return Existing(path)


@dataclass
class DirectoryTarget(Meetable):
    """A directory at ``path``, created with its parents when missing."""

    path: Path

    def check(self):
        found = attempt(lambda: path_kind(self.path), OSError)
        if not found.ok:
            return found

        kind = found.value
        if kind == DIRECTORY:
            return Success(AlreadyMet(Existing(self.path)))
        if kind is not None:
            return Failure(TargetConflictError(self.path, DIRECTORY, kind))
        return Success(NeedsAction(lambda: attempt(self._create, OSError)))

    def _create(self) -> Existing[Path]:
        self.path.mkdir(parents=True)
        return Existing(self.path)


def directory_exists(path: str | Path) -> DirectoryTarget:
    return DirectoryTarget(Path(path))


@target
def path_absent(path: str | Path):
    """Nothing at ``path``, not even a symlink.

    Files and links are unlinked; directories must be empty.
    """
    path = Path(path)
    found = attempt(lambda: path_kind(path, follow_symlinks=False), OSError)
    if not found.ok:
        return found

    kind = found.value
    if kind is None:
        return Success(AlreadyMet(NonExisting(path)))
    return Success(NeedsAction(lambda: attempt(lambda: _remove(path, kind), OSError)))


def _remove(path: Path, kind: str) -> NonExisting[Path]:
    if kind == DIRECTORY:
        path.rmdir()
    else:
        path.unlink()
    return NonExisting(path)
