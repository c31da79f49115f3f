"""Markers for things assumed to exist or not exist."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Existing(Generic[T]):
    """``subject`` exists (or has just been created)."""

    subject: T


@dataclass(frozen=True)
class NonExisting(Generic[T]):
    """``subject`` does not exist (or has just been removed)."""

    subject: T


class Existential:
    """Mixin for values that can be tagged with an existence assumption."""

    def assume_existing(self) -> Existing:
        return Existing(self)

    def assume_non_existing(self) -> NonExisting:
        return NonExisting(self)
