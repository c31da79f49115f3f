"""Outcome models for a single ensure call.

A check produces one of two shapes:

- ``AlreadyMet(value)`` — the target state holds; ``value`` is the witness.
- ``NeedsAction(action)`` — the target state does not hold; ``action`` is a
  zero-argument callable that converges it.

A check that can fail before deciding wraps its shape in ``Success`` or
``Failure``. After convergence, ``NothingToDo`` / ``NowMet`` record which of
the two paths produced the final value.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from ensurable.errors import UnwrapError

V = TypeVar("V")
R = TypeVar("R")
E = TypeVar("E")
T = TypeVar("T")


# --- Check shapes ---


@dataclass(frozen=True)
class AlreadyMet(Generic[V]):
    """The target state already holds."""

    value: V = None  # type: ignore[assignment]


@dataclass(frozen=True)
class NeedsAction(Generic[R]):
    """The target state does not hold yet.

    ``action`` is only ever called by the driver, and at most once.
    """

    action: Callable[[], R]

    def __repr__(self) -> str:
        name = getattr(self.action, "__qualname__", type(self.action).__name__)
        return f"NeedsAction(action={name})"


CheckOutcome = Union[AlreadyMet[Any], NeedsAction[Any]]


# --- Success / failure ---


@dataclass(frozen=True)
class Success(Generic[T]):
    """A step that completed."""

    value: T = None  # type: ignore[assignment]

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value

    def map(self, fn: Callable[[T], Any]) -> Success[Any]:
        return Success(fn(self.value))

    def map_error(self, fn: Callable[[Any], Any]) -> Success[T]:
        return self


@dataclass(frozen=True)
class Failure(Generic[E]):
    """A step that could not complete. ``error`` is whatever the step reported."""

    error: E

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        """Raise the carried error.

        Exceptions are raised as-is; any other error value is wrapped in
        ``UnwrapError``.
        """
        if isinstance(self.error, BaseException):
            raise self.error
        raise UnwrapError(self.error)

    def unwrap_or(self, default: Any) -> Any:
        return default

    def map(self, fn: Callable[[Any], Any]) -> Failure[E]:
        return self

    def map_error(self, fn: Callable[[E], Any]) -> Failure[Any]:
        return Failure(fn(self.error))


Result = Union[Success[T], Failure[E]]
FallibleCheck = Union[Success[CheckOutcome], Failure[Any]]


def is_result(value: Any) -> bool:
    """True when ``value`` is a ``Success`` or ``Failure``."""
    return isinstance(value, (Success, Failure))


def attempt(
    fn: Callable[[], T],
    *exc_types: type[BaseException],
) -> Success[T] | Failure[BaseException]:
    """Run ``fn`` and capture the listed exception types as a ``Failure``.

    With no ``exc_types`` every ``Exception`` is captured. Anything else
    propagates.
    """
    catch = exc_types or (Exception,)
    try:
        return Success(fn())
    except catch as exc:
        return Failure(exc)


def catching(*exc_types: type[BaseException]) -> Callable[[Callable[..., T]], Callable[..., Any]]:
    """Decorator form of ``attempt``.

    Usage::

        @catching(OSError)
        def read_config():
            return Path("app.toml").read_text()

        read_config()  # Success("...") or Failure(FileNotFoundError(...))
    """

    def decorator(fn: Callable[..., T]) -> Callable[..., Any]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Success[T] | Failure[BaseException]:
            return attempt(lambda: fn(*args, **kwargs), *exc_types)

        return wrapper

    return decorator


# --- Convergence report ---


@dataclass(frozen=True)
class NothingToDo(Generic[V]):
    """The check found the target state already met; no action ran."""

    value: V = None  # type: ignore[assignment]

    @property
    def converged(self) -> bool:
        return False


@dataclass(frozen=True)
class NowMet(Generic[R]):
    """The action ran and produced ``value``."""

    value: R = None  # type: ignore[assignment]

    @property
    def converged(self) -> bool:
        return True


Met = Union[NothingToDo[Any], NowMet[Any]]
