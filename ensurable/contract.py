"""The ensure contract and the convergence routine behind it.

An *ensurable* is anything with a zero-argument ``ensure()``. Whatever the
entity needs to check or converge must already be captured by it.

``converge`` is the single place where a check outcome is turned into a
final value: the witness for ``AlreadyMet``, or the result of running the
action exactly once for ``NeedsAction``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Protocol, runtime_checkable

from ensurable.models.outcome import (
    AlreadyMet,
    Failure,
    NeedsAction,
    NothingToDo,
    NowMet,
    Success,
    is_result,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class Ensurable(Protocol):
    """Something that can check and, if needed, meet its own target state."""

    def ensure(self) -> Any:
        ...


def converge(
    outcome: Any,
    convert_error: Callable[[Any], Any] | None = None,
    label: str = "target",
) -> Any:
    """Act on one check outcome.

    Returns ``NothingToDo(witness)`` or ``NowMet(action_result)``. When the
    outcome is fallible (``Success``/``Failure``) the report is wrapped the
    same way, and a failure from either the check or the action is returned
    as ``Failure``, passed through ``convert_error`` if given.
    """
    if isinstance(outcome, Failure):
        logger.debug("%s: check failed: %r", label, outcome.error)
        return _converted(outcome, convert_error)

    if isinstance(outcome, Success):
        shape = outcome.value
        _require_shape(shape, label)
        if isinstance(shape, AlreadyMet):
            logger.debug("%s: already met", label)
            return Success(NothingToDo(shape.value))

        logger.debug("%s: not met, running action", label)
        result = shape.action()
        if isinstance(result, Failure):
            logger.debug("%s: action failed: %r", label, result.error)
            return _converted(result, convert_error)
        if isinstance(result, Success):
            result = result.value
        logger.info("%s: converged", label)
        return Success(NowMet(result))

    _require_shape(outcome, label)
    if isinstance(outcome, AlreadyMet):
        logger.debug("%s: already met", label)
        return NothingToDo(outcome.value)

    logger.debug("%s: not met, running action", label)
    result = outcome.action()
    logger.info("%s: converged", label)
    return NowMet(result)


def unify(met: Any) -> Any:
    """Drop the path tag from a convergence report, keeping any Success/Failure."""
    if is_result(met):
        return met.map(lambda report: report.value)
    return met.value


def _converted(failure: Failure, convert_error: Callable[[Any], Any] | None) -> Failure:
    if convert_error is None:
        return failure
    return failure.map_error(convert_error)


def _require_shape(shape: Any, label: str) -> None:
    if not isinstance(shape, (AlreadyMet, NeedsAction)):
        raise TypeError(
            f"{label}: check must return AlreadyMet or NeedsAction, "
            f"got {type(shape).__name__}"
        )


class Meetable(ABC):
    """Base class for entities that implement their own check.

    Subclasses provide ``check()``; ``ensure()`` and ``meet()`` come for
    free. Override ``convert_error`` to fold check and action failures into
    one error type.
    """

    @abstractmethod
    def check(self) -> Any:
        """Return ``AlreadyMet``/``NeedsAction``, optionally inside ``Success``/``Failure``."""

    def convert_error(self, error: Any) -> Any:
        return error

    def meet(self) -> Any:
        return converge(self.check(), self.convert_error, label=repr(self))

    def ensure(self) -> Any:
        return unify(self.meet())
