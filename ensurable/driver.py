"""Entry points for ensuring entities.

``ensure`` is all most callers need: pass an ensurable, or a bare check
callable, and get back either the witness of the already-met state or the
result of the action that met it.
"""

from __future__ import annotations

from typing import Any

from ensurable.adapter import as_ensurable
from ensurable.contract import Ensurable, converge
from ensurable.models.outcome import is_result


def ensure(entity: Any) -> Any:
    """Check ``entity`` once and converge it if needed.

    Returns the unified value unchanged: the witness or the action's
    result, inside ``Success``/``Failure`` when the check is fallible.
    """
    return as_ensurable(entity).ensure()


def meet(entity: Any) -> Any:
    """Like ``ensure``, but report whether the action ran.

    Returns ``NothingToDo(witness)`` or ``NowMet(result)``, wrapped in
    ``Success``/``Failure`` for fallible checks.
    """
    ensurable = as_ensurable(entity)
    meet_fn = getattr(ensurable, "meet", None)
    if meet_fn is not None:
        return meet_fn()
    check_fn = getattr(ensurable, "check", None)
    if check_fn is not None:
        return converge(check_fn())
    raise TypeError(
        f"{type(ensurable).__name__} only exposes ensure(); cannot report the path taken"
    )


def ensure_or_raise(entity: Any) -> Any:
    """Ensure ``entity`` and raise on failure instead of returning it."""
    result = ensure(entity)
    if is_result(result):
        return result.unwrap()
    return result


def probe(entity: Any) -> Any:
    """Run only the check of ``entity`` and return its raw outcome.

    The action carried by a ``NeedsAction`` outcome is not run.
    """
    if isinstance(entity, Ensurable):
        check_fn = getattr(entity, "check", None)
        if check_fn is None or not callable(check_fn):
            raise TypeError(f"{type(entity).__name__} has no check() to probe")
        return check_fn()
    if callable(entity):
        return entity()
    raise TypeError(
        f"{type(entity).__name__} is neither ensurable nor a check callable"
    )
