"""ensurable — check a target state once, converge only when needed.

A check returns ``AlreadyMet(witness)`` or ``NeedsAction(action)``;
``ensure`` runs the check once and the action at most once::

    from ensurable import AlreadyMet, NeedsAction, ensure

    def cache_dir():
        if CACHE.is_dir():
            return AlreadyMet(CACHE)
        return NeedsAction(lambda: CACHE.mkdir() or CACHE)

    ensure(cache_dir)
"""

__version__ = "0.3.0"

from ensurable.adapter import CheckClosure, as_ensurable, target
from ensurable.contract import Ensurable, Meetable, converge
from ensurable.driver import ensure, ensure_or_raise, meet, probe
from ensurable.errors import EnsureError, ManifestError, TargetConflictError, UnwrapError
from ensurable.existential import Existential, Existing, NonExisting
from ensurable.models.outcome import (
    AlreadyMet,
    Failure,
    NeedsAction,
    NothingToDo,
    NowMet,
    Success,
    attempt,
    catching,
)

__all__ = [
    "AlreadyMet",
    "CheckClosure",
    "Ensurable",
    "EnsureError",
    "Existential",
    "Existing",
    "Failure",
    "ManifestError",
    "Meetable",
    "NeedsAction",
    "NonExisting",
    "NothingToDo",
    "NowMet",
    "Success",
    "TargetConflictError",
    "UnwrapError",
    "as_ensurable",
    "attempt",
    "catching",
    "converge",
    "ensure",
    "ensure_or_raise",
    "meet",
    "probe",
    "target",
]
