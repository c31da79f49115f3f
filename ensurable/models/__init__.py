"""Data models for check outcomes, results, and convergence reports."""

from ensurable.models.outcome import (
    AlreadyMet,
    CheckOutcome,
    Failure,
    FallibleCheck,
    Met,
    NeedsAction,
    NothingToDo,
    NowMet,
    Result,
    Success,
    attempt,
    catching,
    is_result,
)

__all__ = [
    "AlreadyMet",
    "CheckOutcome",
    "Failure",
    "FallibleCheck",
    "Met",
    "NeedsAction",
    "NothingToDo",
    "NowMet",
    "Result",
    "Success",
    "attempt",
    "catching",
    "is_result",
]
