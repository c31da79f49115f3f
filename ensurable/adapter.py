"""Adapter that lets a plain check callable be ensured.

Any zero-argument callable returning ``AlreadyMet``/``NeedsAction``
(optionally inside ``Success``/``Failure``) becomes an ensurable by
wrapping it in ``CheckClosure``. The driver does this automatically.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Callable

from ensurable.contract import Ensurable, converge, unify


@dataclass
class CheckClosure:
    """A check callable bound into an ensurable.

    Each ``ensure()`` call runs ``check`` once and, only when it reports
    the target as not met, the returned action once. Nothing is cached
    between calls.
    """

    check: Callable[[], Any]
    convert_error: Callable[[Any], Any] | None = None
    name: str = ""

    def __post_init__(self) -> None:
        if not callable(self.check):
            raise TypeError(f"check must be callable, got {type(self.check).__name__}")
        if not self.name:
            self.name = getattr(self.check, "__qualname__", repr(self.check))

    def meet(self) -> Any:
        return converge(self.check(), self.convert_error, label=self.name)

    def ensure(self) -> Any:
        return unify(self.meet())


def as_ensurable(entity: Any) -> Ensurable:
    """Return ``entity`` if it already has ``ensure()``, else wrap a check callable."""
    if isinstance(entity, Ensurable):
        return entity
    if callable(entity):
        return CheckClosure(entity)
    raise TypeError(
        f"{type(entity).__name__} is neither ensurable nor a check callable"
    )


def target(
    factory: Callable[..., Any] | None = None,
    *,
    convert_error: Callable[[Any], Any] | None = None,
) -> Any:
    """Decorate a check factory so calling it yields a ``CheckClosure``.

    The decorated function receives its arguments when the closure is
    checked, not when it is built::

        @target
        def line_in_file(path, line):
            if line in Path(path).read_text().splitlines():
                return AlreadyMet(line)
            return NeedsAction(lambda: append_line(path, line))

        ensure(line_in_file("hosts", "127.0.0.1 db"))
    """

    def decorator(fn: Callable[..., Any]) -> Callable[..., CheckClosure]:
        @functools.wraps(fn)
        def build(*args: Any, **kwargs: Any) -> CheckClosure:
            args_repr = ", ".join(
                [repr(a) for a in args] + [f"{k}={v!r}" for k, v in kwargs.items()]
            )
            return CheckClosure(
                functools.partial(fn, *args, **kwargs),
                convert_error=convert_error,
                name=f"{fn.__name__}({args_repr})",
            )

        return build

    if factory is None:
        return decorator
    return decorator(factory)
