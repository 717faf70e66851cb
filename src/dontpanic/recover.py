"""Fault interception: turn a fault raised inside a scope into an error value.

``recover()`` is entered as the first thing a guarded scope does. When the
scope raises, the fault is suppressed and its error form is written to the
``Caught`` slot; when it does not, the slot stays empty::

    with recover() as caught:
        return Guarded(items[i])
    return Guarded(None, caught.err)

Only ``Exception`` subclasses (or the narrower classes passed to
``recover``) are intercepted. ``KeyboardInterrupt``, ``SystemExit`` and
friends always propagate.
"""

from __future__ import annotations

from dataclasses import dataclass
import functools
import logging
from typing import TYPE_CHECKING, NoReturn, ParamSpec, TypeVar

from dontpanic.config import GuardConfig, default_config
from dontpanic.errors import Panic, PanicError
from dontpanic.result import Guarded

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


@dataclass
class Caught:
    """Output slot for an intercepted fault."""

    err: Exception | None = None


def to_error(payload: object) -> Exception:
    """Convert a fault payload into an error value.

    Exceptions are forwarded as they are; anything else is formatted as text
    and wrapped in ``PanicError``.
    """
    if isinstance(payload, Panic):
        payload = payload.payload
    if isinstance(payload, Exception):
        return payload
    return PanicError(payload)


def panic(payload: object) -> NoReturn:
    """Raise the abnormal-termination signal carrying *payload*."""
    raise Panic(payload)


class Recover:
    """Context manager that intercepts one fault and stores it in a ``Caught``."""

    def __init__(
        self,
        intercept: tuple[type[Exception], ...] = (Exception,),
        *,
        config: GuardConfig | None = None,
        scope: str | None = None,
    ) -> None:
        self.intercept = intercept
        self.config = config
        self.scope = scope
        self.caught = Caught()

    def __enter__(self) -> Caught:
        return self.caught

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc is None:
            return False
        # Panics are intercepted whatever the filter says.
        if not isinstance(exc, (Panic, *self.intercept)):
            return False

        err = to_error(exc)
        self.caught.err = err
        cfg = self.config or default_config()
        if cfg.log_recovered and logger.isEnabledFor(cfg.log_level):  # type: ignore[arg-type]
            logger.log(
                cfg.log_level,  # type: ignore[arg-type]
                "Recovered %s in %s: %s",
                type(err).__name__,
                self.scope or "guarded scope",
                err,
            )
        return True


def recover(
    *intercept: type[Exception],
    config: GuardConfig | None = None,
    scope: str | None = None,
) -> Recover:
    """Return an interceptor for one guarded scope.

    Args:
        *intercept: Exception classes to intercept (default: ``Exception``).
        config: Overrides the environment-derived default config.
        scope: Name used when logging the recovered fault.
    """
    return Recover(intercept or (Exception,), config=config, scope=scope)


def guard(fn: Callable[P, T], /, *args: P.args, **kwargs: P.kwargs) -> Guarded[T | None]:
    """Call ``fn(*args, **kwargs)`` and return its outcome as a ``Guarded``."""
    scope = getattr(fn, "__qualname__", None) or repr(fn)
    with recover(scope=scope) as caught:
        return Guarded(fn(*args, **kwargs))
    return Guarded(None, caught.err)


def guarded(fn: Callable[P, T]) -> Callable[P, Guarded[T | None]]:
    """Decorate *fn* so that calling it returns a ``Guarded`` instead of raising."""

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Guarded[T | None]:
        return guard(fn, *args, **kwargs)

    return wrapper
