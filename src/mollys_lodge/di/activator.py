from __future__ import annotations
import enum
import threading
from typing import Any, Callable, Generic, Optional, TypeVar

from .errors import AlreadyResolvedError, CircularResolutionError

"""
──────────────────────────────────────────────────────────────────────────────
Activator: compute-once cell behind each registry entry
──────────────────────────────────────────────────────────────────────────────
States:
    UNEVALUATED → EVALUATING → EVALUATED   (value cached forever)
    UNEVALUATED → SUPERSEDED               (replaced by register/decorate)

Mechanics:
    - The first caller of value() flips the state to EVALUATING under the
      condition lock, then runs the computation with the lock released.
    - Racing callers wait on the condition and read the same value.
    - If the computation raises, the cell returns to UNEVALUATED and the
      next caller retries.
    - A caller that reaches a SUPERSEDED cell gets Superseded and must look
      the entry up again.

Used by:
    Container.register / decorate / resolve
──────────────────────────────────────────────────────────────────────────────
"""

T = TypeVar("T")


class State(enum.Enum):
    UNEVALUATED = "unevaluated"
    EVALUATING = "evaluating"
    EVALUATED = "evaluated"
    SUPERSEDED = "superseded"


class Superseded(Exception):
    """The activator was swapped out of the registry before evaluation."""


class Activator(Generic[T]):
    __slots__ = ("key", "_compute", "_state", "_value", "_owner", "_cond")

    def __init__(self, key: Any, compute: Callable[[], T]):
        self.key = key
        self._compute: Optional[Callable[[], T]] = compute
        self._state = State.UNEVALUATED
        self._value: Optional[T] = None
        self._owner: Optional[int] = None
        self._cond = threading.Condition(threading.Lock())

    @property
    def state(self) -> State:
        return self._state

    @property
    def is_evaluated(self) -> bool:
        return self._state is State.EVALUATED

    def value(self) -> T:
        """Return the cached value, computing it on first access."""
        if self._state is State.EVALUATED:
            return self._value  # type: ignore[return-value]

        me = threading.get_ident()
        with self._cond:
            while self._state is State.EVALUATING:
                if self._owner == me:
                    raise CircularResolutionError(self.key)
                self._cond.wait()
            if self._state is State.EVALUATED:
                return self._value  # type: ignore[return-value]
            if self._state is State.SUPERSEDED:
                raise Superseded(self.key)
            self._state = State.EVALUATING
            self._owner = me
            compute = self._compute

        try:
            value = compute()  # type: ignore[misc]
        except BaseException:
            with self._cond:
                self._state = State.UNEVALUATED
                self._owner = None
                self._cond.notify_all()
            raise

        with self._cond:
            self._value = value
            self._compute = None
            self._state = State.EVALUATED
            self._owner = None
            self._cond.notify_all()
        return value

    def supersede(self) -> Callable[[], T]:
        """
        Retire an unevaluated activator and hand back its computation so a
        replacement can compose over it. Raises AlreadyResolvedError once
        evaluation has started.
        """
        with self._cond:
            if self._state is not State.UNEVALUATED:
                raise AlreadyResolvedError(self.key)
            self._state = State.SUPERSEDED
            compute = self._compute
            self._compute = None
            self._cond.notify_all()
        return compute  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"<Activator {self.key!r} {self._state.value}>"
