# mollys_lodge/di/errors.py
"""
Container error types
──────────────────────────────────────────────
All errors raised by the container derive from ContainerError.
They are raised synchronously at the call that breaks the contract;
factory exceptions are never wrapped.
"""
from __future__ import annotations
from typing import Any, List, NamedTuple


def describe(key: Any) -> str:
    """Human-readable name for a type identity (class or explicit tag)."""
    if isinstance(key, type):
        if key.__module__ == "builtins":
            return key.__qualname__
        return f"{key.__module__}.{key.__qualname__}"
    return str(key)


class ContainerError(RuntimeError):
    """Base class for every container failure."""


class InvalidArgumentError(ContainerError, TypeError):
    def __init__(self, name: str, value: Any):
        self.name = name
        super().__init__(f"'{name}' must be callable, got {type(value).__name__}.")


class NotRegisteredError(ContainerError, LookupError):
    def __init__(self, key: Any, message: str | None = None):
        self.key = key
        super().__init__(message or f"No activator registered for '{describe(key)}'.")


class AlreadyResolvedError(ContainerError):
    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"Type '{describe(key)}' has already been resolved.")


class CircularResolutionError(ContainerError):
    def __init__(self, key: Any):
        self.key = key
        super().__init__(
            f"Circular resolution of '{describe(key)}': "
            "its factory requested it again before returning."
        )


class ContainerDisposedError(ContainerError):
    def __init__(self):
        super().__init__("Container has been disposed.")


class ReleaseFailure(NamedTuple):
    instance: Any
    error: Exception


class TeardownError(ContainerError):
    """Raised after teardown when one or more releases failed (opt-in)."""

    def __init__(self, failures: List[ReleaseFailure]):
        self.failures = list(failures)
        names = ", ".join(type(f.instance).__name__ for f in self.failures)
        super().__init__(f"{len(self.failures)} instance(s) failed to release: {names}")
