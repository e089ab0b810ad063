"""
Dependency injection container.
──────────────────────────────────────────────────────────────
Container      → register / decorate / resolve / dispose
Activator      → compute-once cell behind each entry
errors         → ContainerError hierarchy
──────────────────────────────────────────────────────────────
"""
from .activator import Activator, State
from .errors import (
    AlreadyResolvedError,
    CircularResolutionError,
    ContainerDisposedError,
    ContainerError,
    InvalidArgumentError,
    NotRegisteredError,
    ReleaseFailure,
    TeardownError,
)
from .registry import Container, Resolver, default_container, reset_default_container

__all__ = [
    "Activator",
    "State",
    "Container",
    "Resolver",
    "default_container",
    "reset_default_container",
    "ContainerError",
    "InvalidArgumentError",
    "NotRegisteredError",
    "AlreadyResolvedError",
    "CircularResolutionError",
    "ContainerDisposedError",
    "ReleaseFailure",
    "TeardownError",
]
