# mollys_lodge/__init__.py
"""
mollys_lodge
──────────────────────────────────────────────────────────────
A small, thread-safe singleton container.
Provides:
    - Explicit factory registration keyed by type (or tag)
    - Lazy, build-once resolution
    - Decoration of registered entries before first build
    - Ordered teardown of everything the container built
──────────────────────────────────────────────────────────────
"""

__version__ = "0.1.0"

from mollys_lodge.di.registry import Container, Resolver
from mollys_lodge.di.errors import (
    AlreadyResolvedError,
    CircularResolutionError,
    ContainerDisposedError,
    ContainerError,
    InvalidArgumentError,
    NotRegisteredError,
    TeardownError,
)

__all__ = [
    "Container",
    "Resolver",
    "ContainerError",
    "InvalidArgumentError",
    "NotRegisteredError",
    "AlreadyResolvedError",
    "CircularResolutionError",
    "ContainerDisposedError",
    "TeardownError",
]
