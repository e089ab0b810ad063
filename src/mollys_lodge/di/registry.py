from __future__ import annotations
import threading
from typing import Any, Callable, Dict, Hashable, List, Optional, Protocol, Tuple, TypeVar

from loguru import logger

from mollys_lodge.config.base_settings import ContainerSettings, get_settings
from .activator import Activator, State, Superseded
from .errors import (
    AlreadyResolvedError,
    ContainerDisposedError,
    InvalidArgumentError,
    NotRegisteredError,
    ReleaseFailure,
    TeardownError,
    describe,
)

"""
──────────────────────────────────────────────────────────────────────────────
Singleton Dependency Injection Container
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Map a type identity → factory, build at most one instance per identity,
    allow decoration before first build, and release everything it built.

APIs:
    - register(type, factory, overwrite_existing=True) → bool
    - decorate(type, factory)
    - resolve(type) → instance
    - try_resolve(type, default=None) → (found, instance)
    - dispose() → [ReleaseFailure]

Factories:
    register: factory(resolver) → instance
    decorate: factory(resolver, inner) → instance

Usage:
    container = Container()
    container.register(Clock, lambda c: SystemClock())
    container.register(Mailer, lambda c: Mailer(c.resolve(Clock)))
    container.decorate(Mailer, lambda c, inner: RetryingMailer(inner))
    mailer = container.resolve(Mailer)
    ...
    container.dispose()
──────────────────────────────────────────────────────────────────────────────
"""

T = TypeVar("T")


class Resolver(Protocol):
    """The view of the container handed to factories."""

    def resolve(self, key: Hashable) -> Any: ...

    def try_resolve(self, key: Hashable, default: Any = None) -> Tuple[bool, Any]: ...


Factory = Callable[[Resolver], Any]
Decorator = Callable[[Resolver, Any], Any]


class Container:
    """
    Thread-safe singleton container.

    Once an entry has started building it is locked: register() and
    decorate() on it raise AlreadyResolvedError.
    """

    def __init__(self, settings: ContainerSettings | None = None):
        self.settings = settings or get_settings()
        self._registry: Dict[Hashable, Activator[Any]] = {}
        self._registry_lock = threading.Lock()
        self._tracked: List[Any] = []
        self._tracked_lock = threading.Lock()
        self._disposed = False

    # ──────────────────────────────────────────────
    # Registration
    # ──────────────────────────────────────────────
    def register(self, key: Hashable, factory: Factory, overwrite_existing: bool = True) -> bool:
        if not callable(factory):
            raise InvalidArgumentError("factory", factory)

        def build() -> Any:
            if self.settings.log_resolutions:
                logger.debug("Building {}", describe(key))
            return self._track(factory(self))

        with self._registry_lock:
            self._ensure_alive()
            existing = self._registry.get(key)
            if existing is not None:
                # A started build is locked regardless of overwrite_existing
                if existing.state is not State.UNEVALUATED:
                    raise AlreadyResolvedError(key)
                if not overwrite_existing:
                    return False
                existing.supersede()
            self._registry[key] = Activator(key, build)

        if self.settings.log_resolutions:
            logger.debug("Registered {} (replaced={})", describe(key), existing is not None)
        return True

    def decorate(self, key: Hashable, factory: Decorator) -> None:
        if not callable(factory):
            raise InvalidArgumentError("factory", factory)

        with self._registry_lock:
            self._ensure_alive()
            existing = self._registry.get(key)
            if existing is None:
                raise NotRegisteredError(
                    key, f"There's no '{describe(key)}' to decorate in the container."
                )
            # Own cell so a failing decorator never rebuilds the inner layer
            inner = Activator(key, existing.supersede())

            def build() -> Any:
                instance = inner.value()
                if self.settings.log_resolutions:
                    logger.debug("Decorating {}", describe(key))
                return self._track(factory(self, instance))

            self._registry[key] = Activator(key, build)

        if self.settings.log_resolutions:
            logger.debug("Decorated {}", describe(key))

    # ──────────────────────────────────────────────
    # Resolution
    # ──────────────────────────────────────────────
    def resolve(self, key: Hashable) -> Any:
        found, instance = self.try_resolve(key)
        if not found:
            raise NotRegisteredError(key)
        return instance

    def try_resolve(self, key: Hashable, default: Any = None) -> Tuple[bool, Any]:
        while True:
            with self._registry_lock:
                activator = self._registry.get(key)
            if activator is None:
                return False, default
            try:
                return True, activator.value()
            except Superseded:
                # Replaced between lookup and evaluation; read the new entry
                continue

    # ──────────────────────────────────────────────
    # Introspection
    # ──────────────────────────────────────────────
    def is_registered(self, key: Hashable) -> bool:
        with self._registry_lock:
            return key in self._registry

    def is_resolved(self, key: Hashable) -> bool:
        with self._registry_lock:
            activator = self._registry.get(key)
        return activator is not None and activator.is_evaluated

    def __contains__(self, key: Hashable) -> bool:
        return self.is_registered(key)

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._registry)

    # ──────────────────────────────────────────────
    # Teardown
    # ──────────────────────────────────────────────
    def dispose(self) -> List[ReleaseFailure]:
        """
        Release tracked instances in build order, then drop all state.
        Failures are logged and collected; every instance gets its release
        attempt. Calling dispose() again is a no-op.
        """
        with self._registry_lock:
            self._disposed = True
            self._registry.clear()
        with self._tracked_lock:
            tracked, self._tracked = self._tracked, []

        if tracked:
            logger.debug("Disposing {} tracked instance(s)", len(tracked))
        failures = [f for f in (self._release(obj) for obj in tracked) if f is not None]

        if failures and self.settings.raise_on_release_error:
            raise TeardownError(failures)
        return failures

    def __enter__(self) -> "Container":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.dispose()
        except TeardownError as e:
            if exc is None:
                raise
            # Keep the in-flight exception; the teardown failure is only logged
            logger.error("{} (while handling {})", e, exc_type.__name__)

    # ──────────────────────────────────────────────
    # Internals
    # ──────────────────────────────────────────────
    def _ensure_alive(self) -> None:
        if self._disposed:
            raise ContainerDisposedError()

    def _track(self, instance: T) -> T:
        with self._tracked_lock:
            if not self._disposed:
                self._tracked.append(instance)
                return instance
        logger.warning(
            "{} was built after dispose(); releasing it immediately", type(instance).__name__
        )
        self._release(instance)
        return instance

    def _release(self, instance: Any) -> Optional[ReleaseFailure]:
        for name in self.settings.release_methods:
            release = getattr(instance, name, None)
            if callable(release):
                break
        else:
            return None
        try:
            release()
        except Exception as e:
            logger.opt(exception=e).error(
                "Failed to release {} via {}()", type(instance).__name__, name
            )
            return ReleaseFailure(instance, e)
        return None


# ──────────────────────────────────────────────────────────────
# Process-wide default container
# ──────────────────────────────────────────────────────────────
_default: Optional[Container] = None
_default_lock = threading.Lock()


def default_container() -> Container:
    """Return the process-wide container, creating it on first use."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = Container()
    return _default


def reset_default_container() -> List[ReleaseFailure]:
    """Dispose and forget the process-wide container."""
    global _default
    with _default_lock:
        container, _default = _default, None
    return container.dispose() if container is not None else []


def register(key: Hashable, factory: Factory, overwrite_existing: bool = True) -> bool:
    return default_container().register(key, factory, overwrite_existing)


def decorate(key: Hashable, factory: Decorator) -> None:
    default_container().decorate(key, factory)


def resolve(key: Hashable) -> Any:
    return default_container().resolve(key)


def try_resolve(key: Hashable, default: Any = None) -> Tuple[bool, Any]:
    return default_container().try_resolve(key, default)
