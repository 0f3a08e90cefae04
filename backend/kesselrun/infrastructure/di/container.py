"""Simple dependency injection container."""
from __future__ import annotations

from typing import TypeVar, Type, Dict, Callable, Any, Optional, Iterator
import threading
from contextlib import contextmanager

from .scopes import Scope

T = TypeVar("T")


class Registration:
    def __init__(self, factory: Callable[["Container"], Any], scope: Scope) -> None:
        self.factory = factory
        self.scope = scope


class Container:
    _instance: Optional["Container"] = None
    _lock = threading.Lock()

    def __init__(self) -> None:
        self._registrations: Dict[Type, Registration] = {}
        self._singletons: Dict[Type, Any] = {}
        self._singleton_lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> "Container":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (shutdown and tests)."""
        cls._instance = None

    def register(
        self,
        interface: Type[T],
        factory: Callable[["Container"], T],
        scope: Scope = Scope.SINGLETON,
    ) -> None:
        self._registrations[interface] = Registration(factory, scope)

    def register_instance(self, interface: Type[T], instance: T) -> None:
        self.register(interface, lambda c: instance, Scope.SINGLETON)
        self._singletons[interface] = instance

    def _registration(self, interface: Type) -> Registration:
        if interface not in self._registrations:
            raise KeyError(f"No registration found for {interface.__name__}")
        return self._registrations[interface]

    def _singleton(self, interface: Type[T], registration: Registration) -> T:
        if interface not in self._singletons:
            with self._singleton_lock:
                if interface not in self._singletons:
                    self._singletons[interface] = registration.factory(self)
        return self._singletons[interface]

    def resolve(self, interface: Type[T]) -> T:
        registration = self._registration(interface)

        if registration.scope == Scope.SINGLETON:
            return self._singleton(interface, registration)

        if registration.scope == Scope.SCOPED:
            raise RuntimeError("Cannot resolve scoped service outside of scope")

        return registration.factory(self)

    @contextmanager
    def create_scope(self) -> Iterator["ScopedContainer"]:
        """Create a scope for scoped services (per request)."""
        scope = ScopedContainer(self)
        try:
            yield scope
        finally:
            scope.dispose()

    def is_registered(self, interface: Type) -> bool:
        return interface in self._registrations


class ScopedContainer:
    """Child view of a container holding the instances of one scope.

    Each request gets its own child, so concurrent requests never share
    scoped services.
    """

    def __init__(self, root: Container) -> None:
        self._root = root
        self._scoped_instances: Dict[Type, Any] = {}

    def resolve(self, interface: Type[T]) -> T:
        registration = self._root._registration(interface)

        if registration.scope == Scope.SINGLETON:
            return self._root._singleton(interface, registration)

        if registration.scope == Scope.SCOPED:
            if interface not in self._scoped_instances:
                self._scoped_instances[interface] = registration.factory(self)
            return self._scoped_instances[interface]

        return registration.factory(self)

    def dispose(self) -> None:
        self._scoped_instances = {}
