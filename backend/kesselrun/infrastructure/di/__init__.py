"""Dependency injection container."""

from .container import Container, ScopedContainer
from .scopes import Scope

__all__ = [
    "Container",
    "ScopedContainer",
    "Scope",
]
