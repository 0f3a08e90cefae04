"""Service lifetimes for the DI container."""
from enum import Enum


class Scope(Enum):
    # One instance for the container's lifetime.
    SINGLETON = "singleton"
    # One instance per request scope.
    SCOPED = "scoped"
    # New instance on every resolve.
    TRANSIENT = "transient"
