"""Shared kernel primitives (errors)."""

from .exceptions import (
    DomainException,
    ConfigurationError,
    NotRegisteredError,
    DuplicateRegistrationError,
    ValidationFailedError,
    HandlerExecutionError,
    EntityNotFoundError,
    ConflictError,
    determine_log_level,
)

__all__ = [
    "DomainException",
    "ConfigurationError",
    "NotRegisteredError",
    "DuplicateRegistrationError",
    "ValidationFailedError",
    "HandlerExecutionError",
    "EntityNotFoundError",
    "ConflictError",
    "determine_log_level",
]
