"""Shared kernel exception hierarchy."""
import logging
from typing import Optional, Dict, Any, List, Sequence, Tuple


class DomainException(Exception):
    """Base exception for all domain errors."""

    default_code = "DOMAIN_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}


class ConfigurationError(DomainException):
    """Raised when handler wiring is invalid."""

    default_code = "CONFIGURATION_ERROR"


class NotRegisteredError(ConfigurationError):
    """Raised when no handler exists for a request shape."""

    default_code = "HANDLER_NOT_REGISTERED"

    def __init__(self, request_type: type) -> None:
        super().__init__(
            f"No handler registered for {request_type.__name__}",
            details={"request_type": request_type.__name__},
        )
        self.request_type = request_type


class DuplicateRegistrationError(ConfigurationError):
    """Raised when a request shape is registered twice."""

    default_code = "DUPLICATE_REGISTRATION"

    def __init__(self, request_type: type) -> None:
        super().__init__(
            f"A handler is already registered for {request_type.__name__}",
            details={"request_type": request_type.__name__},
        )
        self.request_type = request_type


class ValidationFailedError(DomainException):
    """Raised when business validation rejects a request."""

    default_code = "VALIDATION_FAILED"

    def __init__(self, errors: Sequence[Tuple[str, str]]) -> None:
        self.errors: List[Tuple[str, str]] = list(errors)
        super().__init__(
            "; ".join(message for _, message in self.errors) or "validation failed",
            details={
                "errors": [{"field": field, "message": message} for field, message in self.errors]
            },
        )


class HandlerExecutionError(DomainException):
    """Raised when a handler's business logic fails."""

    default_code = "HANDLER_FAILED"


class EntityNotFoundError(HandlerExecutionError):
    """Raised when a domain entity is not found."""

    default_code = "NOT_FOUND"


class ConflictError(HandlerExecutionError):
    """Raised when a change conflicts with current state."""

    default_code = "CONFLICT"


def determine_log_level(exc: BaseException) -> int:
    """Rejected requests log as warnings, everything else as errors."""
    if isinstance(exc, (ValidationFailedError, EntityNotFoundError, ConflictError)):
        return logging.WARNING
    return logging.ERROR
