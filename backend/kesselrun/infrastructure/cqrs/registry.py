"""Registration table mapping request shapes to handler chains."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence, Tuple, Type

from kesselrun.shared_kernel.exceptions import (
    ConfigurationError,
    DuplicateRegistrationError,
    NotRegisteredError,
)

from .chain import build_chain, ordered_decorators
from .decorators import handled_type
from .handlers import DecoratorFactory, HandlerFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandlerRegistration:
    """Construction recipe for one request shape."""

    request_type: Type
    handler_factory: HandlerFactory
    decorators: Tuple[DecoratorFactory, ...] = ()
    factory: HandlerFactory = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        decorators = ordered_decorators(self.decorators)
        object.__setattr__(self, "decorators", decorators)
        object.__setattr__(self, "factory", build_chain(decorators, self.handler_factory))

    @classmethod
    def for_handler(
        cls,
        handler_cls: type,
        factory: Optional[HandlerFactory] = None,
        decorators: Sequence[DecoratorFactory] = (),
    ) -> "HandlerRegistration":
        """Build a registration from a handler class marked with
        ``@command_handler`` or ``@query_handler``."""
        request_type = handled_type(handler_cls)
        if request_type is None:
            raise ConfigurationError(
                f"{handler_cls.__name__} does not declare the request it handles",
                code="UNMARKED_HANDLER",
            )
        return cls(
            request_type=request_type,
            handler_factory=factory or (lambda scope: handler_cls()),
            decorators=decorators,
        )


class HandlerRegistry:
    def __init__(self) -> None:
        self._registrations: Dict[Type, HandlerRegistration] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add(self, registration: HandlerRegistration) -> None:
        if self._frozen:
            raise ConfigurationError(
                f"Cannot register {registration.request_type.__name__}: registry is frozen",
                code="REGISTRY_FROZEN",
            )
        if registration.request_type in self._registrations:
            raise DuplicateRegistrationError(registration.request_type)
        self._registrations[registration.request_type] = registration
        logger.debug(
            "Registered %s with %d decorator(s)",
            registration.request_type.__name__,
            len(registration.decorators),
        )

    def register(
        self,
        request_type: Type,
        handler_factory: HandlerFactory,
        decorators: Sequence[DecoratorFactory] = (),
    ) -> HandlerRegistration:
        registration = HandlerRegistration(request_type, handler_factory, decorators)
        self.add(registration)
        return registration

    def register_all(self, registrations: Iterable[HandlerRegistration]) -> None:
        for registration in registrations:
            self.add(registration)

    def resolve(self, request_type: Type) -> HandlerRegistration:
        registration = self._registrations.get(request_type)
        if registration is None:
            raise NotRegisteredError(request_type)
        return registration

    def registered_types(self) -> Tuple[Type, ...]:
        return tuple(self._registrations)

    def freeze(self) -> None:
        """Close the table; no registrations are accepted afterwards."""
        self._frozen = True
        logger.info("Handler registry frozen with %d registration(s)", len(self._registrations))
