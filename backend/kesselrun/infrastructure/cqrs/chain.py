"""Composition of handler decorator chains."""
from __future__ import annotations

from typing import Sequence, Tuple

from kesselrun.infrastructure.di.container import ScopedContainer
from kesselrun.shared_kernel.exceptions import ConfigurationError

from .handlers import DecoratorFactory, HandlerFactory, RequestHandler


def ordered_decorators(decorators: Sequence[DecoratorFactory]) -> Tuple[DecoratorFactory, ...]:
    """Validate that decorators come as an explicit, ordered sequence."""
    if not isinstance(decorators, (list, tuple)):
        raise ConfigurationError(
            f"Decorators must be a list or tuple, got {type(decorators).__name__}",
            code="UNORDERED_DECORATORS",
        )
    for factory in decorators:
        if not callable(factory):
            raise ConfigurationError(
                f"Decorator factory {factory!r} is not callable",
                code="INVALID_DECORATOR",
            )
    return tuple(decorators)


def build_chain(decorators: Sequence[DecoratorFactory], terminal: HandlerFactory) -> HandlerFactory:
    """Compose decorators around a terminal handler factory.

    The first decorator is the outermost: a call flows
    decorators[0] -> decorators[1] -> ... -> terminal and the result or
    error flows back in reverse order.
    """
    chain = ordered_decorators(decorators)

    def factory(scope: ScopedContainer) -> RequestHandler:
        handler = terminal(scope)
        for decorator in reversed(chain):
            handler = decorator(handler, scope)
        return handler

    return factory
