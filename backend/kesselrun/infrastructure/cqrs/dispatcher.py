"""Dispatch of commands and queries through their handler chains."""
from __future__ import annotations

import logging
from typing import Any, Union

from kesselrun.infrastructure.di.container import Container
from kesselrun.shared_kernel.exceptions import DomainException, HandlerExecutionError

from .commands import Command
from .queries import Query
from .registry import HandlerRegistry

logger = logging.getLogger(__name__)


class Dispatcher:
    """Resolve the registered chain for a request and run it once.

    Holds no per-dispatch state; concurrent dispatches are independent.
    """

    def __init__(self, registry: HandlerRegistry, container: Container) -> None:
        self._registry = registry
        self._container = container

    async def dispatch(self, request: Union[Command, Query]) -> Any:
        registration = self._registry.resolve(type(request))
        with self._container.create_scope() as scope:
            handler = registration.factory(scope)
            try:
                return await handler.handle(request)
            except DomainException:
                raise
            except Exception as exc:
                logger.debug("Handler for %s raised %s", type(request).__name__, type(exc).__name__)
                raise HandlerExecutionError(
                    f"{type(request).__name__} failed: {exc}",
                    details={"request_type": type(request).__name__},
                ) from exc
