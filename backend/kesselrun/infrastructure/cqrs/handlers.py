"""Handler capability shared by handlers and decorators."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

from kesselrun.infrastructure.di.container import ScopedContainer

TRequest = TypeVar("TRequest")
TResult = TypeVar("TResult")


class RequestHandler(ABC, Generic[TRequest, TResult]):
    @abstractmethod
    async def handle(self, request: TRequest) -> TResult:
        raise NotImplementedError


HandlerFactory = Callable[[ScopedContainer], RequestHandler]
DecoratorFactory = Callable[[RequestHandler, ScopedContainer], RequestHandler]


class HandlerDecorator(RequestHandler[TRequest, TResult]):
    """Wraps an inner handler with a cross-cutting behavior."""

    def __init__(self, inner: RequestHandler[TRequest, Any]) -> None:
        self.inner = inner

    async def handle(self, request: TRequest) -> TResult:
        return await self.inner.handle(request)
