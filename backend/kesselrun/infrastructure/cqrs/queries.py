"""Query primitives for CQRS."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TypeVar

from .handlers import RequestHandler

TQuery = TypeVar("TQuery", bound="Query")
TResult = TypeVar("TResult")


class Query(ABC):
    """Marker base class for queries."""


class QueryHandler(RequestHandler[TQuery, TResult]):
    @abstractmethod
    async def handle(self, query: TQuery) -> TResult:
        raise NotImplementedError
