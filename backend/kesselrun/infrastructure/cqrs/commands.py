"""Command primitives for CQRS."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TypeVar

from .handlers import RequestHandler

TCommand = TypeVar("TCommand", bound="Command")
TResult = TypeVar("TResult")


class Command(ABC):
    """Marker base class for commands."""


class CommandHandler(RequestHandler[TCommand, TResult]):
    @abstractmethod
    async def handle(self, command: TCommand) -> TResult:
        raise NotImplementedError
