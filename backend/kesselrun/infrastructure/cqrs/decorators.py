"""Markers declaring which request shape a handler class serves."""
from __future__ import annotations

from typing import Callable, Optional, Type, TypeVar

T = TypeVar("T")

HANDLES_ATTR = "_handles"


def command_handler(command_type: Type) -> Callable[[T], T]:
    def decorator(handler_cls: T) -> T:
        setattr(handler_cls, HANDLES_ATTR, command_type)
        return handler_cls
    return decorator


def query_handler(query_type: Type) -> Callable[[T], T]:
    def decorator(handler_cls: T) -> T:
        setattr(handler_cls, HANDLES_ATTR, query_type)
        return handler_cls
    return decorator


def handled_type(handler_cls: type) -> Optional[Type]:
    # Only the class's own marker counts; a subclass must declare its own.
    return handler_cls.__dict__.get(HANDLES_ATTR)
