"""CQRS infrastructure for commands and queries."""

from .handlers import RequestHandler, HandlerDecorator, HandlerFactory, DecoratorFactory
from .commands import Command, CommandHandler
from .queries import Query, QueryHandler
from .decorators import command_handler, query_handler
from .chain import build_chain
from .registry import HandlerRegistration, HandlerRegistry
from .validation import ValidationFailure, Validator, ValidatorRegistry
from .handler_decorators import (
    LogContextDecorator,
    MetricsDecorator,
    BusinessValidationDecorator,
    COMMAND_PIPELINE,
    QUERY_PIPELINE,
)
from .dispatcher import Dispatcher

__all__ = [
    "RequestHandler",
    "HandlerDecorator",
    "HandlerFactory",
    "DecoratorFactory",
    "Command",
    "CommandHandler",
    "Query",
    "QueryHandler",
    "command_handler",
    "query_handler",
    "build_chain",
    "HandlerRegistration",
    "HandlerRegistry",
    "ValidationFailure",
    "Validator",
    "ValidatorRegistry",
    "LogContextDecorator",
    "MetricsDecorator",
    "BusinessValidationDecorator",
    "COMMAND_PIPELINE",
    "QUERY_PIPELINE",
    "Dispatcher",
]
