"""Request-scoped dependencies for endpoints."""
from fastapi import Request

from kesselrun.infrastructure.cqrs import Dispatcher


def get_dispatcher(request: Request) -> Dispatcher:
    return request.app.state.container.resolve(Dispatcher)
