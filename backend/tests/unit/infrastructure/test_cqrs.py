import asyncio
from dataclasses import dataclass

import pytest

from kesselrun.infrastructure.cqrs import (
    Command,
    CommandHandler,
    Dispatcher,
    HandlerDecorator,
    HandlerRegistration,
    HandlerRegistry,
    Query,
    QueryHandler,
    build_chain,
    command_handler,
)
from kesselrun.infrastructure.di.container import Container
from kesselrun.shared_kernel.exceptions import (
    ConfigurationError,
    DuplicateRegistrationError,
    EntityNotFoundError,
    HandlerExecutionError,
    NotRegisteredError,
)


@dataclass(frozen=True)
class Ping(Command):
    payload: str = "ping"


@command_handler(Ping)
class PingHandler(CommandHandler[Ping, str]):
    def __init__(self, trace=None) -> None:
        self.trace = trace if trace is not None else []

    async def handle(self, command: Ping) -> str:
        self.trace.append("H")
        return "pong"


class Fetch(Query):
    pass


class FetchHandler(QueryHandler[Fetch, int]):
    async def handle(self, query: Fetch) -> int:
        return 42


class Unregistered(Command):
    pass


class Recording(HandlerDecorator):
    def __init__(self, inner, name, trace) -> None:
        super().__init__(inner)
        self.name = name
        self.trace = trace

    async def handle(self, request):
        self.trace.append(f"{self.name}-before")
        try:
            return await self.inner.handle(request)
        finally:
            self.trace.append(f"{self.name}-after")


def recording(name, trace):
    return lambda inner, scope: Recording(inner, name, trace)


def make_dispatcher(*registrations) -> Dispatcher:
    registry = HandlerRegistry()
    registry.register_all(registrations)
    registry.freeze()
    return Dispatcher(registry, Container())


@pytest.mark.asyncio
async def test_dispatch_routes_commands_and_queries():
    dispatcher = make_dispatcher(
        HandlerRegistration(Ping, lambda scope: PingHandler()),
        HandlerRegistration(Fetch, lambda scope: FetchHandler()),
    )

    assert await dispatcher.dispatch(Ping()) == "pong"
    assert await dispatcher.dispatch(Fetch()) == 42


@pytest.mark.asyncio
async def test_decorators_run_in_declared_order():
    trace = []
    dispatcher = make_dispatcher(
        HandlerRegistration(
            Ping,
            lambda scope: PingHandler(trace),
            (recording("A", trace), recording("B", trace)),
        )
    )

    for _ in range(3):
        trace.clear()
        await dispatcher.dispatch(Ping())
        assert trace == ["A-before", "B-before", "H", "B-after", "A-after"]


@pytest.mark.asyncio
async def test_errors_propagate_back_through_the_chain():
    trace = []

    class Missing(CommandHandler[Ping, str]):
        async def handle(self, command: Ping) -> str:
            trace.append("H")
            raise EntityNotFoundError("gone")

    dispatcher = make_dispatcher(
        HandlerRegistration(Ping, lambda scope: Missing(), [recording("A", trace), recording("B", trace)])
    )

    with pytest.raises(EntityNotFoundError):
        await dispatcher.dispatch(Ping())
    assert trace == ["A-before", "B-before", "H", "B-after", "A-after"]


@pytest.mark.asyncio
async def test_unregistered_request_fails_without_invoking_anything():
    built = []

    def factory(scope):
        built.append(True)
        return PingHandler()

    dispatcher = make_dispatcher(
        HandlerRegistration(Ping, factory, (recording("A", built),))
    )

    with pytest.raises(NotRegisteredError) as exc_info:
        await dispatcher.dispatch(Unregistered())
    assert exc_info.value.request_type is Unregistered
    assert built == []


def test_duplicate_registration_keeps_first():
    registry = HandlerRegistry()
    first = registry.register(Ping, lambda scope: PingHandler())

    with pytest.raises(DuplicateRegistrationError):
        registry.register(Ping, lambda scope: PingHandler())
    assert registry.resolve(Ping) is first


def test_frozen_registry_rejects_registration():
    registry = HandlerRegistry()
    registry.freeze()

    with pytest.raises(ConfigurationError) as exc_info:
        registry.register(Ping, lambda scope: PingHandler())
    assert exc_info.value.code == "REGISTRY_FROZEN"
    assert registry.registered_types() == ()


def test_unordered_decorators_are_rejected():
    with pytest.raises(ConfigurationError):
        build_chain({recording("A", [])}, lambda scope: PingHandler())


def test_for_handler_reads_marker():
    registration = HandlerRegistration.for_handler(PingHandler)
    assert registration.request_type is Ping


def test_for_handler_requires_marker():
    with pytest.raises(ConfigurationError) as exc_info:
        HandlerRegistration.for_handler(FetchHandler)
    assert exc_info.value.code == "UNMARKED_HANDLER"


@pytest.mark.asyncio
async def test_unexpected_handler_errors_are_classified():
    class Broken(CommandHandler[Ping, str]):
        async def handle(self, command: Ping) -> str:
            raise RuntimeError("boom")

    dispatcher = make_dispatcher(HandlerRegistration(Ping, lambda scope: Broken()))

    with pytest.raises(HandlerExecutionError) as exc_info:
        await dispatcher.dispatch(Ping())
    assert isinstance(exc_info.value.__cause__, RuntimeError)


@pytest.mark.asyncio
async def test_concurrent_dispatches_are_independent():
    class Echo(CommandHandler[Ping, str]):
        async def handle(self, command: Ping) -> str:
            await asyncio.sleep(0)
            return command.payload

    dispatcher = make_dispatcher(HandlerRegistration(Ping, lambda scope: Echo()))

    results = await asyncio.gather(*(dispatcher.dispatch(Ping(str(i))) for i in range(20)))
    assert results == [str(i) for i in range(20)]
