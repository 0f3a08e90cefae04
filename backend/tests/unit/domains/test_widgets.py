from uuid import UUID, uuid4

import pytest
from structlog.testing import capture_logs

from kesselrun.core.config import Settings
from kesselrun.domains.widgets.application.commands.widget_commands import (
    CreateWidgetCommand,
    RenameWidgetCommand,
)
from kesselrun.domains.widgets.application.handlers.command_handlers import CreateWidgetHandler
from kesselrun.domains.widgets.application.queries.widget_queries import (
    GetWidgetQuery,
    ListWidgetsQuery,
)
from kesselrun.domains.widgets.infrastructure.repositories import WidgetRepository
from kesselrun.infrastructure.cqrs import COMMAND_PIPELINE, Dispatcher, HandlerRegistry
from kesselrun.infrastructure.di.container import Container
from kesselrun.infrastructure.di.providers import configure_container
from kesselrun.shared_kernel.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ValidationFailedError,
)


class CountingCreateWidgetHandler(CreateWidgetHandler):
    def __init__(self, repository: WidgetRepository) -> None:
        super().__init__(repository)
        self.calls = 0

    async def handle(self, command: CreateWidgetCommand):
        self.calls += 1
        return await super().handle(command)


def make_container() -> Container:
    container = Container()
    configure_container(
        container,
        Settings(APP_ENV="test", SECRET_KEY="x" * 32, WIDGET_NAME_MAX_LENGTH=10),
    )
    return container


@pytest.fixture
def container():
    return make_container()


@pytest.fixture
def dispatcher(container):
    return container.resolve(Dispatcher)


@pytest.fixture
def counting(container):
    handler = CountingCreateWidgetHandler(container.resolve(WidgetRepository))
    registry = HandlerRegistry()
    registry.register(CreateWidgetCommand, lambda scope: handler, COMMAND_PIPELINE)
    registry.freeze()
    return handler, Dispatcher(registry, container)


@pytest.mark.asyncio
async def test_create_widget_with_empty_name_is_rejected(counting):
    handler, dispatcher = counting

    with capture_logs() as logs:
        with pytest.raises(ValidationFailedError) as exc_info:
            await dispatcher.dispatch(CreateWidgetCommand(name=""))

    assert str(exc_info.value) == "name required"
    assert handler.calls == 0
    events = [entry["event"] for entry in logs if entry.get("request_type") == "CreateWidgetCommand"]
    assert events == ["handler.started", "handler.failed"]
    assert logs[-1]["outcome"] == "failure"


@pytest.mark.asyncio
async def test_create_widget_succeeds(counting):
    handler, dispatcher = counting

    with capture_logs() as logs:
        widget = await dispatcher.dispatch(CreateWidgetCommand(name="gizmo"))

    assert isinstance(widget.id, UUID)
    assert widget.name == "gizmo"
    assert handler.calls == 1
    completed = [entry for entry in logs if entry["event"] == "handler.completed"]
    assert completed[0]["outcome"] == "success"
    assert completed[0]["elapsed_ms"] >= 0


@pytest.mark.asyncio
async def test_configured_registry_covers_widget_requests(container):
    registry = container.resolve(HandlerRegistry)
    assert registry.frozen
    assert set(registry.registered_types()) == {
        CreateWidgetCommand,
        RenameWidgetCommand,
        GetWidgetQuery,
        ListWidgetsQuery,
    }


@pytest.mark.asyncio
async def test_name_length_comes_from_settings(dispatcher):
    with pytest.raises(ValidationFailedError) as exc_info:
        await dispatcher.dispatch(CreateWidgetCommand(name="a" * 11))
    assert exc_info.value.errors == [("name", "name must be at most 10 characters")]


@pytest.mark.asyncio
async def test_duplicate_names_conflict(dispatcher):
    await dispatcher.dispatch(CreateWidgetCommand(name="gizmo"))

    with pytest.raises(ConflictError):
        await dispatcher.dispatch(CreateWidgetCommand(name=" Gizmo "))


@pytest.mark.asyncio
async def test_rename_and_get_widget(dispatcher):
    created = await dispatcher.dispatch(CreateWidgetCommand(name="gizmo"))

    renamed = await dispatcher.dispatch(RenameWidgetCommand(widget_id=created.id, name="gadget"))
    fetched = await dispatcher.dispatch(GetWidgetQuery(widget_id=created.id))

    assert renamed.name == "gadget"
    assert fetched.name == "gadget"
    assert fetched.updated_at >= fetched.created_at


@pytest.mark.asyncio
async def test_rename_missing_widget_raises_not_found(dispatcher):
    with pytest.raises(EntityNotFoundError):
        await dispatcher.dispatch(RenameWidgetCommand(widget_id=uuid4(), name="gadget"))


@pytest.mark.asyncio
async def test_list_widgets_pages_in_creation_order(dispatcher):
    for name in ("one", "two", "three"):
        await dispatcher.dispatch(CreateWidgetCommand(name=name))

    items, total = await dispatcher.dispatch(ListWidgetsQuery(limit=2, offset=1))

    assert total == 3
    assert [widget.name for widget in items] == ["two", "three"]
