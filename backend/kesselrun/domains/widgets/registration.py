"""Static handler and validator table for the widgets context."""
from __future__ import annotations

from typing import List

from kesselrun.infrastructure.cqrs import (
    COMMAND_PIPELINE,
    QUERY_PIPELINE,
    HandlerRegistration,
    ValidatorRegistry,
)
from kesselrun.domains.widgets.application.commands.widget_commands import (
    CreateWidgetCommand,
    RenameWidgetCommand,
)
from kesselrun.domains.widgets.application.handlers.command_handlers import (
    CreateWidgetHandler,
    RenameWidgetHandler,
)
from kesselrun.domains.widgets.application.handlers.query_handlers import (
    GetWidgetHandler,
    ListWidgetsHandler,
)
from kesselrun.domains.widgets.application.validators import (
    CreateWidgetValidator,
    RenameWidgetValidator,
)
from kesselrun.domains.widgets.infrastructure.repositories import WidgetRepository


def widget_registrations() -> List[HandlerRegistration]:
    return [
        # commands: log, metrics, then validation
        HandlerRegistration.for_handler(
            CreateWidgetHandler,
            lambda scope: CreateWidgetHandler(scope.resolve(WidgetRepository)),
            COMMAND_PIPELINE,
        ),
        HandlerRegistration.for_handler(
            RenameWidgetHandler,
            lambda scope: RenameWidgetHandler(scope.resolve(WidgetRepository)),
            COMMAND_PIPELINE,
        ),
        # queries: log, metrics
        HandlerRegistration.for_handler(
            GetWidgetHandler,
            lambda scope: GetWidgetHandler(scope.resolve(WidgetRepository)),
            QUERY_PIPELINE,
        ),
        HandlerRegistration.for_handler(
            ListWidgetsHandler,
            lambda scope: ListWidgetsHandler(scope.resolve(WidgetRepository)),
            QUERY_PIPELINE,
        ),
    ]


def register_widget_validators(validators: ValidatorRegistry, name_max_length: int) -> None:
    validators.register(CreateWidgetCommand, CreateWidgetValidator(name_max_length))
    validators.register(RenameWidgetCommand, RenameWidgetValidator(name_max_length))
