"""Command handlers for the widgets context."""
from __future__ import annotations

import logging

from kesselrun.infrastructure.cqrs import CommandHandler, command_handler
from kesselrun.shared_kernel.exceptions import ConflictError, EntityNotFoundError
from kesselrun.domains.widgets.domain.entities import Widget
from kesselrun.domains.widgets.infrastructure.repositories import WidgetRepository
from kesselrun.domains.widgets.application.commands.widget_commands import (
    CreateWidgetCommand,
    RenameWidgetCommand,
)

logger = logging.getLogger(__name__)


async def _ensure_name_available(repository: WidgetRepository, name: str, widget_id=None) -> None:
    existing = await repository.get_by_name(name)
    if existing is not None and existing.id != widget_id:
        raise ConflictError(
            f"A widget named '{name}' already exists",
            details={"widget_id": str(existing.id)},
        )


@command_handler(CreateWidgetCommand)
class CreateWidgetHandler(CommandHandler[CreateWidgetCommand, Widget]):
    """Create a widget with a generated id."""

    def __init__(self, repository: WidgetRepository) -> None:
        self.repository = repository

    async def handle(self, command: CreateWidgetCommand) -> Widget:
        name = command.name.strip()
        await _ensure_name_available(self.repository, name)
        widget = Widget.create(name=name, description=command.description)
        await self.repository.save(widget)
        logger.info("Created widget %s", widget.id)
        return widget


@command_handler(RenameWidgetCommand)
class RenameWidgetHandler(CommandHandler[RenameWidgetCommand, Widget]):
    def __init__(self, repository: WidgetRepository) -> None:
        self.repository = repository

    async def handle(self, command: RenameWidgetCommand) -> Widget:
        widget = await self.repository.get_by_id(command.widget_id)
        if widget is None:
            raise EntityNotFoundError(
                f"Widget {command.widget_id} not found",
                details={"widget_id": str(command.widget_id)},
            )
        name = command.name.strip()
        await _ensure_name_available(self.repository, name, widget.id)
        widget.rename(name)
        await self.repository.save(widget)
        return widget
