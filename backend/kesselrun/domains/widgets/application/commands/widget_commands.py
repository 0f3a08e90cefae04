"""Commands for the widgets context."""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from kesselrun.infrastructure.cqrs import Command


@dataclass(frozen=True)
class CreateWidgetCommand(Command):
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class RenameWidgetCommand(Command):
    widget_id: UUID
    name: str
