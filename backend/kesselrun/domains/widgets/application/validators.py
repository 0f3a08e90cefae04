"""Business validators for widget commands."""
from __future__ import annotations

from typing import List, Optional

from kesselrun.infrastructure.cqrs import ValidationFailure, Validator
from kesselrun.domains.widgets.application.commands.widget_commands import (
    CreateWidgetCommand,
    RenameWidgetCommand,
)

DESCRIPTION_MAX_LENGTH = 500


def _name_failures(name: Optional[str], max_length: int) -> List[ValidationFailure]:
    if not name or not name.strip():
        return [ValidationFailure("name", "name required")]
    if len(name.strip()) > max_length:
        return [ValidationFailure("name", f"name must be at most {max_length} characters")]
    return []


class CreateWidgetValidator(Validator[CreateWidgetCommand]):
    def __init__(self, name_max_length: int) -> None:
        self.name_max_length = name_max_length

    async def validate(self, request: CreateWidgetCommand) -> List[ValidationFailure]:
        failures = _name_failures(request.name, self.name_max_length)
        if request.description and len(request.description) > DESCRIPTION_MAX_LENGTH:
            failures.append(
                ValidationFailure(
                    "description",
                    f"description must be at most {DESCRIPTION_MAX_LENGTH} characters",
                )
            )
        return failures


class RenameWidgetValidator(Validator[RenameWidgetCommand]):
    def __init__(self, name_max_length: int) -> None:
        self.name_max_length = name_max_length

    async def validate(self, request: RenameWidgetCommand) -> List[ValidationFailure]:
        return _name_failures(request.name, self.name_max_length)
