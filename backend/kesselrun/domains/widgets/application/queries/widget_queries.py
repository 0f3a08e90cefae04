"""Queries for the widgets context."""
from dataclasses import dataclass
from uuid import UUID

from kesselrun.infrastructure.cqrs import Query


@dataclass(frozen=True)
class GetWidgetQuery(Query):
    widget_id: UUID


@dataclass(frozen=True)
class ListWidgetsQuery(Query):
    limit: int = 50
    offset: int = 0
