"""Query handlers for the widgets context."""
from __future__ import annotations

from typing import List, Tuple

from kesselrun.infrastructure.cqrs import QueryHandler, query_handler
from kesselrun.shared_kernel.exceptions import EntityNotFoundError
from kesselrun.domains.widgets.domain.entities import Widget
from kesselrun.domains.widgets.infrastructure.repositories import WidgetRepository
from kesselrun.domains.widgets.application.queries.widget_queries import (
    GetWidgetQuery,
    ListWidgetsQuery,
)


@query_handler(GetWidgetQuery)
class GetWidgetHandler(QueryHandler[GetWidgetQuery, Widget]):
    def __init__(self, repository: WidgetRepository) -> None:
        self.repository = repository

    async def handle(self, query: GetWidgetQuery) -> Widget:
        widget = await self.repository.get_by_id(query.widget_id)
        if widget is None:
            raise EntityNotFoundError(
                f"Widget {query.widget_id} not found",
                details={"widget_id": str(query.widget_id)},
            )
        return widget


@query_handler(ListWidgetsQuery)
class ListWidgetsHandler(QueryHandler[ListWidgetsQuery, Tuple[List[Widget], int]]):
    def __init__(self, repository: WidgetRepository) -> None:
        self.repository = repository

    async def handle(self, query: ListWidgetsQuery) -> Tuple[List[Widget], int]:
        return await self.repository.list(limit=query.limit, offset=query.offset)
