"""Widget endpoints"""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from kesselrun.api.deps import get_dispatcher
from kesselrun.core.rate_limit import WRITE_LIMIT, limiter
from kesselrun.infrastructure.cqrs import Dispatcher
from kesselrun.schemas.widget import (
    ProblemDetails,
    WidgetCreateRequest,
    WidgetListResponse,
    WidgetRenameRequest,
    WidgetResponse,
)
from kesselrun.domains.widgets.application.commands.widget_commands import (
    CreateWidgetCommand,
    RenameWidgetCommand,
)
from kesselrun.domains.widgets.application.queries.widget_queries import (
    GetWidgetQuery,
    ListWidgetsQuery,
)

router = APIRouter()

ERROR_RESPONSES = {
    404: {"model": ProblemDetails},
    409: {"model": ProblemDetails},
    422: {"model": ProblemDetails},
}


@router.post(
    "",
    response_model=WidgetResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
@limiter.limit(WRITE_LIMIT)
async def create_widget(
    request: Request,
    payload: WidgetCreateRequest,
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """Create a widget."""
    widget = await dispatcher.dispatch(
        CreateWidgetCommand(name=payload.name, description=payload.description)
    )
    return WidgetResponse.model_validate(widget)


@router.get("", response_model=WidgetListResponse)
async def list_widgets(
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """List widgets in creation order."""
    widgets, total = await dispatcher.dispatch(ListWidgetsQuery(limit=limit, offset=offset))
    return WidgetListResponse(
        items=[WidgetResponse.model_validate(widget) for widget in widgets],
        total=total,
    )


@router.get("/{widget_id}", response_model=WidgetResponse, responses=ERROR_RESPONSES)
async def get_widget(
    widget_id: UUID,
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    widget = await dispatcher.dispatch(GetWidgetQuery(widget_id=widget_id))
    return WidgetResponse.model_validate(widget)


@router.put("/{widget_id}/name", response_model=WidgetResponse, responses=ERROR_RESPONSES)
@limiter.limit(WRITE_LIMIT)
async def rename_widget(
    request: Request,
    widget_id: UUID,
    payload: WidgetRenameRequest,
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """Rename a widget."""
    widget = await dispatcher.dispatch(RenameWidgetCommand(widget_id=widget_id, name=payload.name))
    return WidgetResponse.model_validate(widget)
