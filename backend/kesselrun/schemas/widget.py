"""Schemas for widget requests and responses."""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Serializes with camelCase keys and accepts either casing on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WidgetCreateRequest(ApiModel):
    name: str
    description: Optional[str] = None


class WidgetRenameRequest(ApiModel):
    name: str


class WidgetResponse(ApiModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: UUID
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class WidgetListResponse(ApiModel):
    items: List[WidgetResponse]
    total: int


class ProblemDetails(ApiModel):
    """Error body returned for rejected or failed requests."""

    type: str = "about:blank"
    title: str
    status: int
    detail: Optional[str] = None
    instance: Optional[str] = None
    code: Optional[str] = None
    errors: Optional[List[dict]] = None
