"""Version 1 of the HTTP API."""
from fastapi import APIRouter

from kesselrun.api.v1.endpoints import widgets

api_router = APIRouter()
api_router.include_router(widgets.router, prefix="/widgets", tags=["Widgets"])
