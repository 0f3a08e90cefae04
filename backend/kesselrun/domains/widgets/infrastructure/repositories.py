"""Widget repositories."""
from __future__ import annotations

import threading
from copy import copy
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from kesselrun.domains.widgets.domain.entities import Widget


class WidgetRepository:
    async def get_by_id(self, widget_id: UUID) -> Optional[Widget]:
        raise NotImplementedError

    async def get_by_name(self, name: str) -> Optional[Widget]:
        raise NotImplementedError

    async def list(self, limit: int, offset: int) -> Tuple[List[Widget], int]:
        raise NotImplementedError

    async def save(self, widget: Widget) -> None:
        raise NotImplementedError


class InMemoryWidgetRepository(WidgetRepository):
    """Process-local store; returns copies so callers cannot mutate stored state."""

    def __init__(self) -> None:
        self._widgets: Dict[UUID, Widget] = {}
        self._lock = threading.Lock()

    async def get_by_id(self, widget_id: UUID) -> Optional[Widget]:
        with self._lock:
            widget = self._widgets.get(widget_id)
        return copy(widget) if widget else None

    async def get_by_name(self, name: str) -> Optional[Widget]:
        needle = name.strip().casefold()
        with self._lock:
            for widget in self._widgets.values():
                if widget.name.casefold() == needle:
                    return copy(widget)
        return None

    async def list(self, limit: int, offset: int) -> Tuple[List[Widget], int]:
        with self._lock:
            widgets = sorted(self._widgets.values(), key=lambda w: w.created_at)
        return [copy(w) for w in widgets[offset:offset + limit]], len(widgets)

    async def save(self, widget: Widget) -> None:
        with self._lock:
            self._widgets[widget.id] = copy(widget)
