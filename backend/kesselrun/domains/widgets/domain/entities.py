"""Widget domain entities."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4


@dataclass
class Widget:
    """Aggregate root for a widget."""

    id: UUID
    name: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(cls, name: str, description: Optional[str] = None) -> "Widget":
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            name=name,
            description=description,
            created_at=now,
            updated_at=now,
        )

    def rename(self, name: str) -> None:
        self.name = name
        self.updated_at = datetime.now(timezone.utc)
