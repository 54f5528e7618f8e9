"""Value types flowing through the notification pipeline.

raw ``Notification`` row -> ``ResolvedNotification`` -> ``ResolvedNotification | CollapsedEntry``

None of these are persisted; they live for the duration of one request.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from app.models.enums import CREATION_ACTIVITY_TYPE


@dataclass(frozen=True)
class RecipientScope:
    """Rows addressed to ``recipient_id`` or broadcast to ``role``."""

    recipient_id: UUID
    role: str


@dataclass(frozen=True)
class ResolvedDisplay:
    """Live display text for one row, computed from current actor/creation state."""

    title: str
    message: str
    link: str
    creation_title: str | None = None


@dataclass
class ResolvedNotification:
    id: int
    title: str
    message: str
    link: str | None
    type: str | None
    created_at: datetime
    acknowledged_at: datetime | None
    creation_id: int | None = None
    creation_title: str | None = None

    @property
    def is_read(self) -> bool:
        return self.acknowledged_at is not None


@dataclass
class CollapsedEntry:
    """Synthetic entry standing in for two or more recent notifications on one creation.

    ``id`` is the newest member's id, so acknowledging the entry acknowledges that row
    (and, through the group rule, the rest of the creation's rows).
    """

    id: int
    title: str
    message: str
    link: str | None
    created_at: datetime
    acknowledged_at: datetime | None
    count: int
    unread_count: int
    type: str = CREATION_ACTIVITY_TYPE

    @property
    def is_read(self) -> bool:
        return self.acknowledged_at is not None


NotificationEntry = ResolvedNotification | CollapsedEntry
