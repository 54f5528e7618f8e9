from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.models.enums import NotificationType


class NotificationView(BaseModel):
    """One entry of the notifications list: a single notification or a creation group."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    message: str
    link: str | None = None
    type: str | None = Field(
        default=None,
        description="comment, comment_thread, tip, creation_activity (group) or null (legacy).",
    )
    created_at: datetime
    acknowledged_at: datetime | None = None
    count: int | None = Field(default=None, description="Group size; null for single entries.")
    unread_count: int | None = Field(
        default=None, description="Unread members of a group; null for single entries."
    )


class NotificationsResponse(BaseModel):
    notifications: list[NotificationView]


class UnreadCountResponse(BaseModel):
    count: int


class AcknowledgeRequest(BaseModel):
    id: int = Field(gt=0, description="Notification id, or a group entry's id.")


class AcknowledgeResponse(BaseModel):
    ok: bool = True
    updated: int = Field(description="Number of notifications marked read.")


class CreateNotificationRequest(BaseModel):
    recipient_id: UUID | None = None
    recipient_role: str | None = None
    type: NotificationType | None = None
    actor_id: UUID | None = None
    target: dict[str, Any] | None = None
    meta: dict[str, Any] | None = None
    title: str = Field(min_length=1, max_length=255)
    message: str = ""
    link: str | None = Field(default=None, max_length=512)

    @model_validator(mode="after")
    def _require_recipient(self) -> CreateNotificationRequest:
        if self.recipient_id is None and not self.recipient_role:
            raise ValueError("recipient_id or recipient_role is required")
        return self


class CreateNotificationResponse(BaseModel):
    id: int
