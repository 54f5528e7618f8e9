from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.database import get_db
from app.dependencies import get_recipient_scope, get_settings
from app.notifications import controller
from app.notifications.schemas import (
    AcknowledgeRequest,
    AcknowledgeResponse,
    NotificationsResponse,
    UnreadCountResponse,
)
from app.notifications.types import RecipientScope

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get(
    "",
    response_model=NotificationsResponse,
    summary="List my notifications",
    description=(
        "Recent comments and tips on the same creation are grouped into one "
        "`creation_activity` entry. Recent entries come first; each bucket is "
        "ordered unread-first, then newest-first."
    ),
)
async def list_notifications(
    scope: RecipientScope = Depends(get_recipient_scope),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
) -> NotificationsResponse:
    return await controller.resolve_and_collapse(
        scope, db, window=timedelta(hours=settings.collapse_window_hours)
    )


@router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    summary="Count my unread notifications",
)
async def unread_count(
    scope: RecipientScope = Depends(get_recipient_scope),
    db: AsyncSession = Depends(get_db),
) -> UnreadCountResponse:
    return await controller.get_unread_count(scope, db)


@router.post(
    "/acknowledge",
    response_model=AcknowledgeResponse,
    summary="Mark a notification (or its creation group) as read",
)
async def acknowledge(
    body: AcknowledgeRequest,
    scope: RecipientScope = Depends(get_recipient_scope),
    db: AsyncSession = Depends(get_db),
) -> AcknowledgeResponse:
    return await controller.acknowledge(body.id, scope, db)


@router.post(
    "/acknowledge-all",
    response_model=AcknowledgeResponse,
    summary="Mark all my notifications as read",
)
async def acknowledge_all(
    scope: RecipientScope = Depends(get_recipient_scope),
    db: AsyncSession = Depends(get_db),
) -> AcknowledgeResponse:
    return await controller.acknowledge_all(scope, db)
