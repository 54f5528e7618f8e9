"""Notifications controller: orchestration layer between router and service."""

from datetime import datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError
from app.models.notification import Notification
from app.notifications import acknowledgement, service
from app.notifications.collapse import DEFAULT_COLLAPSE_WINDOW, collapse_notifications
from app.notifications.exceptions import NotificationNotFoundError
from app.notifications.lookups import DisplayLookups, SqlDisplayLookups
from app.notifications.parsing import cached_creation_title, extract_creation_id
from app.notifications.resolver import resolve_notification_display
from app.notifications.schemas import (
    AcknowledgeResponse,
    CreateNotificationRequest,
    CreateNotificationResponse,
    NotificationView,
    NotificationsResponse,
    UnreadCountResponse,
)
from app.notifications.types import RecipientScope, ResolvedNotification

DEFAULT_TITLE = "Notification"


async def resolve_row(row: Notification, lookups: DisplayLookups) -> ResolvedNotification:
    """Live display text for ``row``, falling back to its stored text."""
    display = await resolve_notification_display(row, lookups)
    creation_title = display.creation_title if display else None
    return ResolvedNotification(
        id=row.id,
        title=(display.title if display else row.title) or DEFAULT_TITLE,
        message=(display.message if display else row.message) or "",
        link=display.link if display else row.link,
        type=row.type,
        created_at=row.created_at,
        acknowledged_at=row.acknowledged_at,
        creation_id=extract_creation_id(row.target, row.link),
        creation_title=creation_title or cached_creation_title(row.meta),
    )


async def resolve_and_collapse(
    scope: RecipientScope,
    db: AsyncSession,
    *,
    now: datetime | None = None,
    window: timedelta = DEFAULT_COLLAPSE_WINDOW,
) -> NotificationsResponse:
    rows = await service.list_notifications(scope, db)
    lookups = SqlDisplayLookups(db)
    # Every row is resolved before grouping starts; grouping reads creation ids/titles.
    resolved = [await resolve_row(row, lookups) for row in rows]
    entries = collapse_notifications(
        resolved, now=now or datetime.now(timezone.utc), window=window
    )
    return NotificationsResponse(
        notifications=[NotificationView.model_validate(e) for e in entries]
    )


async def get_unread_count(scope: RecipientScope, db: AsyncSession) -> UnreadCountResponse:
    return UnreadCountResponse(count=await service.count_unread(scope, db))


async def acknowledge(
    notification_id: int, scope: RecipientScope, db: AsyncSession
) -> AcknowledgeResponse:
    try:
        updated = await acknowledgement.acknowledge(notification_id, scope, db)
    except NotificationNotFoundError:
        raise NotFoundError("Notification")
    return AcknowledgeResponse(updated=updated)


async def acknowledge_all(scope: RecipientScope, db: AsyncSession) -> AcknowledgeResponse:
    return AcknowledgeResponse(updated=await acknowledgement.acknowledge_all(scope, db))


async def create_notification(
    body: CreateNotificationRequest, db: AsyncSession
) -> CreateNotificationResponse:
    notification = await service.create_notification(
        recipient_id=body.recipient_id,
        recipient_role=body.recipient_role,
        type_=body.type.value if body.type else None,
        actor_id=body.actor_id,
        target=body.target,
        meta=body.meta,
        title=body.title,
        message=body.message,
        link=body.link,
        db=db,
    )
    return CreateNotificationResponse(id=notification.id)
