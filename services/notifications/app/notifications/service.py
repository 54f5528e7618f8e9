"""Notification storage: SQLAlchemy queries only, no FastAPI imports.

Every query is scoped to a ``RecipientScope``: rows addressed to the user, plus
rows broadcast to the user's role.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import ColumnElement, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.notification import Notification
from app.notifications.parsing import extract_creation_id
from app.notifications.types import RecipientScope


def _in_scope(scope: RecipientScope) -> ColumnElement[bool]:
    return or_(
        Notification.recipient_id == scope.recipient_id,
        Notification.recipient_role == scope.role,
    )


def _unread() -> ColumnElement[bool]:
    return Notification.acknowledged_at.is_(None)


async def list_notifications(scope: RecipientScope, db: AsyncSession) -> list[Notification]:
    rows = await db.execute(
        select(Notification)
        .where(_in_scope(scope))
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .execution_options(populate_existing=True)
    )
    return list(rows.scalars().all())


async def get_notification_by_id(
    notification_id: int, scope: RecipientScope, db: AsyncSession
) -> Notification | None:
    return await db.scalar(
        select(Notification)
        .where(Notification.id == notification_id, _in_scope(scope))
        .execution_options(populate_existing=True)
    )


async def count_unread(scope: RecipientScope, db: AsyncSession) -> int:
    count = await db.scalar(
        select(func.count()).select_from(Notification).where(_in_scope(scope), _unread())
    )
    return int(count or 0)


async def _acknowledge_where(db: AsyncSession, *criteria: ColumnElement[bool]) -> int:
    result = await db.execute(
        update(Notification)
        .where(_unread(), *criteria)
        .values(acknowledged_at=datetime.now(timezone.utc))
        .execution_options(synchronize_session=False)
    )
    return result.rowcount or 0


async def acknowledge_by_id(notification_id: int, scope: RecipientScope, db: AsyncSession) -> int:
    return await _acknowledge_where(db, Notification.id == notification_id, _in_scope(scope))


async def acknowledge_for_recipient_and_creation(
    scope: RecipientScope, creation_id: int, db: AsyncSession
) -> int:
    """Acknowledge every unread row in scope about ``creation_id``, regardless of age.

    The creation id is extracted in Python with the same rule the collapse engine
    uses (target first, link fallback), so the rows marked read are exactly the
    rows that would group together.
    """
    rows = await db.execute(
        select(Notification.id, Notification.target, Notification.link).where(
            _in_scope(scope), _unread()
        )
    )
    ids = [
        row.id for row in rows if extract_creation_id(row.target, row.link) == creation_id
    ]
    if not ids:
        return 0
    return await _acknowledge_where(db, Notification.id.in_(ids), _in_scope(scope))


async def acknowledge_all_for_recipient(scope: RecipientScope, db: AsyncSession) -> int:
    return await _acknowledge_where(db, _in_scope(scope))


async def create_notification(
    *,
    title: str,
    message: str = "",
    link: str | None = None,
    recipient_id: UUID | None = None,
    recipient_role: str | None = None,
    type_: str | None = None,
    actor_id: UUID | None = None,
    target: dict[str, Any] | None = None,
    meta: dict[str, Any] | None = None,
    created_at: datetime | None = None,
    db: AsyncSession,
) -> Notification:
    if recipient_id is None and recipient_role is None:
        raise ValueError("A notification needs a recipient_id or a recipient_role")
    notification = Notification(
        recipient_id=recipient_id,
        recipient_role=recipient_role,
        type=type_,
        actor_id=actor_id,
        target=target,
        meta=meta,
        title=title,
        message=message,
        link=link,
        created_at=created_at or datetime.now(timezone.utc),
        acknowledged_at=None,
    )
    db.add(notification)
    await db.flush()
    await db.refresh(notification)
    return notification
