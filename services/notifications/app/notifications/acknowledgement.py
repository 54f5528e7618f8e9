"""Marking notifications read.

Acknowledging a row that belongs to a creation group (comment / comment_thread /
tip with a creation id) acknowledges every unread row about that creation for the
recipient, including rows too old to be shown grouped. Everything else is
acknowledged on its own.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.notifications import service
from app.notifications.exceptions import NotificationNotFoundError
from app.notifications.parsing import extract_creation_id, is_collapsible
from app.notifications.types import RecipientScope

logger = logging.getLogger(__name__)


async def acknowledge(notification_id: int, scope: RecipientScope, db: AsyncSession) -> int:
    """Acknowledge ``notification_id`` (or its whole group). Returns rows changed.

    Raises NotificationNotFoundError when the id is not visible to ``scope``.
    """
    row = await service.get_notification_by_id(notification_id, scope, db)
    if row is None:
        raise NotificationNotFoundError(notification_id)

    creation_id = extract_creation_id(row.target, row.link)
    if not is_collapsible(row.type, creation_id):
        return await service.acknowledge_by_id(notification_id, scope, db)

    try:
        async with db.begin_nested():
            return await service.acknowledge_for_recipient_and_creation(scope, creation_id, db)
    except SQLAlchemyError as exc:
        logger.warning(
            "Group acknowledgement failed for notification id=%s creation_id=%s, "
            "falling back to single row: %s",
            notification_id,
            creation_id,
            exc,
        )
    return await service.acknowledge_by_id(notification_id, scope, db)


async def acknowledge_all(scope: RecipientScope, db: AsyncSession) -> int:
    return await service.acknowledge_all_for_recipient(scope, db)
