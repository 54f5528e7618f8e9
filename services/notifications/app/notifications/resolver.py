"""Live display text for notification rows.

Text is recomputed on every read from current actor and creation state, so a
rename or retitle after the notification was written shows up immediately.
Any failure degrades to the row's stored title/message/link.
"""

import logging
from typing import Any, assert_never

from app.models.enums import NotificationType
from app.notifications.display_name import get_actor_display_name
from app.notifications.lookups import DisplayLookups
from app.notifications.parsing import (
    as_mapping,
    cached_creation_title,
    coerce_number,
    creation_id_from_target,
    creation_link,
    parse_notification_type,
)
from app.notifications.types import ResolvedDisplay

logger = logging.getLogger(__name__)

TIP_TITLE = "You received a tip"
UNKNOWN_TIP_AMOUNT = "some"


def format_tip_amount(meta: Any) -> str:
    payload = as_mapping(meta) or {}
    amount = coerce_number(payload.get("amount"))
    return f"{amount:.1f}" if amount is not None else UNKNOWN_TIP_AMOUNT


async def _live_creation_title(lookups: DisplayLookups, creation_id: int) -> str | None:
    try:
        creation = await lookups.get_creation(creation_id)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Creation lookup failed for creation_id=%s: %s", creation_id, exc)
        return None
    title = getattr(creation, "title", None)
    if not isinstance(title, str):
        return None
    return title.strip() or None


async def resolve_notification_display(
    row: Any, lookups: DisplayLookups
) -> ResolvedDisplay | None:
    """Resolve title/message/link for ``row``.

    Returns None when the row has no structured type or no actor, or when the actor
    cannot be loaded; the caller then shows the stored text.
    """
    notification_type = parse_notification_type(getattr(row, "type", None))
    actor_id = getattr(row, "actor_id", None)
    if notification_type is None or actor_id is None:
        return None

    creation_id = creation_id_from_target(getattr(row, "target", None))
    creation_title = cached_creation_title(getattr(row, "meta", None))

    try:
        actor = await lookups.get_user(actor_id)
        profile = await lookups.get_profile(actor_id)
    except Exception as exc:  # noqa: BLE001
        logger.warning(
            "Actor lookup failed for notification id=%s actor_id=%s: %s",
            getattr(row, "id", None),
            actor_id,
            exc,
        )
        return None
    actor_name = get_actor_display_name(actor, profile)

    if creation_id is not None and creation_title is None:
        creation_title = await _live_creation_title(lookups, creation_id)

    link = creation_link(creation_id)

    match notification_type:
        case NotificationType.COMMENT:
            title = (
                f'Comment on "{creation_title}"' if creation_title else "Comment on your creation"
            )
            message = f"{actor_name} commented"
        case NotificationType.COMMENT_THREAD:
            title = (
                f'Comment on "{creation_title}"'
                if creation_title
                else "Comment on a creation you commented on"
            )
            message = f"{actor_name} commented"
        case NotificationType.TIP:
            title = TIP_TITLE
            message = f"{actor_name} tipped you {format_tip_amount(getattr(row, 'meta', None))} credits."
        case _:
            assert_never(notification_type)

    return ResolvedDisplay(title=title, message=message, link=link, creation_title=creation_title)
