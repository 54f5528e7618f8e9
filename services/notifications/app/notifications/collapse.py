"""Pure notification grouping and ordering: no I/O, no framework imports.

Input is one recipient's resolved notifications. Output is the display list:

  1. Split by age at ``now - window``: ``recent`` and ``older``.
  2. Within ``recent``, group collapsible rows (comment / comment_thread / tip with a
     creation id) by creation. Groups of two or more become one ``CollapsedEntry``;
     single rows pass through untouched.
  3. Order each bucket unread-first, then newest-first (stable for ties).
  4. Return ``recent`` followed by ``older``. Older rows are never merged into a
     recent group, even when they share a creation.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta, timezone

from app.models.enums import COMMENT_TYPES, NotificationType
from app.notifications.parsing import is_collapsible, parse_notification_type
from app.notifications.types import CollapsedEntry, NotificationEntry, ResolvedNotification

DEFAULT_COLLAPSE_WINDOW = timedelta(hours=24)

NO_ACTIVITY_MESSAGE = "New activity"
GENERIC_ACTIVITY_TITLE = "Activity on your creation"


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def order_entries(entries: Iterable[NotificationEntry]) -> list[NotificationEntry]:
    """Unread before read, then newest first. Equal keys keep their input order."""
    newest_first = sorted(entries, key=lambda e: _as_utc(e.created_at), reverse=True)
    return sorted(newest_first, key=lambda e: e.is_read)


def _pluralize(count: int, noun: str) -> str:
    return f"1 {noun}" if count == 1 else f"{count} {noun}s"


def summarize_activity(comment_count: int, tip_count: int) -> str:
    """e.g. ``"3 comments, 1 tip"``."""
    parts = []
    if comment_count > 0:
        parts.append(_pluralize(comment_count, "comment"))
    if tip_count > 0:
        parts.append(_pluralize(tip_count, "tip"))
    return ", ".join(parts) if parts else NO_ACTIVITY_MESSAGE


def build_collapsed_entry(group: Sequence[ResolvedNotification]) -> CollapsedEntry:
    """Summarize two or more notifications about the same creation."""
    members = sorted(group, key=lambda n: _as_utc(n.created_at), reverse=True)
    latest = members[0]

    types = [parse_notification_type(n.type) for n in members]
    comment_count = sum(1 for t in types if t in COMMENT_TYPES)
    tip_count = sum(1 for t in types if t is NotificationType.TIP)
    unread_count = sum(1 for n in members if not n.is_read)

    creation_title = (latest.creation_title or "").strip() or None
    title = f'Activity on "{creation_title}"' if creation_title else GENERIC_ACTIVITY_TITLE

    return CollapsedEntry(
        id=latest.id,
        title=title,
        message=summarize_activity(comment_count, tip_count),
        link=latest.link,
        created_at=latest.created_at,
        # Read only once every member is read.
        acknowledged_at=latest.acknowledged_at if unread_count == 0 else None,
        count=len(members),
        unread_count=unread_count,
    )


def partition_by_recency(
    notifications: Iterable[ResolvedNotification],
    now: datetime,
    window: timedelta = DEFAULT_COLLAPSE_WINDOW,
) -> tuple[list[ResolvedNotification], list[ResolvedNotification]]:
    cutoff = _as_utc(now) - window
    recent: list[ResolvedNotification] = []
    older: list[ResolvedNotification] = []
    for notification in notifications:
        if _as_utc(notification.created_at) >= cutoff:
            recent.append(notification)
        else:
            older.append(notification)
    return recent, older


def collapse_notifications(
    notifications: Iterable[ResolvedNotification],
    *,
    now: datetime,
    window: timedelta = DEFAULT_COLLAPSE_WINDOW,
) -> list[NotificationEntry]:
    """Group and order one recipient's notifications for display.

    ``now`` is passed in rather than read from the clock: a row can move from the
    recent bucket to the older one between two calls, and callers (and tests)
    decide which instant the boundary is measured from.
    """
    recent, older = partition_by_recency(notifications, now, window)

    by_creation: dict[int, list[ResolvedNotification]] = {}
    ungrouped: list[NotificationEntry] = []
    for notification in recent:
        if is_collapsible(notification.type, notification.creation_id):
            by_creation.setdefault(notification.creation_id, []).append(notification)
        else:
            ungrouped.append(notification)

    collapsed: list[NotificationEntry] = []
    for group in by_creation.values():
        if len(group) == 1:
            ungrouped.append(group[0])
        else:
            collapsed.append(build_collapsed_entry(group))

    recent_ordered = order_entries([*order_entries(collapsed), *ungrouped])
    return recent_ordered + order_entries(older)
