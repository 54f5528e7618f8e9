import enum


class NotificationType(str, enum.Enum):
    """Structured notification types. Rows without one are legacy rows (``type`` is NULL)."""

    COMMENT = "comment"
    COMMENT_THREAD = "comment_thread"
    TIP = "tip"


# Every structured type is eligible for grouping per creation.
COLLAPSIBLE_TYPES: frozenset[NotificationType] = frozenset(NotificationType)

COMMENT_TYPES: frozenset[NotificationType] = frozenset(
    {NotificationType.COMMENT, NotificationType.COMMENT_THREAD}
)

# Type reported for a synthesized group entry; never stored.
CREATION_ACTIVITY_TYPE = "creation_activity"
