from fastapi import Depends

from app.config import Settings
from app.notifications.types import RecipientScope
from shared.auth.dependencies import get_current_user_required
from shared.models.user import CurrentUser


def get_settings() -> Settings:
    return Settings()


async def get_recipient_scope(
    user: CurrentUser = Depends(get_current_user_required),
) -> RecipientScope:
    """Notifications addressed to the caller directly or to the caller's role."""
    return RecipientScope(recipient_id=user.id, role=user.primary_role.value)
