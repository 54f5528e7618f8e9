from app.models.creation import Creation
from app.models.identity import User, UserProfile
from app.models.notification import Notification

__all__ = [
    "Creation",
    "Notification",
    "User",
    "UserProfile",
]
