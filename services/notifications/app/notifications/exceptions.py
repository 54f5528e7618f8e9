# Domain exceptions raised by the notifications service layer.
# The controller layer catches these and converts them to HTTPException.


class NotificationNotFoundError(Exception):
    def __init__(self, notification_id) -> None:
        self.notification_id = notification_id
        super().__init__(f"Notification {notification_id} not found")
