from typing import Any, Optional


class NotificationDeliveryError(Exception):
    """An outbound notification (chat relay or email) could not be delivered."""

    channel = "notification"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details


class TelegramDeliveryError(NotificationDeliveryError):
    channel = "telegram"


class EmailDeliveryError(NotificationDeliveryError):
    channel = "email"
