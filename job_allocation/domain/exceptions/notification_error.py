"""
Notification-related exceptions.
"""

from typing import Optional
from uuid import UUID


class NotificationDeliveryError(Exception):
    """Raised by notification adapters when a message cannot be handed off."""

    def __init__(
        self, consultant_id: UUID, message: str, status_code: Optional[int] = None
    ):
        self.consultant_id = consultant_id
        self.status_code = status_code
        super().__init__(f"Notification to consultant {consultant_id} failed: {message}")
