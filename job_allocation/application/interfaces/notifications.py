"""
Notification interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class ConsultantNotification:
    """In-app notification addressed to a consultant."""

    title: str
    message: str
    type: str = "SYSTEM_ANNOUNCEMENT"
    action_url: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to the notification service payload."""
        return {
            "title": self.title,
            "message": self.message,
            "type": self.type,
            "actionUrl": self.action_url,
        }


class NotificationDispatcherInterface(ABC):
    """Best-effort, non-transactional channel to consultants.

    Implementations raise NotificationDeliveryError when the hand-off fails;
    callers decide whether that matters.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Dispatcher name."""
        pass

    @abstractmethod
    async def notify(
        self, consultant_id: UUID, notification: ConsultantNotification
    ) -> None:
        """Send a notification to one consultant."""
        pass
