"""
Notification dispatcher that only writes to the log.
"""

from uuid import UUID

from job_allocation.application.interfaces.notifications import (
    ConsultantNotification,
    NotificationDispatcherInterface,
)
from job_allocation.config.logging import get_logger

logger = get_logger(__name__)


class LoggingNotificationDispatcher(NotificationDispatcherInterface):
    """Used when no notification service is configured."""

    @property
    def name(self) -> str:
        return "log"

    async def notify(
        self, consultant_id: UUID, notification: ConsultantNotification
    ) -> None:
        logger.info(
            "Consultant notification",
            consultant_id=str(consultant_id),
            title=notification.title,
            notification_type=notification.type,
            action_url=notification.action_url,
            message=notification.message,
        )
