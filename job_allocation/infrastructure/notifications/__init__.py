"""
Notification adapters package.
"""

from job_allocation.application.interfaces.notifications import (
    NotificationDispatcherInterface,
)
from job_allocation.config.settings import Settings, settings as default_settings

from .http_dispatcher import HttpNotificationDispatcher
from .logging_dispatcher import LoggingNotificationDispatcher


def build_notification_dispatcher(
    config: Settings = default_settings,
) -> NotificationDispatcherInterface:
    """HTTP dispatcher when a service URL is configured, log-only otherwise."""
    if config.NOTIFICATION_SERVICE_URL:
        return HttpNotificationDispatcher(
            base_url=config.NOTIFICATION_SERVICE_URL,
            token=config.NOTIFICATION_SERVICE_TOKEN,
            timeout=config.NOTIFICATION_TIMEOUT_SECONDS,
        )
    return LoggingNotificationDispatcher()


__all__ = [
    "HttpNotificationDispatcher",
    "LoggingNotificationDispatcher",
    "build_notification_dispatcher",
]
