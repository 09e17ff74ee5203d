"""
Notification dispatcher backed by the platform notification service.
"""

from typing import Dict, Optional
from uuid import UUID

import httpx

from job_allocation.application.interfaces.notifications import (
    ConsultantNotification,
    NotificationDispatcherInterface,
)
from job_allocation.config.logging import get_logger
from job_allocation.domain.exceptions.notification_error import NotificationDeliveryError
from job_allocation.infrastructure.notifications.http_client import HTTPClient

logger = get_logger(__name__)


class HttpNotificationDispatcher(NotificationDispatcherInterface):
    """Posts consultant notifications to the notification service over HTTP."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.transport = transport

    @property
    def name(self) -> str:
        return "http"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def notify(
        self, consultant_id: UUID, notification: ConsultantNotification
    ) -> None:
        """
        Hand a notification to the notification service.

        Raises:
            NotificationDeliveryError: On transport errors and non-2xx responses
        """
        payload = {
            "recipientType": "CONSULTANT",
            "recipientId": str(consultant_id),
            **notification.to_dict(),
        }

        try:
            async with HTTPClient(
                base_url=self.base_url, timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(
                    "/notifications", data=payload, headers=self._headers()
                )
        except httpx.HTTPError as e:
            raise NotificationDeliveryError(consultant_id, str(e)) from e

        if response.is_error:
            raise NotificationDeliveryError(
                consultant_id,
                f"notification service returned {response.status_code}",
                status_code=response.status_code,
            )

        logger.debug(
            "Notification delivered",
            consultant_id=str(consultant_id),
            status_code=response.status_code,
        )
