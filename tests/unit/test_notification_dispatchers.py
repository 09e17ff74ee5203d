"""
Unit tests for notification dispatchers.
"""

import json
from uuid import uuid4

import httpx
import pytest

from job_allocation.application.interfaces.notifications import ConsultantNotification
from job_allocation.config.settings import Settings
from job_allocation.domain.exceptions.notification_error import NotificationDeliveryError
from job_allocation.infrastructure.notifications import (
    HttpNotificationDispatcher,
    LoggingNotificationDispatcher,
    build_notification_dispatcher,
)


@pytest.fixture
def notification():
    return ConsultantNotification(
        title="New Job Assigned",
        message='You have been assigned to "Nurse".',
        type="JOB_ASSIGNED",
        action_url="/consultant/jobs/123",
    )


class TestHttpNotificationDispatcher:
    """Test cases for HttpNotificationDispatcher."""

    @pytest.mark.asyncio
    async def test_posts_payload_with_token(self, notification):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["auth"] = request.headers.get("Authorization")
            captured["body"] = json.loads(request.content)
            return httpx.Response(201, json={"id": "n-1"})

        consultant_id = uuid4()
        dispatcher = HttpNotificationDispatcher(
            base_url="http://notifications.local/",
            token="secret",
            transport=httpx.MockTransport(handler),
        )

        await dispatcher.notify(consultant_id, notification)

        assert captured["url"] == "http://notifications.local/notifications"
        assert captured["auth"] == "Bearer secret"
        assert captured["body"] == {
            "recipientType": "CONSULTANT",
            "recipientId": str(consultant_id),
            "title": "New Job Assigned",
            "message": 'You have been assigned to "Nurse".',
            "type": "JOB_ASSIGNED",
            "actionUrl": "/consultant/jobs/123",
        }

    @pytest.mark.asyncio
    async def test_error_status_raises(self, notification):
        dispatcher = HttpNotificationDispatcher(
            base_url="http://notifications.local",
            transport=httpx.MockTransport(lambda request: httpx.Response(503)),
        )

        with pytest.raises(NotificationDeliveryError) as exc_info:
            await dispatcher.notify(uuid4(), notification)

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_transport_error_raises(self, notification):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        dispatcher = HttpNotificationDispatcher(
            base_url="http://notifications.local",
            transport=httpx.MockTransport(handler),
        )

        with pytest.raises(NotificationDeliveryError, match="connection refused"):
            await dispatcher.notify(uuid4(), notification)


class TestBuildNotificationDispatcher:
    """Dispatcher selection from settings."""

    def test_http_when_url_configured(self):
        config = Settings(
            NOTIFICATION_SERVICE_URL="http://notifications.local",
            NOTIFICATION_SERVICE_TOKEN="secret",
        )

        dispatcher = build_notification_dispatcher(config)

        assert isinstance(dispatcher, HttpNotificationDispatcher)
        assert dispatcher.token == "secret"

    def test_logging_without_url(self):
        config = Settings(NOTIFICATION_SERVICE_URL=None)

        assert isinstance(
            build_notification_dispatcher(config), LoggingNotificationDispatcher
        )

    @pytest.mark.asyncio
    async def test_logging_dispatcher_never_fails(self, notification):
        await LoggingNotificationDispatcher().notify(uuid4(), notification)
