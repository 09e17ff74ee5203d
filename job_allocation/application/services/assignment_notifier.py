"""
Post-commit notifications for assignment changes.
"""

import asyncio
from typing import Iterable, Optional

from job_allocation.application.interfaces.notifications import (
    ConsultantNotification,
    NotificationDispatcherInterface,
)
from job_allocation.config.logging import get_logger
from job_allocation.domain.events import AssignmentChanged, JobAssigned, JobReassignedAway
from job_allocation.domain.exceptions.notification_error import NotificationDeliveryError
from job_allocation.infrastructure.monitoring.metrics import record_notification

logger = get_logger(__name__)

JOB_ASSIGNED = "JOB_ASSIGNED"
SYSTEM_ANNOUNCEMENT = "SYSTEM_ANNOUNCEMENT"

DEFAULT_REASON = "No reason provided"
DEFAULT_CHANGED_BY = "HRM8 admin"
UNASSIGNED_NAME = "Unassigned"


def consultant_job_url(job_id) -> str:
    """Consultant portal link to a job."""
    return f"/consultant/jobs/{job_id}"


def _reason_text(reason: Optional[str]) -> str:
    return (reason or "").strip() or DEFAULT_REASON


class AssignmentNotifier:
    """Turns assignment-changed events into consultant notifications.

    Delivery is best effort. Each send is bounded by ``timeout_seconds`` and a
    failure is logged and counted, never raised, so a committed allocation is
    never reported as failed because of a notification.
    """

    def __init__(
        self,
        dispatcher: NotificationDispatcherInterface,
        timeout_seconds: float = 5.0,
    ):
        self.dispatcher = dispatcher
        self.timeout_seconds = timeout_seconds

    async def publish(self, events: Iterable[AssignmentChanged]) -> None:
        """Send one notification per event, in order."""
        for event in events:
            await self._send(event, self.build_notification(event))

    def build_notification(self, event: AssignmentChanged) -> ConsultantNotification:
        """Render the notification for an event."""
        reason = _reason_text(event.reason)
        changed_by = event.changed_by or DEFAULT_CHANGED_BY

        if isinstance(event, JobReassignedAway):
            return ConsultantNotification(
                title="Job Reassigned Away",
                message=(
                    f'Your assignment on "{event.job_title}" has been moved to '
                    f"{event.new_consultant_name}. Reason: {reason}. "
                    f"Updated by: {changed_by}."
                ),
                type=SYSTEM_ANNOUNCEMENT,
                action_url=consultant_job_url(event.job_id),
            )

        if event.is_reassignment:
            previous_name = event.previous_consultant_name or UNASSIGNED_NAME
            return ConsultantNotification(
                title="Job Reassigned To You",
                message=(
                    f'You are now assigned to "{event.job_title}" from {previous_name}. '
                    f"Reason: {reason}. Updated by: {changed_by}."
                ),
                type=JOB_ASSIGNED,
                action_url=consultant_job_url(event.job_id),
            )

        return ConsultantNotification(
            title="New Job Assigned",
            message=(
                f'You have been assigned to "{event.job_title}". '
                f"Reason: {reason}. Updated by: {changed_by}."
            ),
            type=JOB_ASSIGNED,
            action_url=consultant_job_url(event.job_id),
        )

    async def _send(
        self, event: AssignmentChanged, notification: ConsultantNotification
    ) -> None:
        log = logger.bind(
            job_id=str(event.job_id),
            consultant_id=str(event.consultant_id),
            notification_title=notification.title,
            dispatcher=self.dispatcher.name,
        )
        try:
            await asyncio.wait_for(
                self.dispatcher.notify(event.consultant_id, notification),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            record_notification(notification.type, "timeout")
            log.warning(
                "Consultant notification timed out", timeout_seconds=self.timeout_seconds
            )
        except NotificationDeliveryError as e:
            record_notification(notification.type, "failed")
            log.warning(
                "Consultant notification failed", error=str(e), status_code=e.status_code
            )
        except Exception as e:
            record_notification(notification.type, "failed")
            log.warning(
                "Consultant notification failed unexpectedly",
                error=str(e),
                error_type=type(e).__name__,
            )
        else:
            record_notification(notification.type, "sent")
            log.debug("Consultant notification sent")
