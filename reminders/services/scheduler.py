"""
reminders/services/scheduler.py

Reminder scheduling and cancellation by task identity.
- ReminderScheduler.schedule: resolve trigger, build content, submit
- ReminderScheduler.cancel: remove the pending request for one identifier

Neither call raises. Failures are logged and reported as a ScheduleOutcome.
Repeated schedule/cancel calls for the same identifier are not serialized:
a cancel that lands before an in-flight schedule submits can leave that
request pending.
"""

from typing import Callable

import structlog

from config import settings
from reminders.exceptions import SubmissionError, UnschedulableError
from reminders.schemas import (
    LocationAuthorization,
    NotificationContent,
    NotificationRequest,
    ScheduleOutcome,
    Task,
)
from reminders.services.authorization import location_permission_granted
from reminders.services.notification_center import NotificationCenter
from reminders.services.resolver import resolve_trigger

logger = structlog.get_logger(__name__)

LocationAuthorizationProvider = Callable[[], LocationAuthorization]


def _location_not_determined() -> LocationAuthorization:
    return LocationAuthorization.NOT_DETERMINED


def build_content(task: Task) -> NotificationContent:
    """Notification content with a serialized copy of the task embedded."""
    return NotificationContent(
        title=task.name,
        body=settings.reminder_body,
        category_identifier=settings.category_identifier,
        user_info={settings.task_payload_key: task.model_dump_json()},
    )


class ReminderScheduler:
    """Schedules one notification per task, keyed by the task identifier."""

    def __init__(
        self,
        center: NotificationCenter,
        location_authorization: LocationAuthorizationProvider = _location_not_determined,
    ) -> None:
        self.center = center
        self.location_authorization = location_authorization

    def _location_permission_granted(self, task_id: str) -> bool:
        try:
            status = self.location_authorization()
        except Exception as exc:
            logger.warning(
                "location_authorization_unavailable",
                task_id=task_id,
                error=str(exc),
            )
            return False
        return location_permission_granted(status)

    async def schedule(self, task: Task) -> ScheduleOutcome:
        """
        Submit a notification request for the task.

        A second call for the same task identifier supersedes the first.
        An authorization provider that fails counts as permission not granted.
        """
        granted = self._location_permission_granted(task.id)

        try:
            trigger = resolve_trigger(task.id, task.reminder, granted)
        except UnschedulableError as exc:
            logger.info(
                "reminder_unschedulable",
                task_id=task.id,
                kind=task.reminder.kind,
                reason=exc.reason.value,
                detail=exc.detail,
            )
            return ScheduleOutcome(exc.reason.value)

        try:
            content = build_content(task)
            content.thread_identifier = trigger.thread_identifier
            request = NotificationRequest(identifier=task.id, content=content, trigger=trigger)
            await self.center.add(request)
        except SubmissionError as exc:
            logger.error(
                "notification_submit_failed",
                task_id=task.id,
                error=exc.detail,
            )
            return ScheduleOutcome.SUBMISSION_FAILED
        except Exception as exc:
            logger.error(
                "notification_submit_unexpected_error",
                task_id=task.id,
                error=str(exc),
            )
            return ScheduleOutcome.SUBMISSION_FAILED

        logger.info(
            "reminder_scheduled",
            task_id=task.id,
            kind=trigger.kind,
            repeats=trigger.repeats,
        )
        return ScheduleOutcome.SCHEDULED

    async def cancel(self, task_id: str) -> None:
        """Remove the pending request for task_id; a no-op if none exists."""
        try:
            await self.center.remove_pending({task_id})
        except Exception as exc:
            logger.error("reminder_cancel_failed", task_id=task_id, error=str(exc))
            return
        logger.info("reminder_cancelled", task_id=task_id)
