"""
reminders/services/actions.py

Handling of delivered notifications.
- will_present: foreground presentation choice (always a banner)
- NotificationActionHandler.handle_user_action: dismiss / mark-as-done
- notification_categories: the single actionable category to register
"""

from typing import Any, Callable

import structlog
from pydantic import ValidationError

from config import settings
from reminders.constants import (
    ACTION_DISMISS,
    ACTION_DISMISS_TITLE,
    ACTION_MARK_AS_DONE,
    ACTION_MARK_AS_DONE_TITLE,
    PRESENTATION_BANNER,
)
from reminders.exceptions import PayloadDecodeError
from reminders.schemas import (
    NotificationAction,
    NotificationCategory,
    NotificationRequest,
    Task,
)
from reminders.services.scheduler import ReminderScheduler
from reminders.services.task_store import TaskStore

logger = structlog.get_logger(__name__)


def notification_categories() -> list[NotificationCategory]:
    """One category carrying the dismiss and mark-as-done actions."""
    return [
        NotificationCategory(
            identifier=settings.category_identifier,
            actions=[
                NotificationAction(identifier=ACTION_DISMISS, title=ACTION_DISMISS_TITLE),
                NotificationAction(identifier=ACTION_MARK_AS_DONE, title=ACTION_MARK_AS_DONE_TITLE),
            ],
        )
    ]


def will_present(request: NotificationRequest) -> list[str]:
    """Present notifications as banners even while the app is active."""
    return [PRESENTATION_BANNER]


def decode_task_payload(user_info: dict[str, Any]) -> Task:
    """Rebuild the task embedded in a notification's metadata."""
    payload = user_info.get(settings.task_payload_key)
    if payload is None:
        raise PayloadDecodeError(f"no {settings.task_payload_key!r} entry in notification metadata")
    if not isinstance(payload, (str, bytes)):
        raise PayloadDecodeError(f"task payload must be a JSON string, got {type(payload).__name__}")
    try:
        return Task.model_validate_json(payload)
    except ValidationError as exc:
        raise PayloadDecodeError(f"task payload is not a valid task: {exc.error_count()} error(s)") from exc


class NotificationActionHandler:
    """Applies user actions on delivered notifications to the task store."""

    def __init__(
        self,
        scheduler: ReminderScheduler,
        task_store: TaskStore,
        cancel_on_complete: bool | None = None,
    ) -> None:
        self.scheduler = scheduler
        self.task_store = task_store
        self.cancel_on_complete = (
            settings.cancel_on_complete if cancel_on_complete is None else cancel_on_complete
        )

    async def handle_user_action(
        self,
        action_identifier: str,
        request: NotificationRequest,
        completion: Callable[[], None],
    ) -> None:
        """
        Process one user action; completion is signalled exactly once.

        Only markAsDone changes state. Unknown actions and undecodable
        payloads are ignored.
        """
        try:
            if action_identifier == ACTION_MARK_AS_DONE:
                await self._mark_as_done(request)
            else:
                logger.info(
                    "notification_action_ignored",
                    identifier=request.identifier,
                    action=action_identifier,
                )
        except Exception as exc:
            logger.error(
                "notification_action_failed",
                identifier=request.identifier,
                action=action_identifier,
                error=str(exc),
            )
        finally:
            completion()

    async def _mark_as_done(self, request: NotificationRequest) -> None:
        try:
            task = decode_task_payload(request.content.user_info)
        except PayloadDecodeError as exc:
            logger.warning(
                "task_payload_decode_failed",
                identifier=request.identifier,
                error=str(exc),
            )
            return

        # Repeating triggers keep firing unless removed explicitly
        if self.cancel_on_complete:
            await self.scheduler.cancel(task.id)
        self.task_store.remove(task)
        logger.info("task_marked_done", task_id=task.id)
