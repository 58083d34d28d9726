"""
reminders/routers/notifications.py

Inbound events from the delivery daemon.
- will-present: how to show a notification while the app is active
- user-action: the user acted on a delivered notification
"""

import structlog
from fastapi import APIRouter, Request

from reminders.schemas import NotificationRequest, PresentationResponse, UserActionEvent
from reminders.services.actions import will_present

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/notifications")


@router.post("/will-present", response_model=PresentationResponse)
async def on_will_present(notification: NotificationRequest) -> PresentationResponse:
    return PresentationResponse(options=will_present(notification))


@router.post("/user-action")
async def on_user_action(event: UserActionEvent, request: Request) -> dict[str, str]:
    """
    Apply a user action to the task store.

    The response is the completion signal seen by the daemon.
    """
    handler = request.app.state.services.action_handler
    await handler.handle_user_action(
        event.action_identifier,
        event.request,
        lambda: None,
    )
    logger.info(
        "user_action_received",
        identifier=event.request.identifier,
        action=event.action_identifier,
    )
    return {"status": "handled"}
