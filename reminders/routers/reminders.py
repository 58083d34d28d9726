"""
reminders/routers/reminders.py

Scheduling, cancellation and authorization endpoints.
"""

from typing import Any

import structlog
from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel

from reminders.schemas import (
    AuthorizationResponse,
    LocationAuthorization,
    NotificationRequest,
    NotificationSettings,
    ScheduleResponse,
    Task,
)

logger = structlog.get_logger(__name__)

router = APIRouter()


class LocationAuthorizationBody(BaseModel):
    status: LocationAuthorization


def _services(request: Request) -> Any:
    return request.app.state.services


@router.post("/reminders", response_model=ScheduleResponse)
async def schedule_reminder(task: Task, request: Request) -> ScheduleResponse:
    """
    Schedule the reminder attached to a task.

    Always answers 200; the outcome field says whether a request was submitted.
    """
    services = _services(request)
    services.task_store.add(task)
    outcome = await services.scheduler.schedule(task)
    return ScheduleResponse(task_id=task.id, outcome=outcome)


@router.delete("/reminders/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_reminder(task_id: str, request: Request) -> Response:
    """Cancel the pending reminder for a task; idempotent."""
    await _services(request).scheduler.cancel(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/reminders", response_model=list[NotificationRequest])
async def list_pending(request: Request) -> list[NotificationRequest]:
    return await _services(request).center.pending_requests()


@router.post("/authorization", response_model=AuthorizationResponse)
async def request_authorization(request: Request) -> AuthorizationResponse:
    granted = await _services(request).authorization.request_authorization()
    return AuthorizationResponse(granted=granted)


@router.get("/settings", response_model=NotificationSettings | None)
async def current_settings(request: Request) -> NotificationSettings | None:
    return _services(request).settings_store.current


@router.put("/location-authorization", status_code=status.HTTP_204_NO_CONTENT)
async def update_location_authorization(
    body: LocationAuthorizationBody,
    request: Request,
) -> Response:
    """Record the host application's current location authorization."""
    _services(request).location_authorization = body.status
    logger.info("location_authorization_updated", status=body.status.value)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
