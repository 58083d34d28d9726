"""
reminders/main.py

FastAPI application entry point for the reminders service.
Builds the notification center, registers the actionable category on
startup and exposes scheduling and delivery-callback routers.
"""

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI

from config import settings
from reminders.logging_config import configure_logging
from reminders.routers.notifications import router as notifications_router
from reminders.routers.reminders import router as reminders_router
from reminders.schemas import LocationAuthorization
from reminders.services.actions import NotificationActionHandler, notification_categories
from reminders.services.authorization import AuthorizationManager, NotificationSettingsStore
from reminders.services.notification_center import (
    HttpNotificationCenter,
    InMemoryNotificationCenter,
    NotificationCenter,
)
from reminders.services.scheduler import ReminderScheduler
from reminders.services.task_store import InMemoryTaskStore

logger = structlog.get_logger(__name__)


@dataclass
class ReminderServices:
    """Service objects shared by the routers through app.state."""

    center: NotificationCenter
    settings_store: NotificationSettingsStore
    authorization: AuthorizationManager
    scheduler: ReminderScheduler
    action_handler: NotificationActionHandler
    task_store: InMemoryTaskStore
    location_authorization: LocationAuthorization = LocationAuthorization.NOT_DETERMINED


def build_services(center: NotificationCenter | None = None) -> ReminderServices:
    """Wire the scheduler, action handler and settings store around one center."""
    if center is None:
        center = (
            InMemoryNotificationCenter()
            if settings.use_local_center
            else HttpNotificationCenter()
        )
    store = NotificationSettingsStore()
    task_store = InMemoryTaskStore()
    services: ReminderServices

    def current_location_authorization() -> LocationAuthorization:
        return services.location_authorization

    scheduler = ReminderScheduler(center, current_location_authorization)
    services = ReminderServices(
        center=center,
        settings_store=store,
        authorization=AuthorizationManager(center, store),
        scheduler=scheduler,
        action_handler=NotificationActionHandler(scheduler, task_store),
        task_store=task_store,
    )
    return services


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle: startup and shutdown."""
    configure_logging()
    services: ReminderServices = getattr(app.state, "services", None) or build_services()
    services.settings_store.bind(asyncio.get_running_loop())
    app.state.services = services

    try:
        await services.center.set_categories(notification_categories())
    except Exception as exc:
        logger.error("category_registration_failed", error=str(exc))

    logger.info(
        "reminders_starting",
        local_center=isinstance(services.center, InMemoryNotificationCenter),
    )
    yield
    logger.info("reminders_shutting_down")


def create_app(services: ReminderServices | None = None) -> FastAPI:
    """Build the FastAPI application, optionally around prebuilt services."""
    application = FastAPI(
        title="Task Reminders",
        description="Reminder scheduling and notification action handling",
        version="1.0.0",
        lifespan=lifespan,
    )
    if services is not None:
        application.state.services = services
    application.include_router(reminders_router)
    application.include_router(notifications_router)
    return application


app = create_app()
