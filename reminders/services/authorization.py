"""
reminders/services/authorization.py

Notification authorization flow and the owned settings cache.
- NotificationSettingsStore: latest settings plus subscriptions, written only
  on its owning event loop
- AuthorizationManager: requests authorization and refreshes the store
- location_permission_granted: maps a location authorization to a yes/no
"""

import asyncio
from typing import Callable, Optional

import structlog

from reminders.constants import AUTHORIZATION_OPTIONS
from reminders.schemas import LocationAuthorization, NotificationSettings
from reminders.services.notification_center import NotificationCenter

logger = structlog.get_logger(__name__)

SettingsListener = Callable[[NotificationSettings], None]


class NotificationSettingsStore:
    """
    Holds the most recent NotificationSettings.

    Writes happen on the loop that owns the store. Callbacks arriving on
    other threads must go through publish_threadsafe, which hands the value
    over to that loop before any state is touched.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop
        self._current: Optional[NotificationSettings] = None
        self._listeners: list[SettingsListener] = []

    @property
    def current(self) -> Optional[NotificationSettings]:
        return self._current

    def bind(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def subscribe(self, listener: SettingsListener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, settings: NotificationSettings) -> None:
        self._current = settings
        for listener in list(self._listeners):
            try:
                listener(settings)
            except Exception as exc:
                logger.error(
                    "settings_listener_failed",
                    listener=getattr(listener, "__name__", repr(listener)),
                    error=str(exc),
                )

    def publish_threadsafe(self, settings: NotificationSettings) -> None:
        if self._loop is None:
            raise RuntimeError("settings store is not bound to an event loop")
        self._loop.call_soon_threadsafe(self.publish, settings)


class AuthorizationManager:
    """Requests notification authorization and keeps the settings store fresh."""

    def __init__(self, center: NotificationCenter, store: NotificationSettingsStore) -> None:
        self.center = center
        self.store = store

    async def request_authorization(self) -> bool:
        """
        Ask for alert, sound and badge permission.

        Settings are re-fetched after every request, whatever the answer.
        Reports exactly one result; a failed request counts as not granted.
        """
        try:
            granted = await self.center.request_authorization(set(AUTHORIZATION_OPTIONS))
        except Exception as exc:
            logger.error("authorization_request_failed", error=str(exc))
            granted = False

        await self.fetch_notification_settings()
        logger.info("authorization_requested", granted=granted)
        return granted

    async def fetch_notification_settings(self) -> Optional[NotificationSettings]:
        try:
            settings = await self.center.get_notification_settings()
        except Exception as exc:
            logger.error("settings_fetch_failed", error=str(exc))
            return None
        self.store.publish(settings)
        return settings


def location_permission_granted(status: LocationAuthorization) -> bool:
    """Only when-in-use authorization allows location reminders."""
    return status == LocationAuthorization.WHEN_IN_USE
