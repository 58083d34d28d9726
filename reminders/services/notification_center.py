"""
reminders/services/notification_center.py

Boundary with the notification delivery daemon.
- NotificationCenter: the async contract the scheduler depends on
- InMemoryNotificationCenter: local registry used for development and tests
- HttpNotificationCenter: httpx client for a delivery daemon over HTTP

Pending requests are keyed by identifier: adding under an existing
identifier replaces the previous request.
"""

import math
from typing import Iterable, Optional, Protocol

import httpx

from config import settings
from reminders.constants import EARTH_RADIUS_M
from reminders.exceptions import SubmissionError
from reminders.schemas import (
    AuthorizationStatus,
    LocationTrigger,
    NotificationCategory,
    NotificationRequest,
    NotificationSettings,
)


class NotificationCenter(Protocol):
    """Async contract of the external notification service."""

    async def request_authorization(self, options: set[str]) -> bool: ...

    async def get_notification_settings(self) -> NotificationSettings: ...

    async def add(self, request: NotificationRequest) -> None: ...

    async def remove_pending(self, identifiers: set[str]) -> None: ...

    async def set_categories(self, categories: list[NotificationCategory]) -> None: ...

    async def pending_requests(self) -> list[NotificationRequest]: ...


def haversine_distance(
    lat1: float,
    lng1: float,
    lat2: float,
    lng2: float,
) -> float:
    """
    Calculate the great-circle distance between two points in meters.

    Uses the Haversine formula with Earth radius = 6,371,000 meters.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)
    a = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(a))


class InMemoryNotificationCenter:
    """Process-local notification center holding pending requests in a dict."""

    def __init__(
        self,
        grant_authorization: bool = True,
        max_pending: Optional[int] = None,
    ) -> None:
        self.grant_authorization = grant_authorization
        self.max_pending = max_pending if max_pending is not None else settings.max_pending_requests
        self.categories: list[NotificationCategory] = []
        self._pending: dict[str, NotificationRequest] = {}
        self._settings = NotificationSettings()

    async def request_authorization(self, options: set[str]) -> bool:
        granted = self.grant_authorization
        self._settings = NotificationSettings(
            authorization_status=(
                AuthorizationStatus.AUTHORIZED if granted else AuthorizationStatus.DENIED
            ),
            alert_enabled=granted and "alert" in options,
            sound_enabled=granted and "sound" in options,
            badge_enabled=granted and "badge" in options,
        )
        return granted

    async def get_notification_settings(self) -> NotificationSettings:
        return self._settings

    async def add(self, request: NotificationRequest) -> None:
        if request.identifier not in self._pending and len(self._pending) >= self.max_pending:
            raise SubmissionError(
                request.identifier,
                f"pending request limit of {self.max_pending} reached",
            )
        self._pending[request.identifier] = request

    async def remove_pending(self, identifiers: set[str]) -> None:
        for identifier in identifiers:
            self._pending.pop(identifier, None)

    async def set_categories(self, categories: list[NotificationCategory]) -> None:
        self.categories = list(categories)

    async def pending_requests(self) -> list[NotificationRequest]:
        return list(self._pending.values())

    def requests_containing(self, lat: float, lng: float) -> list[NotificationRequest]:
        """Return pending location requests whose region contains the point."""
        matches: list[NotificationRequest] = []
        for request in self._pending.values():
            trigger = request.trigger
            if not isinstance(trigger, LocationTrigger):
                continue
            region = trigger.region
            distance = haversine_distance(lat, lng, region.latitude, region.longitude)
            if distance <= region.radius:
                matches.append(request)
        return matches


class HttpNotificationCenter:
    """Notification center backed by a delivery daemon reachable over HTTP."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.notification_daemon_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.notification_daemon_timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def request_authorization(self, options: set[str]) -> bool:
        async with self._client() as client:
            response = await client.post(
                "/authorization",
                json={"options": sorted(options)},
            )
            response.raise_for_status()
            return bool(response.json().get("granted", False))

    async def get_notification_settings(self) -> NotificationSettings:
        async with self._client() as client:
            response = await client.get("/settings")
            response.raise_for_status()
            return NotificationSettings.model_validate(response.json())

    async def add(self, request: NotificationRequest) -> None:
        try:
            async with self._client() as client:
                response = await client.put(
                    f"/requests/{request.identifier}",
                    content=request.model_dump_json(),
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise SubmissionError(
                request.identifier,
                f"daemon returned {exc.response.status_code}",
            ) from exc
        except httpx.HTTPError as exc:
            raise SubmissionError(request.identifier, str(exc) or type(exc).__name__) from exc

    async def remove_pending(self, identifiers: set[str]) -> None:
        async with self._client() as client:
            response = await client.post(
                "/requests/remove",
                json={"identifiers": sorted(identifiers)},
            )
            response.raise_for_status()

    async def set_categories(self, categories: list[NotificationCategory]) -> None:
        async with self._client() as client:
            response = await client.put(
                "/categories",
                json=[category.model_dump() for category in categories],
            )
            response.raise_for_status()

    async def pending_requests(self) -> list[NotificationRequest]:
        async with self._client() as client:
            response = await client.get("/requests")
            response.raise_for_status()
            return _parse_requests(response.json())


def _parse_requests(items: Iterable[dict]) -> list[NotificationRequest]:
    return [NotificationRequest.model_validate(item) for item in items]
