"""
tests/test_notification_center.py

Tests for reminders/services/notification_center.py.
HTTP calls go through httpx.MockTransport; no daemon is contacted.
"""

import json
from unittest.mock import MagicMock

import httpx
import pytest

from reminders.exceptions import SubmissionError
from reminders.schemas import LocationAuthorization
from reminders.services.notification_center import (
    HttpNotificationCenter,
    InMemoryNotificationCenter,
    haversine_distance,
)
from reminders.services.scheduler import ReminderScheduler
from tests.fixtures import build_delivered_request, build_location_task, build_time_task


def test_haversine_distance_one_degree_latitude() -> None:
    """One degree of latitude is roughly 111 km."""
    distance = haversine_distance(40.0, -73.0, 41.0, -73.0)
    assert 111_000 < distance < 111_400


@pytest.mark.asyncio
async def test_requests_containing_matches_region() -> None:
    center = InMemoryNotificationCenter()
    scheduler = ReminderScheduler(center, lambda: LocationAuthorization.WHEN_IN_USE)
    await scheduler.schedule(build_location_task(task_id="near", radius=500.0))
    await scheduler.schedule(build_time_task(task_id="timer"))

    inside = center.requests_containing(40.002, -73.0)
    outside = center.requests_containing(40.1, -73.0)

    assert [r.identifier for r in inside] == ["near"]
    assert outside == []


@pytest.mark.asyncio
async def test_http_add_puts_request_under_identifier() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    center = HttpNotificationCenter("http://daemon", transport=httpx.MockTransport(handler))
    delivered = build_delivered_request()

    await center.add(delivered)

    assert seen[0].method == "PUT"
    assert seen[0].url.path == "/requests/t1"
    assert json.loads(seen[0].content)["identifier"] == "t1"


@pytest.mark.asyncio
async def test_http_add_rejection_raises_submission_error() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(507, json={"error": "full"}))
    center = HttpNotificationCenter("http://daemon", transport=transport)

    with pytest.raises(SubmissionError) as exc_info:
        await center.add(build_delivered_request())

    assert exc_info.value.identifier == "t1"
    assert "507" in exc_info.value.detail


@pytest.mark.asyncio
async def test_http_add_transport_failure_raises_submission_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    center = HttpNotificationCenter("http://daemon", transport=httpx.MockTransport(handler))

    with pytest.raises(SubmissionError):
        await center.add(build_delivered_request())


@pytest.mark.asyncio
async def test_http_remove_pending_raises_on_daemon_error() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(500))
    center = HttpNotificationCenter("http://daemon", transport=transport)

    with pytest.raises(httpx.HTTPStatusError):
        await center.remove_pending({"t1"})


@pytest.mark.asyncio
async def test_scheduler_cancel_survives_daemon_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """A failed removal is logged by the scheduler as a failure and not raised."""
    logger = MagicMock()
    monkeypatch.setattr("reminders.services.scheduler.logger", logger)
    transport = httpx.MockTransport(lambda request: httpx.Response(500))
    scheduler = ReminderScheduler(HttpNotificationCenter("http://daemon", transport=transport))

    await scheduler.cancel("t1")

    assert logger.error.call_args.args == ("reminder_cancel_failed",)
    logger.info.assert_not_called()


@pytest.mark.asyncio
async def test_http_authorization_and_settings() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/authorization":
            assert json.loads(request.content) == {"options": ["alert", "badge", "sound"]}
            return httpx.Response(200, json={"granted": True})
        if request.url.path == "/settings":
            return httpx.Response(200, json={"authorization_status": "authorized", "alert_enabled": True})
        return httpx.Response(404)

    center = HttpNotificationCenter("http://daemon", transport=httpx.MockTransport(handler))

    assert await center.request_authorization({"alert", "sound", "badge"}) is True
    fetched = await center.get_notification_settings()
    assert fetched.alert_enabled is True
    assert fetched.sound_enabled is False


@pytest.mark.asyncio
async def test_http_pending_requests_parses_body() -> None:
    delivered = build_delivered_request()
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json=[json.loads(delivered.model_dump_json())])
    )
    center = HttpNotificationCenter("http://daemon", transport=transport)

    assert await center.pending_requests() == [delivered]
