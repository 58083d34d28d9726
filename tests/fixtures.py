"""
tests/fixtures.py

Shared test data and helper functions for constructing tasks and requests.
All tests must use these fixtures instead of hardcoding test values.
"""

from datetime import datetime
from typing import Any

from reminders.schemas import (
    CalendarReminder,
    LocationReminder,
    NotificationContent,
    NotificationRequest,
    ReminderLocation,
    Task,
    TimeIntervalTrigger,
    TimeReminder,
)

# ── Test reminder data ──────────────────────────────────────

TEST_INTERVAL_S: float = 3600.0
TEST_DATE: datetime = datetime(2024, 6, 15, 10, 30, 45)
TEST_LAT: float = 40.0
TEST_LNG: float = -73.0
TEST_RADIUS_M: float = 100.0


def build_time_task(
    task_id: str = "t1",
    name: str = "Water the plants",
    time_interval: float | None = TEST_INTERVAL_S,
    repeats: bool = False,
) -> Task:
    """Build a task with a time-delay reminder."""
    return Task(
        id=task_id,
        name=name,
        reminder=TimeReminder(time_interval=time_interval, repeats=repeats),
    )


def build_calendar_task(
    task_id: str = "t3",
    name: str = "Dentist appointment",
    date: datetime | None = TEST_DATE,
    repeats: bool = False,
) -> Task:
    """Build a task with a calendar reminder."""
    return Task(
        id=task_id,
        name=name,
        reminder=CalendarReminder(date=date, repeats=repeats),
    )


def build_location_task(
    task_id: str = "t2",
    name: str = "Buy milk",
    lat: float = TEST_LAT,
    lng: float = TEST_LNG,
    radius: float = TEST_RADIUS_M,
    with_location: bool = True,
    repeats: bool = False,
) -> Task:
    """Build a task with a location reminder."""
    location = (
        ReminderLocation(latitude=lat, longitude=lng, radius=radius)
        if with_location
        else None
    )
    return Task(
        id=task_id,
        name=name,
        reminder=LocationReminder(location=location, repeats=repeats),
    )


def build_delivered_request(
    task: Task | None = None,
    user_info: dict[str, Any] | None = None,
) -> NotificationRequest:
    """Build a delivered notification request carrying a task payload."""
    task = task or build_time_task()
    if user_info is None:
        user_info = {"Task": task.model_dump_json()}
    return NotificationRequest(
        identifier=task.id,
        content=NotificationContent(
            title=task.name,
            body="Gentle reminder for your task!",
            category_identifier="OrganizerPlusCategory",
            thread_identifier="TimeBasedNotificationThreadId",
            user_info=user_info,
        ),
        trigger=TimeIntervalTrigger(
            time_interval=TEST_INTERVAL_S,
            thread_identifier="TimeBasedNotificationThreadId",
        ),
    )
