"""
reminders/services/resolver.py

Trigger resolution for the three reminder kinds.
- resolve_trigger: pure classification of a reminder into a trigger descriptor
- date_from_components: rebuild a datetime from calendar trigger components

Raises UnschedulableError subclasses; performs no I/O and never retries.
"""

import math
from datetime import datetime, tzinfo
from typing import Optional

from reminders.constants import (
    CALENDAR_BASED_THREAD_ID,
    LATITUDE_MAX,
    LATITUDE_MIN,
    LOCATION_BASED_THREAD_ID,
    LONGITUDE_MAX,
    LONGITUDE_MIN,
    TIME_BASED_THREAD_ID,
)
from reminders.exceptions import MissingDataError, PermissionDeniedError
from reminders.schemas import (
    CalendarReminder,
    CalendarTrigger,
    CircularRegion,
    DateComponents,
    LocationReminder,
    LocationTrigger,
    Reminder,
    TimeIntervalTrigger,
    TimeReminder,
    TriggerDescriptor,
)


def resolve_trigger(
    task_id: str,
    reminder: Reminder,
    location_permission_granted: bool,
) -> TriggerDescriptor:
    """
    Turn a task's reminder into a concrete trigger descriptor.

    The task identifier doubles as the geofence region identifier, so task
    identifiers must be unique and stable.
    """
    if isinstance(reminder, TimeReminder):
        return _resolve_time(task_id, reminder)
    if isinstance(reminder, CalendarReminder):
        return _resolve_calendar(task_id, reminder)
    if isinstance(reminder, LocationReminder):
        return _resolve_location(task_id, reminder, location_permission_granted)
    raise TypeError(f"unsupported reminder type: {type(reminder).__name__}")


def _resolve_time(task_id: str, reminder: TimeReminder) -> TimeIntervalTrigger:
    if reminder.time_interval is None:
        raise MissingDataError(task_id, "time reminder has no interval")
    if not math.isfinite(reminder.time_interval) or reminder.time_interval <= 0:
        raise MissingDataError(
            task_id,
            f"time interval must be positive and finite, got {reminder.time_interval}",
            invalid=True,
        )
    return TimeIntervalTrigger(
        time_interval=reminder.time_interval,
        repeats=reminder.repeats,
        thread_identifier=TIME_BASED_THREAD_ID,
    )


def _resolve_calendar(task_id: str, reminder: CalendarReminder) -> CalendarTrigger:
    if reminder.date is None:
        raise MissingDataError(task_id, "calendar reminder has no date")
    date = reminder.date
    # Seconds are dropped: 10:30:45 fires at the 10:30 boundary
    components = DateComponents(
        year=date.year,
        month=date.month,
        day=date.day,
        hour=date.hour,
        minute=date.minute,
    )
    return CalendarTrigger(
        date_components=components,
        repeats=reminder.repeats,
        thread_identifier=CALENDAR_BASED_THREAD_ID,
    )


def _resolve_location(
    task_id: str,
    reminder: LocationReminder,
    location_permission_granted: bool,
) -> LocationTrigger:
    # Permission is checked before the location data itself
    if not location_permission_granted:
        raise PermissionDeniedError(task_id)

    location = reminder.location
    if location is None:
        raise MissingDataError(task_id, "location reminder has no location")
    if not LATITUDE_MIN <= location.latitude <= LATITUDE_MAX:
        raise MissingDataError(task_id, f"latitude {location.latitude} out of range", invalid=True)
    if not LONGITUDE_MIN <= location.longitude <= LONGITUDE_MAX:
        raise MissingDataError(task_id, f"longitude {location.longitude} out of range", invalid=True)
    if not math.isfinite(location.radius) or location.radius <= 0:
        raise MissingDataError(task_id, f"radius must be positive and finite, got {location.radius}", invalid=True)

    region = CircularRegion(
        identifier=task_id,
        latitude=location.latitude,
        longitude=location.longitude,
        radius=location.radius,
    )
    return LocationTrigger(
        region=region,
        repeats=reminder.repeats,
        thread_identifier=LOCATION_BASED_THREAD_ID,
    )


def date_from_components(
    components: DateComponents,
    tz: Optional[tzinfo] = None,
) -> datetime:
    """Rebuild the minute-precision datetime a calendar trigger fires at."""
    return datetime(
        components.year,
        components.month,
        components.day,
        components.hour,
        components.minute,
        tzinfo=tz,
    )
