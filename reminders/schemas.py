"""
reminders/schemas.py

Pydantic data models for the reminder scheduling layer.
- Task / Reminder: the caller-owned task and its tagged reminder union
- TriggerDescriptor: resolved trigger handed to the notification center
- NotificationRequest: the pending unit keyed by task identifier
- Gateway request and response bodies
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# ── Reminders ────────────────────────────────────────────────

class ReminderLocation(BaseModel):
    """Center and radius of a location reminder."""

    latitude: float
    longitude: float
    radius: float  # meters


class TimeReminder(BaseModel):
    """Fire after a delay, in seconds."""

    kind: Literal["time"] = "time"
    time_interval: float | None = None
    repeats: bool = False


class CalendarReminder(BaseModel):
    """Fire at a calendar date and time (minute precision)."""

    kind: Literal["calendar"] = "calendar"
    date: datetime | None = None
    repeats: bool = False


class LocationReminder(BaseModel):
    """Fire when the device crosses a circular region."""

    kind: Literal["location"] = "location"
    location: ReminderLocation | None = None
    repeats: bool = False


Reminder = Annotated[
    Union[TimeReminder, CalendarReminder, LocationReminder],
    Field(discriminator="kind"),
]


class Task(BaseModel):
    """A task owned by the caller's task store."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    completed: bool = False
    reminder: Reminder


# ── Triggers ─────────────────────────────────────────────────

class DateComponents(BaseModel):
    """Calendar components significant to a calendar trigger. No seconds."""

    year: int
    month: int
    day: int
    hour: int
    minute: int


class CircularRegion(BaseModel):
    """Geofence region; identifier is always the task identifier."""

    identifier: str
    latitude: float
    longitude: float
    radius: float
    notify_on_entry: bool = True
    notify_on_exit: bool = True


class TimeIntervalTrigger(BaseModel):
    kind: Literal["time"] = "time"
    time_interval: float
    repeats: bool = False
    thread_identifier: str


class CalendarTrigger(BaseModel):
    kind: Literal["calendar"] = "calendar"
    date_components: DateComponents
    repeats: bool = False
    thread_identifier: str


class LocationTrigger(BaseModel):
    kind: Literal["location"] = "location"
    region: CircularRegion
    repeats: bool = False
    thread_identifier: str


TriggerDescriptor = Annotated[
    Union[TimeIntervalTrigger, CalendarTrigger, LocationTrigger],
    Field(discriminator="kind"),
]


# ── Notification requests ────────────────────────────────────

class NotificationContent(BaseModel):
    """Payload shown to the user plus the embedded task metadata."""

    title: str
    body: str
    category_identifier: str
    thread_identifier: str = ""
    user_info: dict[str, Any] = Field(default_factory=dict)


class NotificationRequest(BaseModel):
    """A pending request, keyed by the originating task identifier."""

    identifier: str
    content: NotificationContent
    trigger: TriggerDescriptor


class NotificationAction(BaseModel):
    identifier: str
    title: str
    options: list[str] = Field(default_factory=list)


class NotificationCategory(BaseModel):
    identifier: str
    actions: list[NotificationAction]


# ── Settings and authorization ───────────────────────────────

class AuthorizationStatus(str, Enum):
    """Notification authorization state reported by the delivery daemon."""

    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    AUTHORIZED = "authorized"
    PROVISIONAL = "provisional"


class LocationAuthorization(str, Enum):
    """Location authorization state of the host application."""

    NOT_DETERMINED = "not_determined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    WHEN_IN_USE = "when_in_use"
    ALWAYS = "always"


class NotificationSettings(BaseModel):
    """Snapshot of the notification settings granted to the application."""

    authorization_status: AuthorizationStatus = AuthorizationStatus.NOT_DETERMINED
    alert_enabled: bool = False
    sound_enabled: bool = False
    badge_enabled: bool = False


class ScheduleOutcome(str, Enum):
    """Observable result of a schedule call. Never raised."""

    SCHEDULED = "scheduled"
    MISSING_DATA = "missing_data"
    INVALID_DATA = "invalid_data"
    PERMISSION_DENIED = "permission_denied"
    SUBMISSION_FAILED = "submission_failed"


# ── Gateway bodies ───────────────────────────────────────────

class UserActionEvent(BaseModel):
    """Inbound event: the user acted on a delivered notification."""

    action_identifier: str
    request: NotificationRequest


class PresentationResponse(BaseModel):
    options: list[str]


class ScheduleResponse(BaseModel):
    task_id: str
    outcome: ScheduleOutcome


class AuthorizationResponse(BaseModel):
    granted: bool
