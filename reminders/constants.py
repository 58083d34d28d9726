"""
reminders/constants.py

Fixed identifiers used by the reminder scheduler and the action handler.
All notification identifiers must be referenced from this module.
Magic strings in business logic are prohibited.
"""

# ── Thread groups (presentation hint only) ───────────────────
TIME_BASED_THREAD_ID: str = "TimeBasedNotificationThreadId"
CALENDAR_BASED_THREAD_ID: str = "CalendarBasedNotificationThreadId"
LOCATION_BASED_THREAD_ID: str = "LocationBasedNotificationThreadId"

# ── Category actions ─────────────────────────────────────────
ACTION_DISMISS: str = "dismiss"
ACTION_MARK_AS_DONE: str = "markAsDone"
ACTION_DISMISS_TITLE: str = "Dismiss"
ACTION_MARK_AS_DONE_TITLE: str = "Mark As Done"

# ── Authorization ────────────────────────────────────────────
AUTHORIZATION_OPTIONS: frozenset[str] = frozenset({"alert", "sound", "badge"})

# ── Foreground presentation ──────────────────────────────────
PRESENTATION_BANNER: str = "banner"

# ── Geofence bounds ──────────────────────────────────────────
LATITUDE_MIN: float = -90.0
LATITUDE_MAX: float = 90.0
LONGITUDE_MIN: float = -180.0
LONGITUDE_MAX: float = 180.0

# Earth radius in meters for Haversine calculation
EARTH_RADIUS_M: int = 6_371_000
