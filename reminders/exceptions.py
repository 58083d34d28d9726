"""
reminders/exceptions.py

Error taxonomy for reminder scheduling.
These are raised inside the service layer and caught at its boundary;
none of them propagate to callers of schedule, cancel or the action handler.
"""

from enum import Enum


class UnschedulableReason(str, Enum):
    MISSING_DATA = "missing_data"
    INVALID_DATA = "invalid_data"
    PERMISSION_DENIED = "permission_denied"


class ReminderError(Exception):
    """Base class for reminder scheduling errors."""


class UnschedulableError(ReminderError):
    """The reminder cannot currently be turned into a trigger."""

    def __init__(self, reason: UnschedulableReason, task_id: str, detail: str = "") -> None:
        self.reason = reason
        self.task_id = task_id
        self.detail = detail
        super().__init__(f"task {task_id} unschedulable ({reason.value}): {detail}")


class MissingDataError(UnschedulableError):
    """A required field for the reminder kind is absent or unusable."""

    def __init__(self, task_id: str, detail: str, invalid: bool = False) -> None:
        reason = UnschedulableReason.INVALID_DATA if invalid else UnschedulableReason.MISSING_DATA
        super().__init__(reason, task_id, detail)


class PermissionDeniedError(UnschedulableError):
    """Location reminder requested without when-in-use authorization."""

    def __init__(self, task_id: str) -> None:
        super().__init__(
            UnschedulableReason.PERMISSION_DENIED,
            task_id,
            "location authorization is not when-in-use",
        )


class SubmissionError(ReminderError):
    """The notification center rejected a well-formed request."""

    def __init__(self, identifier: str, detail: str) -> None:
        self.identifier = identifier
        self.detail = detail
        super().__init__(f"request {identifier} rejected: {detail}")


class PayloadDecodeError(ReminderError):
    """A delivered notification's task payload could not be reconstructed."""
