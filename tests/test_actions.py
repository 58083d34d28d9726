"""
tests/test_actions.py

Unit tests for reminders/services/actions.py.
The task store is mocked; completion is always signalled exactly once.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from reminders.exceptions import PayloadDecodeError
from reminders.services.actions import (
    NotificationActionHandler,
    decode_task_payload,
    notification_categories,
    will_present,
)
from tests.fixtures import build_delivered_request, build_time_task


def _handler(cancel_on_complete: bool = True) -> tuple[NotificationActionHandler, MagicMock, AsyncMock]:
    scheduler = AsyncMock()
    task_store = MagicMock()
    handler = NotificationActionHandler(scheduler, task_store, cancel_on_complete=cancel_on_complete)
    return handler, task_store, scheduler


@pytest.mark.asyncio
async def test_mark_as_done_removes_task_and_cancels_repeats() -> None:
    """markAsDone on t1's payload removes t1 and cancels its pending request."""
    handler, task_store, scheduler = _handler()
    task = build_time_task(task_id="t1", repeats=True)
    completion = MagicMock()

    await handler.handle_user_action("markAsDone", build_delivered_request(task), completion)

    task_store.remove.assert_called_once_with(task)
    scheduler.cancel.assert_awaited_once_with("t1")
    completion.assert_called_once_with()


@pytest.mark.asyncio
async def test_mark_as_done_without_cancel_on_complete() -> None:
    handler, task_store, scheduler = _handler(cancel_on_complete=False)

    await handler.handle_user_action("markAsDone", build_delivered_request(), MagicMock())

    task_store.remove.assert_called_once()
    scheduler.cancel.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("action", ["dismiss", "com.apple.UNNotificationDefaultActionIdentifier", ""])
async def test_other_actions_change_nothing(action: str) -> None:
    """dismiss and unknown actions issue no store instruction."""
    handler, task_store, scheduler = _handler()
    completion = MagicMock()

    await handler.handle_user_action(action, build_delivered_request(), completion)

    task_store.remove.assert_not_called()
    scheduler.cancel.assert_not_awaited()
    completion.assert_called_once_with()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "user_info",
    [
        {"Task": "{not json"},
        {"Task": '{"id": "t1"}'},
        {"Task": {"id": "t1"}},
        {"Task": 42},
        {"Other": "{}"},
        {},
    ],
)
async def test_mark_as_done_with_corrupted_payload_is_ignored(user_info: dict[str, Any]) -> None:
    """Corrupt or missing payload: no instruction, completion still signalled."""
    handler, task_store, scheduler = _handler()
    completion = MagicMock()

    await handler.handle_user_action(
        "markAsDone",
        build_delivered_request(user_info=user_info),
        completion,
    )

    task_store.remove.assert_not_called()
    scheduler.cancel.assert_not_awaited()
    completion.assert_called_once_with()


@pytest.mark.asyncio
async def test_completion_signalled_when_store_fails() -> None:
    handler, task_store, _ = _handler()
    task_store.remove.side_effect = RuntimeError("store unavailable")
    completion = MagicMock()

    await handler.handle_user_action("markAsDone", build_delivered_request(), completion)

    completion.assert_called_once_with()


def test_decode_task_payload_round_trips_task() -> None:
    task = build_time_task()
    assert decode_task_payload({"Task": task.model_dump_json()}) == task


def test_decode_task_payload_raises_on_garbage() -> None:
    with pytest.raises(PayloadDecodeError):
        decode_task_payload({"Task": "garbage"})


def test_will_present_is_always_banner() -> None:
    assert will_present(build_delivered_request()) == ["banner"]


def test_notification_category_has_two_actions() -> None:
    categories = notification_categories()

    assert len(categories) == 1
    assert categories[0].identifier == "OrganizerPlusCategory"
    assert [action.identifier for action in categories[0].actions] == ["dismiss", "markAsDone"]


def test_decode_task_payload_rejects_non_string_payload() -> None:
    with pytest.raises(PayloadDecodeError):
        decode_task_payload({"Task": {"id": "t1", "name": "Buy milk"}})
