"""Tests for threshold notifications and the notification inbox."""

from dataclasses import replace
from datetime import date, datetime

import pytest
from structlog.testing import capture_logs

from spendwise.domain.entities import Goal
from spendwise.domain.errors import ConflictError, NotFoundError
from spendwise.domain.money import Money
from spendwise.domain.notification import (
    ProgressSubject,
    ThresholdNotifier,
    build_message,
    crossed_threshold,
)


@pytest.fixture
def sample_goal():
    return Goal(
        id=1,
        user_id=1,
        name="Trip",
        target_amount=Money.of(100),
        target_date=date(2030, 1, 1),
        created_at=datetime(2024, 1, 1),
    )


@pytest.mark.parametrize(
    "percentage, last, expected",
    [
        ("49.99", None, None),
        ("50", None, 50),
        ("74.99", None, 50),
        ("75", 50, 75),
        ("80", 75, None),
        ("100", 75, 100),
        ("250", 100, None),
        ("60", 75, None),
        ("100", None, 100),
    ],
)
def test_crossed_threshold(percentage, last, expected):
    assert crossed_threshold(Money.of(percentage), last) == expected


def test_messages():
    assert build_message(ProgressSubject.GOAL, "Laptop", 100) == (
        "Congratulations! You have reached your goal 'Laptop'!"
    )
    assert build_message(ProgressSubject.GOAL, "Laptop", 50) == (
        "You have reached 50% of your goal 'Laptop'. Keep going!"
    )
    assert build_message(ProgressSubject.BUDGET, "Food", 75) == (
        "You have used 75% of your budget 'Food'."
    )
    assert build_message(ProgressSubject.BUDGET, "Food", 100) == (
        "You have used the full amount of your budget 'Food'."
    )


def test_rounded_percentage_at_threshold_does_not_claim_more():
    # 49.995% rounds to 50.00%
    percentage = Money.of(49995).percentage_of(100000)
    assert percentage == Money.of(50)

    threshold = crossed_threshold(percentage, None)
    assert threshold == 50
    message = build_message(ProgressSubject.GOAL, "Trip", threshold)
    assert "reached 50%" in message
    assert "over" not in message


def test_emit_stores_unread_notification(temp_db, sample_user):
    notifier = ThresholdNotifier(temp_db)
    assert notifier.emit(sample_user.id, ProgressSubject.GOAL, "Trip", 50) is True

    notes = temp_db.list_notifications(sample_user.id)
    assert len(notes) == 1
    assert "50%" in notes[0].message
    assert not notes[0].is_read


class FailingDatabase:
    """Stand-in whose notification storage always fails."""

    def create_notification(self, user_id, message):
        raise RuntimeError("disk full")


def test_emit_failure_is_logged_not_raised():
    notifier = ThresholdNotifier(FailingDatabase())
    with capture_logs() as logs:
        assert notifier.emit(1, ProgressSubject.BUDGET, "Food", 75) is False

    failed = [entry for entry in logs if entry["event"] == "notification_failed"]
    assert len(failed) == 1
    assert failed[0]["log_level"] == "error"
    assert failed[0]["threshold"] == 75
    assert failed[0]["error"] == "disk full"


def test_emit_success_is_logged(temp_db, sample_user):
    notifier = ThresholdNotifier(temp_db)
    with capture_logs() as logs:
        notifier.emit(sample_user.id, ProgressSubject.BUDGET, "Food", 100)

    emitted = [entry for entry in logs if entry["event"] == "notification_emitted"]
    assert len(emitted) == 1
    assert emitted[0]["threshold"] == 100


class RecordingStore:
    """Stand-in database that records saves and notifications in order."""

    def __init__(self, fail_notifications=False):
        self.events = []
        self.fail_notifications = fail_notifications

    def save(self, entity):
        self.events.append(("save", entity.last_notification_percentage))
        return entity

    def create_notification(self, user_id, message):
        if self.fail_notifications:
            raise RuntimeError("disk full")
        self.events.append(("notify", message))
        return len(self.events)


def test_save_and_notify_saves_before_notifying(sample_goal):
    store = RecordingStore()
    notifier = ThresholdNotifier(store)

    saved = notifier.save_and_notify(sample_goal, ProgressSubject.GOAL, Money.of(60), store.save)

    assert saved.last_notification_percentage == 50
    assert [kind for kind, _ in store.events] == ["save", "notify"]


def test_save_and_notify_without_new_threshold_only_saves(sample_goal):
    store = RecordingStore()
    notifier = ThresholdNotifier(store)
    goal = replace(sample_goal, last_notification_percentage=50)

    saved = notifier.save_and_notify(goal, ProgressSubject.GOAL, Money.of(60), store.save)

    assert saved.last_notification_percentage == 50
    assert store.events == [("save", 50)]


def test_save_and_notify_restores_threshold_when_notification_fails(sample_goal):
    store = RecordingStore(fail_notifications=True)
    notifier = ThresholdNotifier(store)

    saved = notifier.save_and_notify(sample_goal, ProgressSubject.GOAL, Money.of(80), store.save)

    assert saved.last_notification_percentage is None
    assert store.events == [("save", 75), ("save", None)]


def test_save_and_notify_skips_notification_when_save_is_rejected(sample_goal):
    store = RecordingStore()
    notifier = ThresholdNotifier(store)

    def reject(entity):
        raise ConflictError("stale")

    with pytest.raises(ConflictError):
        notifier.save_and_notify(sample_goal, ProgressSubject.GOAL, Money.of(100), reject)
    assert store.events == []


def test_inbox_read_flow(notification_service, sample_user):
    first = notification_service.create_notification(sample_user.id, "first")
    notification_service.create_notification(sample_user.id, "second")

    listed = notification_service.list_notifications(sample_user.id)
    assert [n.message for n in listed] == ["second", "first"]
    assert notification_service.unread_count(sample_user.id) == 2

    notification_service.mark_as_read(sample_user.id, first)
    assert notification_service.unread_count(sample_user.id) == 1
    unread = notification_service.list_notifications(sample_user.id, unread_only=True)
    assert [n.message for n in unread] == ["second"]

    assert notification_service.mark_all_as_read(sample_user.id) == 1
    assert notification_service.unread_count(sample_user.id) == 0


def test_mark_as_read_rejects_other_users_notification(
    notification_service, sample_user, other_user
):
    note_id = notification_service.create_notification(other_user.id, "private")
    with pytest.raises(NotFoundError):
        notification_service.mark_as_read(sample_user.id, note_id)


def test_mark_as_read_missing(notification_service, sample_user):
    with pytest.raises(NotFoundError):
        notification_service.mark_as_read(sample_user.id, 999)
