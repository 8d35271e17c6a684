"""Threshold notifications and the notification inbox."""

from dataclasses import replace
from enum import Enum
from typing import Callable, Optional, TypeVar, Union

from spendwise.database.base import Database
from spendwise.domain.entities import Budget, Goal, Notification
from spendwise.domain.errors import NotFoundError, notification_not_found
from spendwise.domain.money import Money
from spendwise.log import get_logger

logger = get_logger(__name__)

NOTIFICATION_THRESHOLDS = (50, 75, 100)

Tracked = TypeVar("Tracked", bound=Union[Budget, Goal])


class ProgressSubject(str, Enum):
    """Kind of entity whose progress is being tracked."""

    GOAL = "goal"
    BUDGET = "budget"


def reached_threshold(percentage: Money) -> Optional[int]:
    """Return the highest threshold at or below percentage, if any."""
    reached = None
    for threshold in NOTIFICATION_THRESHOLDS:
        if percentage.amount >= threshold:
            reached = threshold
    return reached


def crossed_threshold(percentage: Money, last_notified: Optional[int]) -> Optional[int]:
    """Return the threshold to notify about, or None.

    A threshold is reported only when it is higher than the last one notified,
    so re-evaluating at the same or a lower percentage never fires again and a
    jump over several thresholds reports only the highest.
    """
    threshold = reached_threshold(percentage)
    if threshold is None:
        return None
    if last_notified is not None and threshold <= last_notified:
        return None
    return threshold


def build_message(subject: ProgressSubject, display_name: str, threshold: int) -> str:
    """Build the notification text for a threshold crossing.

    Percentages are compared after rounding to two decimals, so the text
    names the threshold reached rather than claiming progress beyond it.
    """
    if subject == ProgressSubject.GOAL:
        if threshold >= 100:
            return f"Congratulations! You have reached your goal '{display_name}'!"
        return f"You have reached {threshold}% of your goal '{display_name}'. Keep going!"
    if threshold >= 100:
        return f"You have used the full amount of your budget '{display_name}'."
    return f"You have used {threshold}% of your budget '{display_name}'."


class ThresholdNotifier:
    """Emits at most one notification per threshold crossing."""

    def __init__(self, db: Database):
        """Initialize threshold notifier.

        Args:
            db: Database instance
        """
        self.db = db

    def emit(self, user_id: int, subject: ProgressSubject, display_name: str, threshold: int) -> bool:
        """Store the notification for a crossed threshold.

        Emission is best effort: a storage failure is logged, never raised.

        Returns:
            True if the notification was stored
        """
        message = build_message(subject, display_name, threshold)
        try:
            notification_id = self.db.create_notification(user_id, message)
        except Exception as e:
            logger.error(
                "notification_failed",
                user_id=user_id,
                subject=subject.value,
                name=display_name,
                threshold=threshold,
                error=str(e),
            )
            return False

        logger.info(
            "notification_emitted",
            user_id=user_id,
            subject=subject.value,
            name=display_name,
            threshold=threshold,
            notification_id=notification_id,
        )
        return True

    def save_and_notify(
        self,
        entity: Tracked,
        subject: ProgressSubject,
        percentage: Money,
        save: Callable[[Tracked], Tracked],
    ) -> Tracked:
        """Persist a budget or goal, then notify about a newly crossed threshold.

        The new threshold is saved with the entity before the notification is
        written, so a rejected save (for example a ConflictError) leaves no
        notification behind. If the notification cannot be stored, the
        previous threshold is saved back so a later change retries it.

        Args:
            entity: Budget or goal with its changes applied
            subject: Whether this is a goal or a budget
            percentage: Current progress percentage
            save: Database save function for the entity

        Returns:
            The saved entity
        """
        previous = entity.last_notification_percentage
        threshold = crossed_threshold(percentage, previous)
        if threshold is None:
            return save(entity)

        saved = save(replace(entity, last_notification_percentage=threshold))
        if self.emit(saved.user_id, subject, saved.name, threshold):
            return saved
        return save(replace(saved, last_notification_percentage=previous))


class NotificationService:
    """Service for reading and managing a user's notifications."""

    def __init__(self, db: Database):
        """Initialize notification service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_notification(self, user_id: int, message: str) -> int:
        """Store a notification for a user. Returns notification ID."""
        return self.db.create_notification(user_id, message)

    def list_notifications(self, user_id: int, unread_only: bool = False) -> list[Notification]:
        """List notifications, newest first."""
        return self.db.list_notifications(user_id, unread_only=unread_only)

    def unread_count(self, user_id: int) -> int:
        return len(self.db.list_notifications(user_id, unread_only=True))

    def mark_as_read(self, user_id: int, notification_id: int) -> None:
        """Mark a single notification as read.

        Raises:
            NotFoundError: If the notification does not exist for this user
        """
        notification = self.db.get_notification(notification_id)
        if notification is None or notification.user_id != user_id:
            raise NotFoundError(notification_not_found(notification_id))
        self.db.mark_notifications_read(user_id, notification_id)

    def mark_all_as_read(self, user_id: int) -> int:
        """Mark every unread notification as read. Returns count updated."""
        return self.db.mark_notifications_read(user_id)
