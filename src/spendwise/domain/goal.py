"""Savings goal lifecycle and the goal domain service.

Status transitions::

    ACTIVE --(current >= target, or explicit complete)--> COMPLETED
    ACTIVE --(cancel)--> CANCELLED
    COMPLETED / CANCELLED --(reactivate)--> ACTIVE

Reactivating a goal whose saved amount already covers its target completes
it again straight away.
"""

from dataclasses import replace
from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

from spendwise.database.base import Database
from spendwise.domain.entities import Goal, GoalStatus, GoalSummary
from spendwise.domain.errors import (
    InvalidStateError,
    NotFoundError,
    ValidationError,
    goal_not_found,
    user_not_found,
)
from spendwise.domain.money import Money, MoneyLike
from spendwise.domain.notification import ProgressSubject, ThresholdNotifier
from spendwise.domain.validation import require_name, require_optional_text
from spendwise.log import get_logger

logger = get_logger(__name__)

NEAR_COMPLETION_PERCENTAGE = Decimal(80)


def _now() -> datetime:
    return datetime.now(UTC)


def mark_completed(goal: Goal, now: Optional[datetime] = None) -> Goal:
    """Move a goal to COMPLETED, stamping completed_at on the transition."""
    if goal.status == GoalStatus.COMPLETED:
        return goal
    return replace(goal, status=GoalStatus.COMPLETED, completed_at=now or _now())


def auto_complete(goal: Goal, now: Optional[datetime] = None) -> Goal:
    """Complete an active goal whose saved amount has reached its target."""
    if goal.status == GoalStatus.ACTIVE and goal.is_completed:
        return mark_completed(goal, now)
    return goal


def add_contribution(goal: Goal, amount: MoneyLike, now: Optional[datetime] = None) -> Goal:
    """Add a positive amount to an active goal.

    Raises:
        ValidationError: If amount is not positive
        InvalidStateError: If the goal is not active
    """
    money = Money.of(amount)
    if not money.is_positive():
        raise ValidationError("Contribution amount must be greater than zero")
    if goal.status != GoalStatus.ACTIVE:
        raise InvalidStateError(
            f"Can only contribute to active goals (goal {goal.id} is {goal.status.display_name.lower()})"
        )
    return auto_complete(replace(goal, current_amount=goal.current_amount + money), now)


def set_current_amount(goal: Goal, amount: MoneyLike, now: Optional[datetime] = None) -> Goal:
    """Overwrite the saved amount.

    Raises:
        ValidationError: If amount is negative
    """
    money = Money.of(amount)
    if money.is_negative():
        raise ValidationError("Amount cannot be negative")
    return auto_complete(replace(goal, current_amount=money), now)


def cancel(goal: Goal) -> Goal:
    return replace(goal, status=GoalStatus.CANCELLED, completed_at=None)


def reactivate(goal: Goal, today: Optional[date] = None, now: Optional[datetime] = None) -> Goal:
    """Return a goal to ACTIVE.

    Raises:
        InvalidStateError: If the target date has already passed
    """
    today = today or date.today()
    if goal.target_date < today:
        raise InvalidStateError("Cannot reactivate a goal with a past target date")
    goal = replace(goal, status=GoalStatus.ACTIVE, completed_at=None)
    return auto_complete(goal, now)


def revise(
    goal: Goal,
    name: str,
    target_amount: MoneyLike,
    target_date: date,
    description: Optional[str] = None,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> Goal:
    """Change a goal's definition and re-check completion.

    Raises:
        ValidationError: If an active goal gets a past target date, or the
            target amount is not positive
    """
    today = today or date.today()
    name = require_name(name, "Goal name")
    target = Money.of(target_amount)
    if goal.status == GoalStatus.ACTIVE and target_date < today:
        raise ValidationError("Target date cannot be in the past for active goals")
    if not target.is_positive():
        raise ValidationError("Target amount must be greater than zero")
    description = require_optional_text(description, "Description")

    goal = replace(
        goal,
        name=name,
        target_amount=target,
        target_date=target_date,
        description=description,
    )
    return auto_complete(goal, now)


def monthly_savings_needed(goal: Goal, today: Optional[date] = None) -> Money:
    """Amount to save each month to reach the target on time.

    Whole months are counted between today and the target date, with a
    minimum of one.

    Raises:
        ValidationError: If the target date is in the past
    """
    today = today or date.today()
    if goal.target_date < today:
        raise ValidationError("Target date cannot be in the past")
    outstanding = goal.remaining_amount
    if not outstanding.is_positive():
        return Money.zero()
    delta = relativedelta(goal.target_date, today)
    months = max(delta.years * 12 + delta.months, 1)
    return Money.of(outstanding.amount / months)


class GoalService:
    """Service for managing savings goals."""

    def __init__(self, db: Database, notifier: Optional[ThresholdNotifier] = None):
        """Initialize goal service.

        Args:
            db: Database instance
            notifier: Threshold notifier (defaults to one backed by db)
        """
        self.db = db
        self.notifier = notifier or ThresholdNotifier(db)

    def create_goal(
        self,
        user_id: int,
        name: str,
        target_amount: MoneyLike,
        target_date: date,
        description: Optional[str] = None,
        today: Optional[date] = None,
    ) -> int:
        """Create an active goal with nothing saved yet.

        Args:
            user_id: Owner of the goal
            name: Goal name
            target_amount: Amount to save, must be positive
            target_date: Date to reach the target by, today or later
            description: Optional description

        Returns:
            Goal ID

        Raises:
            ValidationError: If the target date is past or the amount not positive
            NotFoundError: If the user doesn't exist
        """
        today = today or date.today()
        name = require_name(name, "Goal name")
        target = Money.of(target_amount)
        if target_date < today:
            raise ValidationError("Target date cannot be in the past")
        if not target.is_positive():
            raise ValidationError("Target amount must be greater than zero")
        description = require_optional_text(description, "Description")
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))

        goal_id = self.db.create_goal(
            user_id=user_id,
            name=name,
            target_amount=target,
            target_date=target_date,
            description=description,
        )
        logger.info("goal_created", user_id=user_id, goal_id=goal_id)
        return goal_id

    def get_goal(self, user_id: int, goal_id: int) -> Goal:
        """Get a goal owned by user_id.

        Raises:
            NotFoundError: If the goal doesn't exist for this user
        """
        goal = self.db.get_goal(goal_id)
        if goal is None or goal.user_id != user_id:
            raise NotFoundError(goal_not_found(goal_id))
        return goal

    def list_goals(self, user_id: int, status: Optional[GoalStatus] = None) -> list[Goal]:
        """List goals ordered by target date."""
        return self.db.list_goals(user_id, status=status)

    def search_goals(self, user_id: int, keyword: str) -> list[Goal]:
        """Find goals whose name or description contains keyword (case-insensitive)."""
        needle = keyword.strip().lower()
        return [
            goal
            for goal in self.db.list_goals(user_id)
            if needle in goal.name.lower() or needle in (goal.description or "").lower()
        ]

    def list_overdue_goals(self, user_id: int, today: Optional[date] = None) -> list[Goal]:
        """Active goals past their target date without reaching the target."""
        return [
            goal
            for goal in self.db.list_goals(user_id, status=GoalStatus.ACTIVE)
            if goal.is_overdue(today)
        ]

    def contribute(self, user_id: int, goal_id: int, amount: MoneyLike) -> Goal:
        """Add money to an active goal.

        Raises:
            ValidationError: If amount is not positive
            InvalidStateError: If the goal is not active
            NotFoundError: If the goal doesn't exist for this user
        """
        money = Money.of(amount)
        if not money.is_positive():
            raise ValidationError("Contribution amount must be greater than zero")
        goal = self.get_goal(user_id, goal_id)
        return self._save_with_notification(goal, add_contribution(goal, money))

    def set_progress(self, user_id: int, goal_id: int, amount: MoneyLike) -> Goal:
        """Overwrite the amount saved towards a goal.

        Raises:
            ValidationError: If amount is negative
            NotFoundError: If the goal doesn't exist for this user
        """
        money = Money.of(amount)
        if money.is_negative():
            raise ValidationError("Amount cannot be negative")
        goal = self.get_goal(user_id, goal_id)
        return self._save_with_notification(goal, set_current_amount(goal, money))

    def complete_goal(self, user_id: int, goal_id: int) -> Goal:
        """Mark a goal completed regardless of the amount saved."""
        goal = self.get_goal(user_id, goal_id)
        return self._save(goal, mark_completed(goal))

    def cancel_goal(self, user_id: int, goal_id: int) -> Goal:
        goal = self.get_goal(user_id, goal_id)
        return self._save(goal, cancel(goal))

    def reactivate_goal(self, user_id: int, goal_id: int, today: Optional[date] = None) -> Goal:
        """Return a completed or cancelled goal to active.

        Raises:
            InvalidStateError: If the target date has passed
        """
        goal = self.get_goal(user_id, goal_id)
        return self._save(goal, reactivate(goal, today=today))

    def update_goal(
        self,
        user_id: int,
        goal_id: int,
        name: str,
        target_amount: MoneyLike,
        target_date: date,
        description: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Goal:
        """Change a goal's name, target and description."""
        goal = self.get_goal(user_id, goal_id)
        updated = revise(
            goal,
            name=name,
            target_amount=target_amount,
            target_date=target_date,
            description=description,
            today=today,
        )
        return self._save(goal, updated)

    def delete_goal(self, user_id: int, goal_id: int) -> None:
        self.get_goal(user_id, goal_id)
        self.db.delete_goal(goal_id)

    def complete_ready_goals(self, user_id: int) -> list[Goal]:
        """Complete every active goal whose saved amount covers its target."""
        completed = []
        for goal in self.db.list_goals(user_id, status=GoalStatus.ACTIVE):
            if goal.is_completed:
                completed.append(self._save(goal, mark_completed(goal)))
        return completed

    def goal_summary(self, user_id: int, today: Optional[date] = None) -> GoalSummary:
        """Summarize a user's active goals."""
        active_goals = self.db.list_goals(user_id, status=GoalStatus.ACTIVE)
        total_target = Money.sum(goal.target_amount for goal in active_goals)
        total_current = Money.sum(goal.current_amount for goal in active_goals)
        near_completion = sum(
            1
            for goal in active_goals
            if goal.progress_percentage.amount >= NEAR_COMPLETION_PERCENTAGE
        )
        overdue = sum(1 for goal in active_goals if goal.is_overdue(today))

        if total_target.is_positive():
            overall = total_current.percentage_of(total_target)
        else:
            overall = Money.zero()

        return GoalSummary(
            active_goals_count=len(active_goals),
            total_target_amount=total_target,
            total_current_amount=total_current,
            overall_progress_percentage=overall,
            near_completion_count=near_completion,
            overdue_count=overdue,
            completed_count=len(self.db.list_goals(user_id, status=GoalStatus.COMPLETED)),
        )

    def _save_with_notification(self, before: Goal, after: Goal) -> Goal:
        saved = self.notifier.save_and_notify(
            after, ProgressSubject.GOAL, after.progress_percentage, self.db.save_goal
        )
        self._log_transition(before, saved)
        return saved

    def _save(self, before: Goal, after: Goal) -> Goal:
        saved = self.db.save_goal(after)
        self._log_transition(before, saved)
        return saved

    def _log_transition(self, before: Goal, saved: Goal) -> None:
        if saved.status == GoalStatus.COMPLETED and before.status != GoalStatus.COMPLETED:
            logger.info("goal_completed", user_id=saved.user_id, goal_id=saved.id)
        elif before.status != saved.status:
            logger.info(
                "goal_status_changed",
                goal_id=saved.id,
                old_status=before.status.value,
                new_status=saved.status.value,
            )
