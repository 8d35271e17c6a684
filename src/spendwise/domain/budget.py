"""Budget tracking: utilization math and the budget domain service."""

from dataclasses import replace
from datetime import date
from typing import Optional

from spendwise.database.base import Database
from spendwise.domain import ledger
from spendwise.domain.entities import Budget, BudgetStatus, Transaction, TransactionType
from spendwise.domain.errors import (
    NotFoundError,
    ValidationError,
    budget_not_found,
    category_not_found,
    user_not_found,
)
from spendwise.domain.money import Money, MoneyLike
from spendwise.domain.notification import ProgressSubject, ThresholdNotifier
from spendwise.domain.validation import require_name, require_optional_text
from spendwise.log import get_logger

logger = get_logger(__name__)


def utilization(spent: Money, amount: Money) -> Money:
    """Spent as a percentage of the budget amount.

    Raises:
        DivisionByZeroError: If the budget amount is zero
    """
    return spent.percentage_of(amount)


def remaining(amount: Money, spent: Money) -> Money:
    """Amount left to spend; negative when over budget."""
    return amount - spent


def is_exceeded(spent: Money, amount: Money) -> bool:
    return spent > amount


def is_active(budget: Budget, today: Optional[date] = None) -> bool:
    """True when today falls inside the budget window (inclusive)."""
    today = today or date.today()
    return budget.start_date <= today <= budget.end_date


def days_remaining(budget: Budget, today: Optional[date] = None) -> int:
    today = today or date.today()
    if today > budget.end_date:
        return 0
    return (budget.end_date - today).days


def total_days(budget: Budget) -> int:
    """Number of days in the budget window, counting both ends."""
    return (budget.end_date - budget.start_date).days + 1


def covers(budget: Budget, transaction: Transaction) -> bool:
    """True when a transaction falls in the budget's scope and window."""
    if not transaction.is_expense:
        return False
    if budget.category_id is not None and budget.category_id != transaction.category_id:
        return False
    return budget.start_date <= transaction.occurred_on <= budget.end_date


def _validate_window(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise ValidationError(
            f"Start date {start_date} must not be after end date {end_date}"
        )


def _validate_amount(amount: MoneyLike) -> Money:
    money = Money.of(amount)
    if not money.is_positive():
        raise ValidationError("Budget amount must be greater than zero")
    return money


class BudgetService:
    """Service for managing budgets and their spending state."""

    def __init__(self, db: Database, notifier: Optional[ThresholdNotifier] = None):
        """Initialize budget service.

        Args:
            db: Database instance
            notifier: Threshold notifier (defaults to one backed by db)
        """
        self.db = db
        self.notifier = notifier or ThresholdNotifier(db)

    def create_budget(
        self,
        user_id: int,
        name: str,
        amount: MoneyLike,
        start_date: date,
        end_date: date,
        category_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a budget.

        Args:
            user_id: Owner of the budget
            name: Budget name
            amount: Spending limit, must be positive
            start_date: First day of the window
            end_date: Last day of the window
            category_id: Optional category scope (None covers all expenses)
            description: Optional description

        Returns:
            Budget ID

        Raises:
            ValidationError: If any value is invalid
            NotFoundError: If the user or category doesn't exist
        """
        name = require_name(name, "Budget name")
        money = _validate_amount(amount)
        _validate_window(start_date, end_date)
        description = require_optional_text(description, "Description")

        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))
        if category_id is not None and self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

        budget_id = self.db.create_budget(
            user_id=user_id,
            name=name,
            amount=money,
            start_date=start_date,
            end_date=end_date,
            category_id=category_id,
            description=description,
        )
        logger.info("budget_created", user_id=user_id, budget_id=budget_id)
        # Spending already recorded in the window counts from the start
        self._evaluate_and_save(self.db.get_budget(budget_id))
        return budget_id

    def get_budget(self, user_id: int, budget_id: int) -> Budget:
        """Get a budget owned by user_id.

        Raises:
            NotFoundError: If the budget doesn't exist for this user
        """
        budget = self.db.get_budget(budget_id)
        if budget is None or budget.user_id != user_id:
            raise NotFoundError(budget_not_found(budget_id))
        return budget

    def list_budgets(
        self, user_id: int, active_only: bool = False, today: Optional[date] = None
    ) -> list[Budget]:
        """List a user's budgets, optionally only those active today."""
        budgets = self.db.list_budgets(user_id)
        if active_only:
            budgets = [b for b in budgets if is_active(b, today)]
        return budgets

    def update_budget(
        self,
        user_id: int,
        budget_id: int,
        name: str,
        amount: MoneyLike,
        start_date: date,
        end_date: date,
        category_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> Budget:
        """Replace a budget's definition and re-check its thresholds.

        Raises:
            ValidationError: If any value is invalid
            NotFoundError: If the budget or category doesn't exist
        """
        budget = self.get_budget(user_id, budget_id)
        name = require_name(name, "Budget name")
        money = _validate_amount(amount)
        _validate_window(start_date, end_date)
        description = require_optional_text(description, "Description")
        if category_id is not None and self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

        budget = replace(
            budget,
            name=name,
            amount=money,
            start_date=start_date,
            end_date=end_date,
            category_id=category_id,
            description=description,
        )
        return self._evaluate_and_save(budget)

    def delete_budget(self, user_id: int, budget_id: int) -> None:
        """Delete a budget owned by user_id."""
        self.get_budget(user_id, budget_id)
        self.db.delete_budget(budget_id)

    def calculate_spent(self, budget: Budget) -> Money:
        """Total expenses in the budget's scope and window."""
        transactions = self.db.list_transactions(
            user_id=budget.user_id,
            start_date=budget.start_date,
            end_date=budget.end_date,
            category_id=budget.category_id,
            transaction_type=TransactionType.EXPENSE,
        )
        return ledger.total_expenses(transactions)

    def get_budget_status(
        self, user_id: int, budget_id: int, today: Optional[date] = None
    ) -> BudgetStatus:
        """Compute the spending state of a budget."""
        budget = self.get_budget(user_id, budget_id)
        return self.build_status(budget, today=today)

    def list_budget_statuses(
        self, user_id: int, active_only: bool = False, today: Optional[date] = None
    ) -> list[BudgetStatus]:
        """Compute spending state for each of a user's budgets."""
        return [
            self.build_status(budget, today=today)
            for budget in self.list_budgets(user_id, active_only=active_only, today=today)
        ]

    def build_status(self, budget: Budget, today: Optional[date] = None) -> BudgetStatus:
        spent = self.calculate_spent(budget)
        return BudgetStatus(
            budget=budget,
            spent=spent,
            remaining=remaining(budget.amount, spent),
            utilization=utilization(spent, budget.amount),
            exceeded=is_exceeded(spent, budget.amount),
            active=is_active(budget, today),
            days_remaining=days_remaining(budget, today),
            total_days=total_days(budget),
        )

    def refresh_budget(self, user_id: int, budget_id: int) -> Budget:
        """Recompute spend for a budget and notify on new thresholds."""
        budget = self.get_budget(user_id, budget_id)
        return self._evaluate_and_save(budget)

    def refresh_budgets_for_transaction(self, transaction: Transaction) -> list[Budget]:
        """Refresh every budget of the owner that the transaction falls into.

        Returns:
            The budgets that were refreshed
        """
        refreshed = []
        for budget in self.db.list_budgets(transaction.user_id):
            if covers(budget, transaction):
                refreshed.append(self._evaluate_and_save(budget))
        return refreshed

    def _evaluate_and_save(self, budget: Budget) -> Budget:
        spent = self.calculate_spent(budget)
        percentage = utilization(spent, budget.amount)
        saved = self.notifier.save_and_notify(
            budget, ProgressSubject.BUDGET, percentage, self.db.save_budget
        )
        logger.info(
            "budget_refreshed",
            budget_id=saved.id,
            spent=str(spent),
            utilization=str(percentage),
        )
        return saved
