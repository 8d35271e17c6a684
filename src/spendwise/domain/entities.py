"""Domain model entities for spendwise.

These are pure data classes representing business concepts, independent of
database schema. Ownership is expressed through ``user_id`` fields rather than
object back-references; aggregates are changed by building a new instance
(``dataclasses.replace``) and saving it through the database layer.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from enum import Enum
from typing import Optional

from spendwise.domain.errors import ValidationError
from spendwise.domain.money import Money


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


# Categories share the same two kinds as transactions.
CategoryType = TransactionType


class GoalStatus(str, Enum):
    """Lifecycle status of a savings goal."""

    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class User:
    """Owner of transactions, budgets, goals and notifications."""

    id: int
    username: str
    email: str
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Shared category referenced by transactions and budgets."""

    id: int
    name: str
    category_type: CategoryType
    color: str
    description: Optional[str]


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``amount`` is always positive; the direction lives in ``transaction_type``.
    """

    id: int
    user_id: int
    category_id: int
    category_name: str
    amount: Money
    transaction_type: TransactionType
    description: str
    occurred_at: datetime
    created_at: datetime
    notes: Optional[str] = None

    @property
    def is_income(self) -> bool:
        return self.transaction_type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.transaction_type == TransactionType.EXPENSE

    @property
    def signed_amount(self) -> Money:
        """Positive for income, negative for expense."""
        return self.amount if self.is_income else self.amount.negate()

    @property
    def occurred_on(self) -> date:
        return self.occurred_at.date()


@dataclass(frozen=True)
class Budget:
    """Spending budget over an inclusive date window.

    A ``category_id`` of None means the budget covers all expenses.
    """

    id: int
    user_id: int
    name: str
    amount: Money
    start_date: date
    end_date: date
    created_at: datetime
    category_id: Optional[int] = None
    description: Optional[str] = None
    last_notification_percentage: Optional[int] = None
    version: int = 1

    def __post_init__(self) -> None:
        if self.start_date > self.end_date:
            raise ValidationError(
                f"Start date {self.start_date} must not be after end date {self.end_date}"
            )


@dataclass(frozen=True)
class Goal:
    """Savings goal entity."""

    id: int
    user_id: int
    name: str
    target_amount: Money
    target_date: date
    created_at: datetime
    current_amount: Money = field(default_factory=Money.zero)
    status: GoalStatus = GoalStatus.ACTIVE
    completed_at: Optional[datetime] = None
    description: Optional[str] = None
    last_notification_percentage: Optional[int] = None
    version: int = 1

    @property
    def remaining_amount(self) -> Money:
        """Target minus current; negative once the goal is exceeded."""
        return self.target_amount - self.current_amount

    @property
    def progress_percentage(self) -> Money:
        """Current as a percentage of target, or zero when target is zero."""
        if self.target_amount.is_zero():
            return Money.zero()
        return self.current_amount.percentage_of(self.target_amount)

    @property
    def is_completed(self) -> bool:
        """True when the saved amount has reached the target."""
        return self.current_amount >= self.target_amount

    def days_remaining(self, today: Optional[date] = None) -> int:
        today = today or date.today()
        if today > self.target_date:
            return 0
        return (self.target_date - today).days

    def is_overdue(self, today: Optional[date] = None) -> bool:
        today = today or date.today()
        return today > self.target_date and not self.is_completed


@dataclass(frozen=True)
class Notification:
    """Message stored for a user."""

    id: int
    user_id: int
    message: str
    is_read: bool
    created_at: datetime


@dataclass(frozen=True)
class BudgetStatus:
    """Computed state of a budget against its actual spend."""

    budget: Budget
    spent: Money
    remaining: Money
    utilization: Money
    exceeded: bool
    active: bool
    days_remaining: int
    total_days: int


@dataclass(frozen=True)
class GoalSummary:
    """Aggregate view over a user's active goals."""

    active_goals_count: int
    total_target_amount: Money
    total_current_amount: Money
    overall_progress_percentage: Money
    near_completion_count: int
    overdue_count: int
    completed_count: int

    @property
    def total_remaining_amount(self) -> Money:
        return self.total_target_amount - self.total_current_amount


@dataclass(frozen=True)
class CategoryBreakdown:
    """Per-category total for one transaction direction."""

    category_name: str
    total: Money
    count: int
    color: str = ""


@dataclass(frozen=True)
class ChartSlice:
    """Labelled value ready for a pie chart."""

    label: str
    value: Money
    color: str


@dataclass(frozen=True)
class FinancialSummary:
    """Income and expense totals with per-category breakdowns."""

    start_date: date
    end_date: date
    total_income: Money
    total_expenses: Money
    income_breakdown: tuple[CategoryBreakdown, ...] = ()
    expense_breakdown: tuple[CategoryBreakdown, ...] = ()

    @property
    def net_savings(self) -> Money:
        return self.total_income - self.total_expenses

    @property
    def income_chart(self) -> tuple[ChartSlice, ...]:
        return _chart_slices(self.income_breakdown)

    @property
    def expense_chart(self) -> tuple[ChartSlice, ...]:
        return _chart_slices(self.expense_breakdown)


def _chart_slices(rows: tuple[CategoryBreakdown, ...]) -> tuple[ChartSlice, ...]:
    # Charts only show groups with a positive total.
    return tuple(
        ChartSlice(label=row.category_name, value=row.total, color=row.color)
        for row in rows
        if row.total.is_positive()
    )


@dataclass(frozen=True)
class TrendPoint:
    """Income and expense for a single day."""

    day: date
    income: Money
    expense: Money


@dataclass(frozen=True)
class TrendReport:
    """Date-ordered daily income and expense series."""

    start_date: date
    end_date: date
    points: tuple[TrendPoint, ...] = ()

    @property
    def labels(self) -> list[str]:
        return [point.day.isoformat() for point in self.points]

    @property
    def income_data(self) -> list[Money]:
        return [point.income for point in self.points]

    @property
    def expense_data(self) -> list[Money]:
        return [point.expense for point in self.points]
