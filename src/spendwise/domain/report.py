"""Financial summary and trend reports."""

from datetime import date, timedelta
from typing import Optional

from spendwise.database.base import Database
from spendwise.domain import ledger
from spendwise.domain.entities import (
    FinancialSummary,
    Transaction,
    TransactionType,
    TrendPoint,
    TrendReport,
)
from spendwise.domain.errors import ValidationError
from spendwise.domain.money import Money

EXPENSE_COLORS = (
    "#ef4444", "#f97316", "#f59e0b", "#eab308", "#84cc16",
    "#22c55e", "#10b981", "#14b8a6", "#06b6d4", "#0ea5e9",
    "#3b82f6", "#6366f1", "#8b5cf6", "#a855f7", "#d946ef",
)

INCOME_COLORS = (
    "#10b981", "#059669", "#047857", "#065f46", "#064e3b",
    "#22c55e", "#16a34a", "#15803d", "#166534", "#14532d",
    "#84cc16", "#65a30d", "#4d7c0f", "#365314", "#1a2e05",
)


def chart_color(index: int, transaction_type: TransactionType) -> str:
    """Palette color for the index-th group of a chart, wrapping around."""
    palette = EXPENSE_COLORS if transaction_type == TransactionType.EXPENSE else INCOME_COLORS
    return palette[index % len(palette)]


def _palette_for(
    transactions: list[Transaction], transaction_type: TransactionType
) -> dict[str, str]:
    names = sorted(
        {txn.category_name for txn in transactions if txn.transaction_type == transaction_type}
    )
    return {name: chart_color(i, transaction_type) for i, name in enumerate(names)}


def _validate_range(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise ValidationError(
            f"Start date {start_date} must not be after end date {end_date}"
        )


def fill_missing_days(
    points: list[TrendPoint], start_date: date, end_date: date
) -> list[TrendPoint]:
    """Return one point per day in the range, zero-filled where absent."""
    by_day = {point.day: point for point in points}
    filled = []
    day = start_date
    while day <= end_date:
        filled.append(
            by_day.get(day, TrendPoint(day=day, income=Money.zero(), expense=Money.zero()))
        )
        day += timedelta(days=1)
    return filled


class ReportService:
    """Service for building financial reports."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def financial_summary(
        self, user_id: int, start_date: date, end_date: date
    ) -> FinancialSummary:
        """Summarize income and expenses for a date range.

        Args:
            user_id: Owner of the transactions
            start_date: First day (inclusive)
            end_date: Last day (inclusive)

        Returns:
            FinancialSummary with totals and per-category breakdowns

        Raises:
            ValidationError: If start_date is after end_date
        """
        _validate_range(start_date, end_date)
        transactions = self.db.list_transactions(
            user_id=user_id, start_date=start_date, end_date=end_date
        )

        income_breakdown = ledger.category_breakdown(
            transactions,
            TransactionType.INCOME,
            colors=_palette_for(transactions, TransactionType.INCOME),
        )
        expense_breakdown = ledger.category_breakdown(
            transactions,
            TransactionType.EXPENSE,
            colors=_palette_for(transactions, TransactionType.EXPENSE),
        )

        return FinancialSummary(
            start_date=start_date,
            end_date=end_date,
            total_income=ledger.total_income(transactions),
            total_expenses=ledger.total_expenses(transactions),
            income_breakdown=tuple(income_breakdown),
            expense_breakdown=tuple(expense_breakdown),
        )

    def trend_report(
        self,
        user_id: int,
        start_date: date,
        end_date: date,
        fill_gaps: bool = False,
    ) -> TrendReport:
        """Daily income and expense series for a date range.

        Args:
            user_id: Owner of the transactions
            start_date: First day (inclusive)
            end_date: Last day (inclusive)
            fill_gaps: If True, include zero points for days without activity

        Returns:
            TrendReport ordered by date

        Raises:
            ValidationError: If start_date is after end_date
        """
        _validate_range(start_date, end_date)
        transactions = self.db.list_transactions(
            user_id=user_id, start_date=start_date, end_date=end_date
        )
        points = ledger.daily_totals(transactions)
        if fill_gaps:
            points = fill_missing_days(points, start_date, end_date)
        return TrendReport(start_date=start_date, end_date=end_date, points=tuple(points))

    def current_month_summary(
        self, user_id: int, today: Optional[date] = None
    ) -> FinancialSummary:
        """Summary from the first of the current month through today."""
        today = today or date.today()
        return self.financial_summary(user_id, today.replace(day=1), today)
