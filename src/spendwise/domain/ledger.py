"""Aggregations over transaction collections.

Every function here is pure: callers pass transactions that are already
filtered to one owner and date range.
"""

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional, Sequence

from spendwise.domain.entities import (
    CategoryBreakdown,
    Transaction,
    TransactionType,
    TrendPoint,
)
from spendwise.domain.errors import InvalidArgumentError
from spendwise.domain.money import Money


def _require(transactions: Optional[Iterable[Transaction]]) -> Sequence[Transaction]:
    if transactions is None:
        raise InvalidArgumentError("Transactions collection cannot be None")
    return list(transactions)


def total_income(transactions: Iterable[Transaction]) -> Money:
    """Sum of income amounts."""
    txns = _require(transactions)
    return Money.sum(txn.amount for txn in txns if txn.is_income)


def total_expenses(transactions: Iterable[Transaction]) -> Money:
    """Sum of expense amounts (as a positive value)."""
    txns = _require(transactions)
    return Money.sum(txn.amount for txn in txns if txn.is_expense)


def net_balance(transactions: Iterable[Transaction]) -> Money:
    """Income minus expenses."""
    txns = _require(transactions)
    return total_income(txns) - total_expenses(txns)


def category_totals(transactions: Iterable[Transaction]) -> dict[str, Money]:
    """Unsigned total per category name, regardless of direction."""
    txns = _require(transactions)
    totals: dict[str, Money] = defaultdict(Money.zero)
    for txn in txns:
        totals[txn.category_name] = totals[txn.category_name] + txn.amount
    return dict(totals)


def category_breakdown(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
    colors: Optional[dict[str, str]] = None,
) -> list[CategoryBreakdown]:
    """Per-category totals for one direction, sorted by category name.

    Args:
        transactions: Transactions to aggregate
        transaction_type: Direction to include
        colors: Optional mapping of category name to display color

    Returns:
        List of CategoryBreakdown rows
    """
    txns = _require(transactions)
    totals: dict[str, Money] = defaultdict(Money.zero)
    counts: dict[str, int] = defaultdict(int)
    for txn in txns:
        if txn.transaction_type != transaction_type:
            continue
        totals[txn.category_name] = totals[txn.category_name] + txn.amount
        counts[txn.category_name] += 1

    colors = colors or {}
    return [
        CategoryBreakdown(
            category_name=name,
            total=totals[name],
            count=counts[name],
            color=colors.get(name, ""),
        )
        for name in sorted(totals)
    ]


def daily_totals(transactions: Iterable[Transaction]) -> list[TrendPoint]:
    """Income and expense per day, ordered by date.

    Only days with at least one transaction are returned.
    """
    txns = _require(transactions)
    income: dict[date, Money] = defaultdict(Money.zero)
    expense: dict[date, Money] = defaultdict(Money.zero)
    for txn in txns:
        day = txn.occurred_on
        if txn.is_income:
            income[day] = income[day] + txn.amount
            expense.setdefault(day, Money.zero())
        else:
            expense[day] = expense[day] + txn.amount
            income.setdefault(day, Money.zero())

    return [
        TrendPoint(day=day, income=income[day], expense=expense[day])
        for day in sorted(income)
    ]
