"""Tests for financial reports."""

from datetime import date, datetime

import pytest

from spendwise.domain.entities import TransactionType
from spendwise.domain.errors import ValidationError
from spendwise.domain.money import Money
from spendwise.domain.report import EXPENSE_COLORS, INCOME_COLORS, chart_color


@pytest.fixture
def march_transactions(transaction_service, sample_user, sample_categories):
    def record(amount, kind, category, day):
        transaction_service.record_transaction(
            user_id=sample_user.id,
            amount=amount,
            transaction_type=kind,
            category_id=sample_categories[category],
            description=f"{category} {day}",
            occurred_at=datetime(2024, 3, day, 10, 0),
        )

    record("5000000", TransactionType.INCOME, "Salary", 1)
    record("1200000", TransactionType.INCOME, "Freelance", 15)
    record("150.75", TransactionType.EXPENSE, "Groceries", 1)
    record("85.50", TransactionType.EXPENSE, "Transport", 31)


def test_financial_summary_totals(report_service, sample_user, march_transactions):
    summary = report_service.financial_summary(sample_user.id, date(2024, 3, 1), date(2024, 3, 31))

    assert summary.total_income == Money.of("6200000.00")
    assert summary.total_expenses == Money.of("236.25")
    assert summary.net_savings == Money.of("6199763.75")


def test_financial_summary_breakdowns(report_service, sample_user, march_transactions):
    summary = report_service.financial_summary(sample_user.id, date(2024, 3, 1), date(2024, 3, 31))

    assert [row.category_name for row in summary.income_breakdown] == ["Freelance", "Salary"]
    assert [row.category_name for row in summary.expense_breakdown] == ["Groceries", "Transport"]
    assert summary.expense_breakdown[0].total == Money.of("150.75")
    assert summary.expense_breakdown[0].count == 1
    assert [row.color for row in summary.expense_breakdown] == list(EXPENSE_COLORS[:2])
    assert [row.color for row in summary.income_breakdown] == list(INCOME_COLORS[:2])

    chart = summary.expense_chart
    assert [slice_.label for slice_ in chart] == ["Groceries", "Transport"]
    assert chart[1].value == Money.of("85.50")


def test_date_range_is_inclusive_whole_days(report_service, sample_user, march_transactions):
    summary = report_service.financial_summary(sample_user.id, date(2024, 3, 31), date(2024, 3, 31))
    assert summary.total_income == Money.zero()
    assert summary.total_expenses == Money.of("85.50")


def test_empty_range(report_service, sample_user):
    summary = report_service.financial_summary(sample_user.id, date(2024, 1, 1), date(2024, 1, 31))
    assert summary.total_income == Money.zero()
    assert summary.net_savings == Money.zero()
    assert summary.income_chart == ()
    assert summary.expense_breakdown == ()


def test_inverted_range_is_rejected(report_service, sample_user):
    with pytest.raises(ValidationError):
        report_service.financial_summary(sample_user.id, date(2024, 3, 2), date(2024, 3, 1))
    with pytest.raises(ValidationError):
        report_service.trend_report(sample_user.id, date(2024, 3, 2), date(2024, 3, 1))


def test_other_users_transactions_are_excluded(
    report_service, other_user, march_transactions
):
    summary = report_service.financial_summary(other_user.id, date(2024, 3, 1), date(2024, 3, 31))
    assert summary.total_income == Money.zero()


def test_trend_report_skips_empty_days(report_service, sample_user, march_transactions):
    report = report_service.trend_report(sample_user.id, date(2024, 3, 1), date(2024, 3, 31))

    assert report.labels == ["2024-03-01", "2024-03-15", "2024-03-31"]
    assert report.income_data == [Money.of(5_000_000), Money.of(1_200_000), Money.zero()]
    assert report.expense_data == [Money.of("150.75"), Money.zero(), Money.of("85.50")]


def test_trend_report_fill_gaps(report_service, sample_user, march_transactions):
    report = report_service.trend_report(
        sample_user.id, date(2024, 3, 1), date(2024, 3, 31), fill_gaps=True
    )
    assert len(report.points) == 31
    assert report.points[1].day == date(2024, 3, 2)
    assert report.points[1].income == Money.zero()
    assert report.points[1].expense == Money.zero()


def test_chart_color_wraps_around_palette():
    assert chart_color(0, TransactionType.EXPENSE) == "#ef4444"
    assert chart_color(15, TransactionType.EXPENSE) == "#ef4444"
    assert chart_color(1, TransactionType.INCOME) == "#059669"


def test_current_month_summary(report_service, sample_user, march_transactions):
    summary = report_service.current_month_summary(sample_user.id, today=date(2024, 3, 20))
    assert summary.start_date == date(2024, 3, 1)
    assert summary.end_date == date(2024, 3, 20)
    assert summary.total_income == Money.of("6200000.00")
    assert summary.total_expenses == Money.of("150.75")
