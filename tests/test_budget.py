"""Tests for budget tracking."""

from dataclasses import replace
from datetime import date, datetime

import pytest
from structlog.testing import capture_logs

from spendwise.domain import budget as budget_math
from spendwise.domain.entities import Budget, TransactionType
from spendwise.domain.errors import (
    ConflictError,
    DivisionByZeroError,
    NotFoundError,
    ValidationError,
)
from spendwise.domain.money import Money

OCTOBER = (date(2024, 10, 1), date(2024, 10, 31))


def make_budget(**overrides):
    values = dict(
        id=1,
        user_id=1,
        name="Food",
        amount=Money.of(100),
        start_date=OCTOBER[0],
        end_date=OCTOBER[1],
        created_at=datetime(2024, 9, 30),
    )
    values.update(overrides)
    return Budget(**values)


def record_expense(transaction_service, user_id, category_id, amount, day):
    return transaction_service.record_transaction(
        user_id=user_id,
        amount=amount,
        transaction_type=TransactionType.EXPENSE,
        category_id=category_id,
        description="expense",
        occurred_at=datetime(day.year, day.month, day.day, 12, 0),
    )


def test_utilization_remaining_and_exceeded():
    spent = Money.of(1_500_000) + Money.of(850_000)
    amount = Money.of(7_500_000)

    assert budget_math.utilization(spent, amount) == Money.of("31.33")
    assert budget_math.remaining(amount, spent) == Money.of("5150000.00")
    assert not budget_math.is_exceeded(spent, amount)


def test_over_budget():
    spent, amount = Money.of("120.50"), Money.of(100)
    assert budget_math.remaining(amount, spent) == Money.of("-20.50")
    assert budget_math.is_exceeded(spent, amount)
    assert not budget_math.is_exceeded(amount, amount)


def test_utilization_of_zero_budget_fails():
    with pytest.raises(DivisionByZeroError):
        budget_math.utilization(Money.of(5), Money.zero())


def test_active_window_is_inclusive():
    budget = make_budget()
    assert budget_math.is_active(budget, today=date(2024, 10, 1))
    assert budget_math.is_active(budget, today=date(2024, 10, 31))
    assert not budget_math.is_active(budget, today=date(2024, 11, 1))
    assert not budget_math.is_active(budget, today=date(2024, 9, 30))


def test_days_remaining_and_total_days():
    budget = make_budget()
    assert budget_math.days_remaining(budget, today=date(2024, 10, 21)) == 10
    assert budget_math.days_remaining(budget, today=date(2024, 10, 31)) == 0
    assert budget_math.days_remaining(budget, today=date(2024, 12, 1)) == 0
    assert budget_math.total_days(budget) == 31


def test_entity_rejects_inverted_window():
    with pytest.raises(ValidationError):
        make_budget(start_date=date(2024, 10, 2), end_date=date(2024, 10, 1))


def test_create_budget_validation(budget_service, sample_user, sample_categories):
    with pytest.raises(ValidationError):
        budget_service.create_budget(sample_user.id, "Food", 0, *OCTOBER)
    with pytest.raises(ValidationError):
        budget_service.create_budget(sample_user.id, "  ", 100, *OCTOBER)
    with pytest.raises(ValidationError):
        budget_service.create_budget(
            sample_user.id, "Food", 100, date(2024, 10, 31), date(2024, 10, 1)
        )
    with pytest.raises(NotFoundError):
        budget_service.create_budget(sample_user.id, "Food", 100, *OCTOBER, category_id=999)
    with pytest.raises(NotFoundError):
        budget_service.create_budget(999, "Food", 100, *OCTOBER)


def test_status_counts_only_scoped_expenses_in_window(
    budget_service, transaction_service, sample_user, sample_categories
):
    groceries = sample_categories["Groceries"]
    budget_id = budget_service.create_budget(
        sample_user.id, "Food", 7_500_000, *OCTOBER, category_id=groceries
    )
    record_expense(transaction_service, sample_user.id, groceries, 1_500_000, date(2024, 10, 13))
    record_expense(transaction_service, sample_user.id, groceries, 850_000, date(2024, 10, 31))
    # Outside the window, other category, and income are all ignored
    record_expense(transaction_service, sample_user.id, groceries, 999, date(2024, 11, 1))
    record_expense(
        transaction_service, sample_user.id, sample_categories["Rent"], 500, date(2024, 10, 5)
    )
    transaction_service.record_transaction(
        user_id=sample_user.id,
        amount=100,
        transaction_type=TransactionType.INCOME,
        category_id=sample_categories["Salary"],
        description="salary",
        occurred_at=datetime(2024, 10, 2),
    )

    status = budget_service.get_budget_status(sample_user.id, budget_id, today=date(2024, 10, 21))

    assert status.spent == Money.of(2_350_000)
    assert status.utilization == Money.of("31.33")
    assert status.remaining == Money.of("5150000.00")
    assert not status.exceeded
    assert status.active
    assert status.days_remaining == 10
    assert status.total_days == 31


def test_unscoped_budget_covers_all_expense_categories(
    budget_service, transaction_service, sample_user, sample_categories
):
    budget_id = budget_service.create_budget(sample_user.id, "Everything", 1000, *OCTOBER)
    record_expense(
        transaction_service, sample_user.id, sample_categories["Groceries"], 40, date(2024, 10, 3)
    )
    record_expense(
        transaction_service, sample_user.id, sample_categories["Rent"], 60, date(2024, 10, 4)
    )

    status = budget_service.get_budget_status(sample_user.id, budget_id)
    assert status.spent == Money.of(100)


def test_recording_expense_fires_budget_notifications_once(
    budget_service,
    transaction_service,
    notification_service,
    sample_user,
    sample_categories,
):
    groceries = sample_categories["Groceries"]
    budget_id = budget_service.create_budget(
        sample_user.id, "Food", 100, *OCTOBER, category_id=groceries
    )

    record_expense(transaction_service, sample_user.id, groceries, 55, date(2024, 10, 2))
    assert budget_service.get_budget(sample_user.id, budget_id).last_notification_percentage == 50

    record_expense(transaction_service, sample_user.id, groceries, 5, date(2024, 10, 3))
    record_expense(transaction_service, sample_user.id, groceries, 50, date(2024, 10, 4))

    messages = [n.message for n in notification_service.list_notifications(sample_user.id)]
    assert messages == [
        "You have used the full amount of your budget 'Food'.",
        "You have used 50% of your budget 'Food'.",
    ]
    assert budget_service.get_budget(sample_user.id, budget_id).last_notification_percentage == 100


def test_expense_outside_budget_does_not_refresh_it(
    budget_service, transaction_service, sample_user, sample_categories
):
    budget_id = budget_service.create_budget(
        sample_user.id, "Food", 100, *OCTOBER, category_id=sample_categories["Groceries"]
    )
    record_expense(
        transaction_service, sample_user.id, sample_categories["Rent"], 500, date(2024, 10, 2)
    )
    budget = budget_service.get_budget(sample_user.id, budget_id)
    assert budget.last_notification_percentage is None
    assert budget.version == 1


def test_refresh_is_logged(budget_service, sample_user):
    budget_id = budget_service.create_budget(sample_user.id, "Food", 100, *OCTOBER)
    with capture_logs() as logs:
        budget_service.refresh_budget(sample_user.id, budget_id)
    assert any(entry["event"] == "budget_refreshed" for entry in logs)


def test_update_budget_rechecks_thresholds(
    budget_service, transaction_service, notification_service, sample_user, sample_categories
):
    groceries = sample_categories["Groceries"]
    budget_id = budget_service.create_budget(
        sample_user.id, "Food", 1000, *OCTOBER, category_id=groceries
    )
    record_expense(transaction_service, sample_user.id, groceries, 80, date(2024, 10, 2))
    assert notification_service.list_notifications(sample_user.id) == []

    updated = budget_service.update_budget(
        sample_user.id, budget_id, "Food", 100, *OCTOBER, category_id=groceries
    )

    assert updated.amount == Money.of(100)
    assert updated.last_notification_percentage == 75
    assert notification_service.unread_count(sample_user.id) == 1


def test_create_budget_over_existing_spend_notifies(
    budget_service, transaction_service, notification_service, sample_user, sample_categories
):
    groceries = sample_categories["Groceries"]
    record_expense(transaction_service, sample_user.id, groceries, 80, date(2024, 10, 2))

    budget_id = budget_service.create_budget(
        sample_user.id, "Food", 100, *OCTOBER, category_id=groceries
    )

    assert budget_service.get_budget(sample_user.id, budget_id).last_notification_percentage == 75
    messages = [n.message for n in notification_service.list_notifications(sample_user.id)]
    assert messages == ["You have used 75% of your budget 'Food'."]

    # A later expense below the next threshold does not repeat it
    record_expense(transaction_service, sample_user.id, groceries, 5, date(2024, 10, 3))
    assert notification_service.unread_count(sample_user.id) == 1


def test_create_budget_without_spend_is_silent(budget_service, notification_service, sample_user):
    budget_id = budget_service.create_budget(sample_user.id, "Food", 100, *OCTOBER)
    assert budget_service.get_budget(sample_user.id, budget_id).last_notification_percentage is None
    assert notification_service.list_notifications(sample_user.id) == []


def test_list_budgets_active_only(budget_service, sample_user):
    budget_service.create_budget(sample_user.id, "October", 100, *OCTOBER)
    budget_service.create_budget(
        sample_user.id, "November", 100, date(2024, 11, 1), date(2024, 11, 30)
    )
    active = budget_service.list_budgets(
        sample_user.id, active_only=True, today=date(2024, 11, 15)
    )
    assert [b.name for b in active] == ["November"]
    assert len(budget_service.list_budgets(sample_user.id)) == 2


def test_budget_is_owner_scoped(budget_service, sample_user, other_user):
    budget_id = budget_service.create_budget(sample_user.id, "Food", 100, *OCTOBER)
    with pytest.raises(NotFoundError):
        budget_service.get_budget(other_user.id, budget_id)
    with pytest.raises(NotFoundError):
        budget_service.delete_budget(other_user.id, budget_id)


def test_delete_budget(budget_service, sample_user):
    budget_id = budget_service.create_budget(sample_user.id, "Food", 100, *OCTOBER)
    budget_service.delete_budget(sample_user.id, budget_id)
    assert budget_service.list_budgets(sample_user.id) == []


def test_stale_budget_save_is_conflict(temp_db, budget_service, sample_user):
    budget_id = budget_service.create_budget(sample_user.id, "Food", 100, *OCTOBER)
    stale = temp_db.get_budget(budget_id)

    temp_db.save_budget(replace(stale, name="Groceries"))
    with pytest.raises(ConflictError):
        temp_db.save_budget(replace(stale, name="Dining"))
    assert temp_db.get_budget(budget_id).name == "Groceries"
