"""Tests for user, category and transaction services."""

from datetime import date, datetime

import pytest

from spendwise.domain.category import DEFAULT_CATEGORIES, DEFAULT_COLOR
from spendwise.domain.entities import CategoryType, TransactionType
from spendwise.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
)
from spendwise.domain.money import Money


# Users


def test_create_user(user_service):
    user_id = user_service.create_user("  carol ", "carol@example.com")
    user = user_service.get_user(user_id)
    assert user.username == "carol"
    assert user_service.get_user_by_username("carol").id == user_id


def test_duplicate_username_is_conflict(user_service, sample_user):
    with pytest.raises(ConflictError):
        user_service.create_user("alice", "other@example.com")


def test_invalid_email(user_service):
    with pytest.raises(ValidationError):
        user_service.create_user("dave", "not-an-email")


def test_delete_user_cascades(
    user_service, goal_service, transaction_service, temp_db, sample_user, sample_categories
):
    goal_service.create_goal(sample_user.id, "Trip", 100, date(date.today().year + 1, 1, 1))
    transaction_service.record_transaction(
        sample_user.id, 10, TransactionType.EXPENSE, sample_categories["Rent"], "rent"
    )
    user_service.delete_user(sample_user.id)

    assert user_service.get_user(sample_user.id) is None
    assert temp_db.list_goals(sample_user.id) == []
    assert temp_db.list_transactions(sample_user.id) == []


def test_delete_missing_user(user_service):
    with pytest.raises(NotFoundError):
        user_service.delete_user(42)


# Categories


def test_create_category_defaults_color(category_service):
    category_id = category_service.create_category("Pets", CategoryType.EXPENSE)
    category = category_service.get_category(category_id)
    assert category.color == DEFAULT_COLOR
    assert category.category_type == CategoryType.EXPENSE


def test_category_name_is_unique(category_service, sample_categories):
    with pytest.raises(ConflictError):
        category_service.create_category("Salary", CategoryType.INCOME)


def test_invalid_color(category_service):
    with pytest.raises(ValidationError):
        category_service.create_category("Pets", CategoryType.EXPENSE, color="blue")


def test_list_categories_by_type(category_service, sample_categories):
    income = category_service.list_categories(CategoryType.INCOME)
    assert [c.name for c in income] == ["Freelance", "Salary"]
    assert len(category_service.list_categories()) == 5


def test_update_category(category_service, sample_categories):
    category_id = sample_categories["Transport"]
    category_service.update_category(
        category_id, "Travel", CategoryType.EXPENSE, color="#112233", description="Trips"
    )
    category = category_service.get_category(category_id)
    assert category.name == "Travel"
    assert category.color == "#112233"

    with pytest.raises(ConflictError):
        category_service.update_category(category_id, "Rent", CategoryType.EXPENSE)


def test_require_category_by_name(category_service, sample_categories):
    assert category_service.require_category_by_name("Rent").id == sample_categories["Rent"]
    with pytest.raises(NotFoundError):
        category_service.require_category_by_name("Nope")


def test_delete_unused_category(category_service, sample_categories):
    category_service.delete_category(sample_categories["Rent"])
    assert category_service.get_category(sample_categories["Rent"]) is None


def test_delete_category_in_use_is_blocked(
    category_service, transaction_service, budget_service, sample_user, sample_categories
):
    rent = sample_categories["Rent"]
    transaction_service.record_transaction(
        sample_user.id, 10, TransactionType.EXPENSE, rent, "rent"
    )
    budget_service.create_budget(
        sample_user.id, "Rent", 1000, date(2024, 1, 1), date(2024, 12, 31), category_id=rent
    )
    with pytest.raises(DependencyError, match="1 transaction, 1 budget"):
        category_service.delete_category(rent)


def test_initialize_default_categories(category_service):
    assert category_service.initialize_default_categories() == len(DEFAULT_CATEGORIES)
    assert category_service.initialize_default_categories() == 0
    salary = category_service.require_category_by_name("Salary")
    assert salary.category_type == CategoryType.INCOME


# Transactions


def test_record_and_get_transaction(transaction_service, sample_user, sample_categories):
    when = datetime(2024, 5, 4, 18, 30)
    txn_id = transaction_service.record_transaction(
        sample_user.id,
        "12.345",
        TransactionType.EXPENSE,
        sample_categories["Groceries"],
        "Market",
        occurred_at=when,
        notes="weekly shop",
    )
    txn = transaction_service.get_transaction(sample_user.id, txn_id)
    assert txn.amount == Money.of("12.35")
    assert txn.category_name == "Groceries"
    assert txn.occurred_at == when
    assert txn.notes == "weekly shop"
    assert txn.signed_amount == Money.of("-12.35")


@pytest.mark.parametrize(
    "amount, description, notes",
    [
        (0, "ok", None),
        (-5, "ok", None),
        (5, "   ", None),
        (5, "x" * 201, None),
        (5, "ok", "n" * 501),
    ],
)
def test_record_transaction_validation(
    transaction_service, sample_user, sample_categories, amount, description, notes
):
    with pytest.raises(ValidationError):
        transaction_service.record_transaction(
            sample_user.id,
            amount,
            TransactionType.EXPENSE,
            sample_categories["Groceries"],
            description,
            notes=notes,
        )


def test_category_must_match_direction(transaction_service, sample_user, sample_categories):
    with pytest.raises(ValidationError, match="is for income"):
        transaction_service.record_transaction(
            sample_user.id, 5, TransactionType.EXPENSE, sample_categories["Salary"], "oops"
        )


def test_record_for_missing_user_or_category(transaction_service, sample_user, sample_categories):
    with pytest.raises(NotFoundError):
        transaction_service.record_transaction(
            999, 5, TransactionType.EXPENSE, sample_categories["Groceries"], "x"
        )
    with pytest.raises(NotFoundError):
        transaction_service.record_transaction(
            sample_user.id, 5, TransactionType.EXPENSE, 999, "x"
        )


def test_list_transactions_filters(transaction_service, sample_user, sample_categories):
    def record(amount, kind, category, day):
        return transaction_service.record_transaction(
            sample_user.id, amount, kind, sample_categories[category], category,
            occurred_at=datetime(2024, 6, day, 8, 0),
        )

    first = record(10, TransactionType.EXPENSE, "Groceries", 1)
    second = record(20, TransactionType.EXPENSE, "Rent", 2)
    third = record(30, TransactionType.INCOME, "Salary", 3)

    everything = transaction_service.list_transactions(sample_user.id)
    assert [t.id for t in everything] == [third, second, first]

    expenses = transaction_service.list_transactions(
        sample_user.id, transaction_type=TransactionType.EXPENSE
    )
    assert [t.id for t in expenses] == [second, first]

    in_range = transaction_service.list_transactions(
        sample_user.id, start_date=date(2024, 6, 2), end_date=date(2024, 6, 2)
    )
    assert [t.id for t in in_range] == [second]

    by_category = transaction_service.list_transactions(
        sample_user.id, category_id=sample_categories["Groceries"]
    )
    assert [t.id for t in by_category] == [first]

    with pytest.raises(ValidationError):
        transaction_service.list_transactions(
            sample_user.id, start_date=date(2024, 6, 3), end_date=date(2024, 6, 1)
        )


def test_delete_transaction_is_owner_scoped(
    transaction_service, sample_user, other_user, sample_categories
):
    txn_id = transaction_service.record_transaction(
        sample_user.id, 5, TransactionType.EXPENSE, sample_categories["Rent"], "rent"
    )
    with pytest.raises(NotFoundError):
        transaction_service.delete_transaction(other_user.id, txn_id)

    transaction_service.delete_transaction(sample_user.id, txn_id)
    with pytest.raises(NotFoundError):
        transaction_service.get_transaction(sample_user.id, txn_id)
