"""Shared pytest fixtures for spendwise tests."""

import os
import tempfile
from datetime import date, datetime, time

import pytest

from spendwise.database.factories import create_sqlite_database
from spendwise.domain.budget import BudgetService
from spendwise.domain.category import CategoryService
from spendwise.domain.entities import CategoryType
from spendwise.domain.goal import GoalService
from spendwise.domain.notification import NotificationService
from spendwise.domain.report import ReportService
from spendwise.domain.transaction import TransactionService
from spendwise.domain.user import UserService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_service(temp_db):
    return UserService(temp_db)


@pytest.fixture
def category_service(temp_db):
    return CategoryService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    return BudgetService(temp_db)


@pytest.fixture
def transaction_service(temp_db, budget_service):
    return TransactionService(temp_db, budget_service=budget_service)


@pytest.fixture
def goal_service(temp_db):
    return GoalService(temp_db)


@pytest.fixture
def notification_service(temp_db):
    return NotificationService(temp_db)


@pytest.fixture
def report_service(temp_db):
    return ReportService(temp_db)


@pytest.fixture
def sample_user(user_service):
    """Create a sample user for testing."""
    user_id = user_service.create_user(username="alice", email="alice@example.com")
    return user_service.get_user(user_id)


@pytest.fixture
def other_user(user_service):
    user_id = user_service.create_user(username="bob", email="bob@example.com")
    return user_service.get_user(user_id)


@pytest.fixture
def sample_categories(category_service):
    """Create a few categories and return their IDs by name."""
    return {
        "Salary": category_service.create_category("Salary", CategoryType.INCOME),
        "Freelance": category_service.create_category("Freelance", CategoryType.INCOME),
        "Groceries": category_service.create_category("Groceries", CategoryType.EXPENSE),
        "Transport": category_service.create_category("Transport", CategoryType.EXPENSE),
        "Rent": category_service.create_category("Rent", CategoryType.EXPENSE),
    }


@pytest.fixture
def future_date():
    """A target date comfortably in the future."""
    return date(date.today().year + 2, 6, 1)


@pytest.fixture
def at_noon():
    """Build a datetime at noon on the given date."""

    def build(day: date) -> datetime:
        return datetime.combine(day, time(12, 0))

    return build


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
