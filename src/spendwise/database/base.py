"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date, datetime

# Import entities directly to avoid circular import through domain/__init__.py
from spendwise.domain.entities import (
    Budget,
    Category,
    CategoryType,
    Goal,
    GoalStatus,
    Notification,
    Transaction,
    TransactionType,
    User,
)
from spendwise.domain.money import Money


class Database(ABC):
    """Abstract database interface for spendwise."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def create_user(self, username: str, email: str) -> int:
        """Create a new user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users."""
        pass

    @abstractmethod
    def delete_user(self, user_id: int) -> None:
        """Delete a user together with everything the user owns."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self,
        name: str,
        category_type: CategoryType,
        color: str,
        description: Optional[str] = None,
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by its unique name."""
        pass

    @abstractmethod
    def list_categories(self, category_type: Optional[CategoryType] = None) -> list[Category]:
        """List categories ordered by name, optionally filtered by type."""
        pass

    @abstractmethod
    def update_category(
        self,
        category_id: int,
        name: str,
        category_type: CategoryType,
        color: str,
        description: Optional[str] = None,
    ) -> None:
        """Update all category fields."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category."""
        pass

    @abstractmethod
    def get_category_transaction_count(self, category_id: int) -> int:
        """Get count of transactions referencing a category."""
        pass

    @abstractmethod
    def get_category_budget_count(self, category_id: int) -> int:
        """Get count of budgets scoped to a category."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        user_id: int,
        category_id: int,
        amount: Money,
        transaction_type: TransactionType,
        description: str,
        occurred_at: datetime,
        notes: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
        transaction_type: Optional[TransactionType] = None,
    ) -> list[Transaction]:
        """List a user's transactions with optional filters.

        Args:
            user_id: Owner of the transactions
            start_date: Optional first day (inclusive)
            end_date: Optional last day (inclusive)
            category_id: Optional category ID filter
            transaction_type: Optional direction filter
        """
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    # Budget operations
    @abstractmethod
    def create_budget(
        self,
        user_id: int,
        name: str,
        amount: Money,
        start_date: date,
        end_date: date,
        category_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a budget. Returns budget ID."""
        pass

    @abstractmethod
    def get_budget(self, budget_id: int) -> Optional[Budget]:
        """Get budget by ID."""
        pass

    @abstractmethod
    def list_budgets(self, user_id: int) -> list[Budget]:
        """List a user's budgets ordered by start date."""
        pass

    @abstractmethod
    def save_budget(self, budget: Budget) -> Budget:
        """Persist all mutable budget fields.

        Raises:
            ConflictError: If the stored version differs from budget.version
        """
        pass

    @abstractmethod
    def delete_budget(self, budget_id: int) -> None:
        """Delete a budget."""
        pass

    # Goal operations
    @abstractmethod
    def create_goal(
        self,
        user_id: int,
        name: str,
        target_amount: Money,
        target_date: date,
        description: Optional[str] = None,
    ) -> int:
        """Create an active goal with zero progress. Returns goal ID."""
        pass

    @abstractmethod
    def get_goal(self, goal_id: int) -> Optional[Goal]:
        """Get goal by ID."""
        pass

    @abstractmethod
    def list_goals(self, user_id: int, status: Optional[GoalStatus] = None) -> list[Goal]:
        """List a user's goals ordered by target date, optionally by status."""
        pass

    @abstractmethod
    def save_goal(self, goal: Goal) -> Goal:
        """Persist all mutable goal fields.

        Raises:
            ConflictError: If the stored version differs from goal.version
        """
        pass

    @abstractmethod
    def delete_goal(self, goal_id: int) -> None:
        """Delete a goal."""
        pass

    # Notification operations
    @abstractmethod
    def create_notification(self, user_id: int, message: str) -> int:
        """Append a notification for a user. Returns notification ID."""
        pass

    @abstractmethod
    def get_notification(self, notification_id: int) -> Optional[Notification]:
        """Get notification by ID."""
        pass

    @abstractmethod
    def list_notifications(self, user_id: int, unread_only: bool = False) -> list[Notification]:
        """List a user's notifications, newest first."""
        pass

    @abstractmethod
    def mark_notifications_read(self, user_id: int, notification_id: Optional[int] = None) -> int:
        """Mark one notification (or all of a user's) as read. Returns count updated."""
        pass
