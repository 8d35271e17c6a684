"""Transaction domain service."""

from datetime import date, datetime
from typing import Optional

from spendwise.database.base import Database
from spendwise.domain.budget import BudgetService
from spendwise.domain.entities import Transaction, TransactionType
from spendwise.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    transaction_not_found,
    user_not_found,
)
from spendwise.domain.money import Money, MoneyLike
from spendwise.domain.validation import require_name, require_optional_text
from spendwise.log import get_logger

logger = get_logger(__name__)

DESCRIPTION_MAX_LENGTH = 200
NOTES_MAX_LENGTH = 500


class TransactionService:
    """Service for recording and querying transactions."""

    def __init__(self, db: Database, budget_service: Optional[BudgetService] = None):
        """Initialize transaction service.

        Args:
            db: Database instance
            budget_service: Budget service refreshed after expenses
                (defaults to one backed by db)
        """
        self.db = db
        self.budget_service = budget_service or BudgetService(db)

    def record_transaction(
        self,
        user_id: int,
        amount: MoneyLike,
        transaction_type: TransactionType,
        category_id: int,
        description: str,
        occurred_at: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Record an income or expense.

        Recording an expense re-evaluates every budget it falls into.

        Args:
            user_id: Owner of the transaction
            amount: Positive amount
            transaction_type: INCOME or EXPENSE
            category_id: Category ID; its type must match transaction_type
            description: Short description
            occurred_at: When it happened (defaults to now)
            notes: Optional notes

        Returns:
            Transaction ID

        Raises:
            ValidationError: If any value is invalid
            NotFoundError: If the user or category doesn't exist
        """
        money = Money.of(amount)
        if not money.is_positive():
            raise ValidationError("Amount must be greater than zero")
        description = require_name(description, "Description", max_length=DESCRIPTION_MAX_LENGTH)
        notes = require_optional_text(notes, "Notes", max_length=NOTES_MAX_LENGTH)

        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        if category.category_type != transaction_type:
            raise ValidationError(
                f"Category '{category.name}' is for {category.category_type.display_name.lower()}, "
                f"not {transaction_type.display_name.lower()}"
            )

        transaction_id = self.db.create_transaction(
            user_id=user_id,
            category_id=category_id,
            amount=money,
            transaction_type=transaction_type,
            description=description,
            occurred_at=occurred_at or datetime.now(),
            notes=notes,
        )
        logger.info(
            "transaction_recorded",
            user_id=user_id,
            transaction_id=transaction_id,
            transaction_type=transaction_type.value,
            amount=str(money),
        )

        if transaction_type == TransactionType.EXPENSE:
            transaction = self.db.get_transaction(transaction_id)
            self.budget_service.refresh_budgets_for_transaction(transaction)

        return transaction_id

    def get_transaction(self, user_id: int, transaction_id: int) -> Transaction:
        """Get a transaction owned by user_id.

        Raises:
            NotFoundError: If the transaction doesn't exist for this user
        """
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None or transaction.user_id != user_id:
            raise NotFoundError(transaction_not_found(transaction_id))
        return transaction

    def list_transactions(
        self,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
        transaction_type: Optional[TransactionType] = None,
    ) -> list[Transaction]:
        """List transactions, newest first.

        Args:
            user_id: Owner of the transactions
            start_date: Optional first day (inclusive)
            end_date: Optional last day (inclusive)
            category_id: Optional category filter
            transaction_type: Optional direction filter

        Returns:
            List of transactions
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError(
                f"Start date {start_date} must not be after end date {end_date}"
            )
        return self.db.list_transactions(
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
            category_id=category_id,
            transaction_type=transaction_type,
        )

    def delete_transaction(self, user_id: int, transaction_id: int) -> None:
        self.get_transaction(user_id, transaction_id)
        self.db.delete_transaction(transaction_id)
