"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the Decimal to Money
conversion for every monetary column.
"""

from spendwise.domain import entities as domain
from spendwise.domain.money import Money
from spendwise.database.models import (
    User as ORMUser,
    Category as ORMCategory,
    Transaction as ORMTransaction,
    Budget as ORMBudget,
    Goal as ORMGoal,
    Notification as ORMNotification,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        username=orm_user.username,
        email=orm_user.email,
        created_at=orm_user.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        category_type=orm_category.category_type,
        color=orm_category.color,
        description=orm_category.description,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        user_id=orm_transaction.user_id,
        category_id=orm_transaction.category_id,
        category_name=orm_transaction.category.name,
        amount=Money.of(orm_transaction.amount),
        transaction_type=orm_transaction.transaction_type,
        description=orm_transaction.description,
        occurred_at=orm_transaction.occurred_at,
        created_at=orm_transaction.created_at,
        notes=orm_transaction.notes,
    )


def budget_to_domain(orm_budget: ORMBudget) -> domain.Budget:
    """Convert SQLAlchemy Budget model to domain Budget entity."""
    return domain.Budget(
        id=orm_budget.id,
        user_id=orm_budget.user_id,
        name=orm_budget.name,
        amount=Money.of(orm_budget.amount),
        start_date=orm_budget.start_date,
        end_date=orm_budget.end_date,
        created_at=orm_budget.created_at,
        category_id=orm_budget.category_id,
        description=orm_budget.description,
        last_notification_percentage=orm_budget.last_notification_percentage,
        version=orm_budget.version,
    )


def goal_to_domain(orm_goal: ORMGoal) -> domain.Goal:
    """Convert SQLAlchemy Goal model to domain Goal entity."""
    return domain.Goal(
        id=orm_goal.id,
        user_id=orm_goal.user_id,
        name=orm_goal.name,
        target_amount=Money.of(orm_goal.target_amount),
        current_amount=Money.of(orm_goal.current_amount),
        target_date=orm_goal.target_date,
        status=orm_goal.status,
        created_at=orm_goal.created_at,
        completed_at=orm_goal.completed_at,
        description=orm_goal.description,
        last_notification_percentage=orm_goal.last_notification_percentage,
        version=orm_goal.version,
    )


def notification_to_domain(orm_notification: ORMNotification) -> domain.Notification:
    """Convert SQLAlchemy Notification model to domain Notification entity."""
    return domain.Notification(
        id=orm_notification.id,
        user_id=orm_notification.user_id,
        message=orm_notification.message,
        is_read=orm_notification.is_read,
        created_at=orm_notification.created_at,
    )
